"""Cover letters router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careercraft.database import get_db
from careercraft.models.cover_letter import CoverLetter
from careercraft.models.user import User
from careercraft.schemas.cover_letter import CoverLetterRequest, CoverLetterResponse
from careercraft.middleware.auth import get_current_user
from careercraft.services import cover_letter_service

router = APIRouter(prefix="/api/cover-letters", tags=["cover-letters"])


def cover_letter_response(letter: CoverLetter) -> CoverLetterResponse:
    return CoverLetterResponse(
        id=letter.id,
        user_id=letter.user_id,
        content=letter.content,
        job_title=letter.job_title,
        company_name=letter.company_name,
        job_description=letter.job_description,
        status=letter.status,
        created_at=letter.created_at.isoformat(),
    )


@router.post("", response_model=CoverLetterResponse, status_code=201)
async def generate_cover_letter(
    req: CoverLetterRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Generate a cover letter for a job and store it."""
    letter = await cover_letter_service.generate_cover_letter(
        db,
        current_user,
        job_title=req.job_title,
        company_name=req.company_name,
        job_description=req.job_description,
    )
    return cover_letter_response(letter)


@router.get("", response_model=list[CoverLetterResponse])
def list_cover_letters(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [cover_letter_response(c) for c in cover_letter_service.get_cover_letters(db, current_user)]


@router.get("/{letter_id}", response_model=CoverLetterResponse)
def get_cover_letter(
    letter_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cover_letter_response(cover_letter_service.get_cover_letter(db, current_user, letter_id))


@router.delete("/{letter_id}", response_model=CoverLetterResponse)
def delete_cover_letter(
    letter_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete one of the caller's cover letters."""
    return cover_letter_response(cover_letter_service.delete_cover_letter(db, current_user, letter_id))
