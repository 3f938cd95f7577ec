"""Resume router: save, fetch and AI-improve resume content."""

from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from careercraft.database import get_db
from careercraft.models.resume import Resume
from careercraft.models.user import User
from careercraft.schemas.resume import (
    ImproveRequest,
    ImproveResponse,
    ResumeResponse,
    ResumeSaveRequest,
)
from careercraft.middleware.auth import get_current_user
from careercraft.services import resume_service

router = APIRouter(prefix="/api/resume", tags=["resume"])


def resume_response(resume: Resume) -> ResumeResponse:
    return ResumeResponse(
        id=resume.id,
        user_id=resume.user_id,
        content=resume.content,
        ats_score=resume.ats_score,
        feedback=resume.feedback,
        created_at=resume.created_at.isoformat(),
        updated_at=resume.updated_at.isoformat(),
    )


@router.put("", response_model=ResumeResponse)
def save_resume(
    req: ResumeSaveRequest,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create or overwrite the caller's resume."""
    resume = resume_service.save_resume(db, current_user, req.content)
    response.headers["X-Revalidate-Path"] = "/resume"
    return resume_response(resume)


@router.get("", response_model=Optional[ResumeResponse])
def get_resume(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    resume = resume_service.get_resume(db, current_user)
    return resume_response(resume) if resume else None


@router.post("/improve", response_model=ImproveResponse)
async def improve_section(
    req: ImproveRequest,
    current_user: User = Depends(get_current_user),
):
    """Rewrite one resume section with the AI model."""
    improved = await resume_service.improve_with_ai(current_user, req.current, req.type)
    return ImproveResponse(improved=improved)
