"""Cover letter service: generation, listing and deletion."""

import json
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careercraft import prompts
from careercraft.errors import MissingInput, MalformedResponse, NotFound, PersistenceFailed
from careercraft.models.cover_letter import CoverLetter
from careercraft.models.user import User
from careercraft.services import ai_client
from careercraft.services.response_parser import strip_code_fences

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("job_title", "company_name", "job_description")


async def generate_cover_letter(
    db: Session,
    user: User,
    job_title: str,
    company_name: str,
    job_description: str,
) -> CoverLetter:
    values = {"job_title": job_title, "company_name": company_name, "job_description": job_description}
    missing = [name for name in REQUIRED_FIELDS if not (values[name] or "").strip()]
    if missing:
        raise MissingInput("Missing required fields", details={"fields": missing})

    prompt = prompts.cover_letter_prompt(
        job_title=job_title,
        company_name=company_name,
        job_description=job_description,
        industry=user.industry,
        experience=user.experience,
        skills=json.loads(user.skills) if user.skills else [],
        bio=user.bio,
    )
    content = strip_code_fences(await ai_client.generate_text(prompt))
    if not content:
        raise MalformedResponse("AI returned an empty cover letter")

    letter = CoverLetter(
        user_id=user.id,
        content=content,
        job_description=job_description,
        company_name=company_name,
        job_title=job_title,
        status="completed",
    )
    try:
        db.add(letter)
        db.commit()
        db.refresh(letter)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error saving cover letter", extra={"user_id": user.id})
        raise PersistenceFailed("Failed to generate cover letter")
    return letter


def get_cover_letters(db: Session, user: User) -> list[CoverLetter]:
    try:
        return (
            db.query(CoverLetter)
            .filter(CoverLetter.user_id == user.id)
            .order_by(CoverLetter.created_at.desc())
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Error fetching cover letters", extra={"user_id": user.id})
        raise PersistenceFailed("Failed to fetch cover letters")


def get_cover_letter(db: Session, user: User, letter_id: str) -> CoverLetter:
    try:
        letter = (
            db.query(CoverLetter)
            .filter(CoverLetter.id == letter_id, CoverLetter.user_id == user.id)
            .first()
        )
    except SQLAlchemyError:
        logger.exception("Error fetching cover letter", extra={"user_id": user.id})
        raise PersistenceFailed("Failed to fetch cover letter")
    if not letter:
        raise NotFound("Cover letter")
    return letter


def delete_cover_letter(db: Session, user: User, letter_id: str) -> CoverLetter:
    """Delete one of the caller's cover letters. Other users' ids are not found."""
    letter = get_cover_letter(db, user, letter_id)
    try:
        db.delete(letter)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting cover letter", extra={"user_id": user.id})
        raise PersistenceFailed("Failed to delete cover letter")
    return letter
