"""Resume service: one upserted resume per user plus AI section rewrites."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careercraft import prompts
from careercraft.errors import MissingInput, PersistenceFailed
from careercraft.models.resume import Resume
from careercraft.models.user import User
from careercraft.services import ai_client
from careercraft.services.response_parser import strip_fenced_blocks

logger = logging.getLogger(__name__)


def save_resume(db: Session, user: User, content: str) -> Resume:
    """Create the caller's resume, or overwrite it if one exists."""
    if content is None:
        raise MissingInput("Resume content is required", field="content")

    try:
        resume = db.query(Resume).filter(Resume.user_id == user.id).first()
        if resume:
            resume.content = content
        else:
            resume = Resume(user_id=user.id, content=content)
            db.add(resume)
        db.commit()
        db.refresh(resume)
        return resume
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error saving resume", extra={"user_id": user.id})
        raise PersistenceFailed("Failed to save resume. Please try again.")


def get_resume(db: Session, user: User) -> Resume | None:
    try:
        return db.query(Resume).filter(Resume.user_id == user.id).first()
    except SQLAlchemyError:
        logger.exception("Database error fetching resume", extra={"user_id": user.id})
        raise PersistenceFailed("Failed to fetch resume")


async def improve_with_ai(user: User, current: str, section_type: str) -> str:
    """Rewrite one resume section for the caller's industry."""
    if not current or not isinstance(current, str) or not current.strip():
        raise MissingInput("Resume content must be a non-empty string", field="current")
    if not section_type or not section_type.strip():
        raise MissingInput("Section type is required", field="type")

    text = await ai_client.generate_text(
        prompts.improve_resume_prompt(section_type, current, user.industry)
    )
    return strip_fenced_blocks(text)
