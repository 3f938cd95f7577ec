"""User service: account sync, onboarding status and profile updates."""

import json
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from careercraft.errors import MissingInput, PersistenceFailed
from careercraft.models.user import User
from careercraft.services import insight_service

logger = logging.getLogger(__name__)


def check_user(db: Session, identity: dict) -> User:
    """Return the caller's user row, creating it on first authenticated access."""
    try:
        user = db.query(User).filter(User.clerk_user_id == identity["sub"]).first()
        if user:
            return user

        email = identity.get("email")
        if not email:
            raise MissingInput("Token has no email claim", field="email")

        user = User(
            clerk_user_id=identity["sub"],
            email=email,
            name=identity.get("name"),
            image_url=identity.get("picture"),
            skills="[]",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to sync user", extra={"subject": identity["sub"]})
        raise PersistenceFailed("Failed to sync user")

    logger.info("Created user", extra={"user_id": user.id})
    return user


def get_onboarding_status(db: Session, identity: dict) -> dict:
    try:
        user = db.query(User).filter(User.clerk_user_id == identity["sub"]).first()
    except SQLAlchemyError:
        logger.exception("Error checking onboarding status")
        raise PersistenceFailed("Failed to check onboarding status")
    return {"is_onboarded": bool(user and user.industry)}


PROFILE_FIELDS = ("experience", "bio", "skills")


def _apply_profile(user: User, industry: str, changes: dict) -> None:
    """Set the industry plus whichever optional fields the caller sent."""
    user.industry = industry
    for field in PROFILE_FIELDS:
        if field not in changes:
            continue
        value = changes[field]
        if field == "skills":
            value = json.dumps(value or [])
        setattr(user, field, value)


async def update_user(db: Session, user: User, industry: str, **changes) -> User:
    """Set the caller's profile, making sure their industry has an insight row.

    Only ``experience``, ``bio`` and ``skills`` passed in ``changes`` are
    written; fields left out keep their stored value. Insight generation
    happens before any write. The new insight row and the user update then
    commit together, or not at all.
    """
    if not industry or not industry.strip():
        raise MissingInput("Industry is required", field="industry")
    industry = industry.strip()

    insight = insight_service.find_insight(db, industry)
    new_insight = None
    if insight is None:
        payload = await insight_service.generate_ai_insights(industry)
        new_insight = insight_service.build_insight(industry, payload)

    try:
        if new_insight is not None:
            db.add(new_insight)
            db.flush()
        _apply_profile(user, industry, changes)
        db.commit()
    except IntegrityError:
        db.rollback()
        new_insight = None
        # Lost the race to create this industry's row; keep the winner's
        if insight_service.find_insight(db, industry) is None:
            logger.exception("Error updating user and industry", extra={"user_id": user.id})
            raise PersistenceFailed("Failed to update profile")
        try:
            _apply_profile(user, industry, changes)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Error updating user", extra={"user_id": user.id})
            raise PersistenceFailed("Failed to update profile")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating user and industry", extra={"user_id": user.id})
        raise PersistenceFailed("Failed to update profile")

    db.refresh(user)
    if new_insight is not None:
        logger.info("Created industry insight", extra={"industry": industry})
    return user

