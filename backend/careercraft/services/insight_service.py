"""Industry insight service: AI market snapshots shared per industry."""

import json
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careercraft import prompts
from careercraft.config import settings
from careercraft.errors import MissingInput, PersistenceFailed
from careercraft.models.industry_insight import IndustryInsight
from careercraft.models.user import User
from careercraft.services import ai_client
from careercraft.services.response_parser import (
    InsightPayload,
    parse_insight_payload,
    parse_json_reply,
)

logger = logging.getLogger(__name__)


async def generate_ai_insights(industry: str) -> InsightPayload:
    """Ask the model for an industry snapshot and apply per-field defaults."""
    if not industry or not industry.strip():
        raise MissingInput("Industry not provided", field="industry")

    text = await ai_client.generate_text(prompts.industry_insights_prompt(industry))
    data = parse_json_reply(text)
    return parse_insight_payload(data)


def build_insight(industry: str, payload: InsightPayload) -> IndustryInsight:
    now = datetime.now(timezone.utc)
    return IndustryInsight(
        industry=industry,
        salary_ranges=json.dumps(payload.salary_ranges),
        growth_rate=payload.growth_rate,
        demand_level=payload.demand_level,
        top_skills=json.dumps(payload.top_skills),
        market_outlook=payload.market_outlook,
        key_trends=json.dumps(payload.key_trends),
        recommended_skills=json.dumps(payload.recommended_skills),
        last_updated=now,
        next_update=now + timedelta(days=settings.INSIGHT_REFRESH_DAYS),
    )


def find_insight(db: Session, industry: str) -> IndustryInsight | None:
    try:
        return db.query(IndustryInsight).filter(IndustryInsight.industry == industry).first()
    except SQLAlchemyError:
        logger.exception("Failed to read industry insight", extra={"industry": industry})
        raise PersistenceFailed("Failed to fetch industry insights")


async def get_industry_insights(db: Session, user: User) -> IndustryInsight:
    """Return the caller's industry insight, generating it on first use."""
    if not user.industry:
        raise MissingInput("User industry not set", field="industry")

    existing = find_insight(db, user.industry)
    if existing:
        return existing

    payload = await generate_ai_insights(user.industry)
    insight = build_insight(user.industry, payload)
    try:
        db.add(insight)
        db.commit()
        db.refresh(insight)
    except SQLAlchemyError:
        db.rollback()
        # Another request may have created the row while we were generating
        existing = find_insight(db, user.industry)
        if existing:
            return existing
        logger.exception("Failed to store industry insight", extra={"industry": user.industry})
        raise PersistenceFailed("Failed to save industry insights")

    logger.info("Created industry insight", extra={"industry": user.industry})
    return insight
