"""Dashboard router: industry insights for the caller's industry."""

import json

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careercraft.database import get_db
from careercraft.models.industry_insight import IndustryInsight
from careercraft.models.user import User
from careercraft.schemas.insight import IndustryInsightResponse
from careercraft.middleware.auth import get_current_user
from careercraft.services import insight_service

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def insight_response(insight: IndustryInsight) -> IndustryInsightResponse:
    return IndustryInsightResponse(
        id=insight.id,
        industry=insight.industry,
        salary_ranges=json.loads(insight.salary_ranges),
        growth_rate=insight.growth_rate,
        demand_level=insight.demand_level,
        top_skills=json.loads(insight.top_skills),
        market_outlook=insight.market_outlook,
        key_trends=json.loads(insight.key_trends),
        recommended_skills=json.loads(insight.recommended_skills),
        last_updated=insight.last_updated.isoformat(),
        next_update=insight.next_update.isoformat(),
    )


@router.get("/insights", response_model=IndustryInsightResponse)
async def get_industry_insights(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get insights for the caller's industry, generating them on first request."""
    insight = await insight_service.get_industry_insights(db, current_user)
    return insight_response(insight)
