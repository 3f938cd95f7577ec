"""SQLAlchemy ORM models."""

from careercraft.models.user import User
from careercraft.models.industry_insight import IndustryInsight
from careercraft.models.resume import Resume
from careercraft.models.cover_letter import CoverLetter
from careercraft.models.assessment import Assessment

__all__ = [
    "User",
    "IndustryInsight",
    "Resume",
    "CoverLetter",
    "Assessment",
]
