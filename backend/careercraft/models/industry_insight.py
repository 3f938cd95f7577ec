"""Industry insight model: one shared market snapshot per industry."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, DateTime, Text
from sqlalchemy.orm import relationship

from careercraft.database import Base


class IndustryInsight(Base):
    __tablename__ = "industry_insights"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    industry = Column(String(255), unique=True, nullable=False, index=True)

    salary_ranges = Column(Text, nullable=False, default="[]")  # JSON: [{role, min, max, median, location}]
    growth_rate = Column(Float, nullable=False, default=0.0)
    demand_level = Column(String(20), nullable=False, default="Medium")  # High | Medium | Low
    top_skills = Column(Text, nullable=False, default="[]")
    market_outlook = Column(String(20), nullable=False, default="Neutral")  # Positive | Neutral | Negative
    key_trends = Column(Text, nullable=False, default="[]")
    recommended_skills = Column(Text, nullable=False, default="[]")

    last_updated = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    next_update = Column(DateTime, nullable=False)

    users = relationship("User", back_populates="industry_insight")
