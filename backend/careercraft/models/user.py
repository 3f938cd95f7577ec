"""User model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from careercraft.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Subject id issued by the identity provider
    clerk_user_id = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(255), nullable=True)
    image_url = Column(Text, nullable=True)

    # Profile; industry stays NULL until onboarding
    industry = Column(String(255), ForeignKey("industry_insights.industry"), nullable=True)
    experience = Column(Integer, nullable=True)
    bio = Column(Text, nullable=True)
    skills = Column(Text, nullable=False, default="[]")  # JSON: ["skill", ...]

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    industry_insight = relationship("IndustryInsight", back_populates="users")
    resume = relationship("Resume", back_populates="user", uselist=False)
    cover_letters = relationship("CoverLetter", back_populates="user")
    assessments = relationship("Assessment", back_populates="user")
