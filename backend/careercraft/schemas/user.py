"""User and profile schemas."""

from typing import Optional

from pydantic import BaseModel, field_validator


class ProfileUpdateRequest(BaseModel):
    industry: str = ""
    experience: Optional[int] = None
    bio: Optional[str] = None
    skills: list[str] = []

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, value):
        # The onboarding form sends a comma-separated string
        if isinstance(value, str):
            return [s.strip() for s in value.split(",") if s.strip()]
        return value if value is not None else []


class UserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    image_url: Optional[str] = None
    industry: Optional[str] = None
    experience: Optional[int] = None
    bio: Optional[str] = None
    skills: list[str]
    created_at: str

    class Config:
        from_attributes = True


class OnboardingStatusResponse(BaseModel):
    is_onboarded: bool
