"""Users router: account sync, onboarding status and profile updates."""

import json

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from careercraft.database import get_db
from careercraft.models.user import User
from careercraft.schemas.user import (
    OnboardingStatusResponse,
    ProfileUpdateRequest,
    UserResponse,
)
from careercraft.middleware.auth import get_current_user, get_identity
from careercraft.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        image_url=user.image_url,
        industry=user.industry,
        experience=user.experience,
        bio=user.bio,
        skills=json.loads(user.skills) if user.skills else [],
        created_at=user.created_at.isoformat(),
    )


@router.post("/sync", response_model=UserResponse)
def sync_user(
    identity: dict = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Return the caller's account, creating it on first sign-in."""
    return user_response(user_service.check_user(db, identity))


@router.get("/onboarding-status", response_model=OnboardingStatusResponse)
def onboarding_status(
    identity: dict = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return OnboardingStatusResponse(**user_service.get_onboarding_status(db, identity))


@router.get("/me", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return user_response(current_user)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    req: ProfileUpdateRequest,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the profile; creates the industry's insight row if it is new."""
    changes = req.model_dump(exclude_unset=True)
    industry = changes.pop("industry", "")
    user = await user_service.update_user(db, current_user, industry, **changes)
    response.headers["X-Revalidate-Path"] = "/"
    return user_response(user)
