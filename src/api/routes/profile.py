"""Profile routes for the authenticated user."""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_user_repo
from api.models import ProfileUpdateRequest, ProfileUpdateResponse, UserResponse
from api.security import get_current_user_required
from domain.model.user import User
from port.user_repository import UserRepository
from services import profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=UserResponse)
async def get_profile(
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Return the caller's full record, minus the password hash."""
    user = profile_service.get_profile(repo, current_user.id)
    return UserResponse.from_domain(user)


@router.put("", response_model=ProfileUpdateResponse)
async def update_profile(
    request: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Partially update the caller's profile."""
    user = profile_service.update_profile(repo, current_user.id, request.changes())

    logger.info("Profile saved", extra={"userId": current_user.id})

    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=UserResponse.from_domain(user),
    )
