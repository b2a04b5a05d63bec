"""User-centric API endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from ...deps import CurrentIdentityDependency, UserServiceDependency
from ...schemas import UserPublic

router = APIRouter(tags=["users"])


@router.get("/user", response_model=UserPublic, summary="Return the authenticated user")
def read_current_user(
    identity: CurrentIdentityDependency,
    users: UserServiceDependency,
) -> UserPublic:
    return UserPublic.model_validate(users.get_user(identity.user_id))
