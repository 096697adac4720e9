"""User profile and follow-graph endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from plaza.api.v1.dependencies import (
    CurrentUserDep,
    SessionDep,
    SocialGraphServiceDep,
    VisibilityServiceDep,
)
from plaza.schemas.post import PostResponse
from plaza.schemas.user import FollowResponse, UserResponse
from plaza.services.user_service import get_user, list_users

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserResponse])
async def get_users(current_user: CurrentUserDep, db: SessionDep) -> list[UserResponse]:
    """Get a list of all users."""
    return [UserResponse.model_validate(user) for user in list_users(db)]


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUserDep) -> UserResponse:
    """Get the current user's profile."""
    return UserResponse.model_validate(current_user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_by_id(
    user_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserResponse:
    """Get a user by id."""
    return UserResponse.model_validate(get_user(db, user_id))


@router.get("/{user_id}/posts", response_model=list[PostResponse])
async def get_user_posts(
    user_id: str,
    current_user: CurrentUserDep,
    visibility: VisibilityServiceDep,
) -> list[PostResponse]:
    """Get a user's approved posts."""
    return [PostResponse.model_validate(post) for post in visibility.list_user_posts(user_id)]


@router.get("/{user_id}/followers", response_model=list[UserResponse])
async def get_followers(
    user_id: str,
    current_user: CurrentUserDep,
    graph: SocialGraphServiceDep,
) -> list[UserResponse]:
    """Get the users following ``user_id``."""
    return [UserResponse.model_validate(user) for user in graph.followers(user_id)]


@router.get("/{user_id}/following", response_model=list[UserResponse])
async def get_following(
    user_id: str,
    current_user: CurrentUserDep,
    graph: SocialGraphServiceDep,
) -> list[UserResponse]:
    """Get the users ``user_id`` follows."""
    return [UserResponse.model_validate(user) for user in graph.following(user_id)]


@router.put("/{user_id}/follow", response_model=FollowResponse)
async def toggle_follow(
    user_id: str,
    current_user: CurrentUserDep,
    graph: SocialGraphServiceDep,
) -> FollowResponse:
    """Follow ``user_id``, or unfollow if already following."""
    state = graph.follow(current_user.id, user_id)
    return FollowResponse(state=state.value)
