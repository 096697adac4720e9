"""Post submission and read endpoints."""

from fastapi import APIRouter, Query, status

from plaza.api.v1.dependencies import (
    CurrentUserDep,
    ModerationServiceDep,
    VisibilityServiceDep,
)
from plaza.schemas.post import DeleteAck, PostCreate, PostResponse
from plaza.services.visibility import SortOrder

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    moderation: ModerationServiceDep,
) -> PostResponse:
    """Submit a post; it stays hidden until another user approves it."""
    post = moderation.submit(current_user.id, post_data.text)
    return PostResponse.model_validate(post)


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    current_user: CurrentUserDep,
    visibility: VisibilityServiceDep,
    sort: SortOrder = Query(SortOrder.MOST_RECENT_FIRST, description="Result ordering"),
) -> list[PostResponse]:
    """List approved posts."""
    return [PostResponse.model_validate(post) for post in visibility.list_approved(sort)]


@router.get("/pending/mine", response_model=list[PostResponse])
async def list_my_pending_posts(
    current_user: CurrentUserDep,
    moderation: ModerationServiceDep,
) -> list[PostResponse]:
    """List the current user's posts that are still awaiting moderation."""
    return [
        PostResponse.model_validate(post)
        for post in moderation.list_own_pending(current_user.id)
    ]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    current_user: CurrentUserDep,
    visibility: VisibilityServiceDep,
) -> PostResponse:
    """Get an approved post by id."""
    return PostResponse.model_validate(visibility.get_by_id(post_id, current_user.id))


@router.delete("/{post_id}", response_model=DeleteAck)
async def delete_post(
    post_id: str,
    current_user: CurrentUserDep,
    visibility: VisibilityServiceDep,
) -> DeleteAck:
    """Delete one of the current user's posts."""
    deleted_id = visibility.delete_post(current_user.id, post_id)
    return DeleteAck(post_id=deleted_id, msg="Post deleted successfully")
