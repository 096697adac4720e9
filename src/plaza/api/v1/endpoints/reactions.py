"""Like, agree, deserve and comment endpoints."""

from fastapi import APIRouter, status

from plaza.api.v1.dependencies import (
    CurrentUserDep,
    ReactionServiceDep,
    SocialGraphServiceDep,
)
from plaza.schemas.post import CommentCreate, CommentResponse

router = APIRouter(prefix="/posts", tags=["reactions"])


@router.put("/{post_id}/like", response_model=list[str])
async def toggle_like(
    post_id: str,
    current_user: CurrentUserDep,
    graph: SocialGraphServiceDep,
) -> list[str]:
    """Like a post, or unlike it if already liked. Returns liker ids."""
    return graph.like_post(current_user.id, post_id)


@router.put("/{post_id}/agree", response_model=list[str])
async def agree(
    post_id: str,
    current_user: CurrentUserDep,
    reactions: ReactionServiceDep,
) -> list[str]:
    """Mark agreement with a post."""
    return reactions.agree(current_user.id, post_id)


@router.put("/{post_id}/deserve", response_model=list[str])
async def deserve(
    post_id: str,
    current_user: CurrentUserDep,
    reactions: ReactionServiceDep,
) -> list[str]:
    """Mark a post as deserved."""
    return reactions.deserve(current_user.id, post_id)


@router.post(
    "/{post_id}/comments",
    response_model=list[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: str,
    comment: CommentCreate,
    current_user: CurrentUserDep,
    reactions: ReactionServiceDep,
) -> list[CommentResponse]:
    """Comment on a post. Returns the comment log, newest first."""
    log = reactions.comment(current_user.id, post_id, comment.text)
    return [CommentResponse.model_validate(entry) for entry in log]
