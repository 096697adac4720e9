"""Moderation endpoints: review queue, approve and reject."""

from __future__ import annotations

from fastapi import APIRouter

from plaza.api.v1.dependencies import CurrentUserDep, ModerationServiceDep
from plaza.schemas.post import ModerationAck, PostResponse

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.get("/queue", response_model=list[PostResponse])
async def get_moderation_queue(
    current_user: CurrentUserDep,
    moderation: ModerationServiceDep,
) -> list[PostResponse]:
    """Get pending posts the current user is allowed to moderate."""
    return [
        PostResponse.model_validate(post)
        for post in moderation.list_pending(current_user.id)
    ]


@router.put("/posts/{post_id}/approve", response_model=ModerationAck)
async def approve_post(
    post_id: str,
    current_user: CurrentUserDep,
    moderation: ModerationServiceDep,
) -> ModerationAck:
    """Approve a pending post."""
    post = moderation.approve(current_user.id, post_id)
    return ModerationAck(post_id=post.id, outcome="approved", msg="Post approved successfully")


@router.put("/posts/{post_id}/reject", response_model=ModerationAck)
async def reject_post(
    post_id: str,
    current_user: CurrentUserDep,
    moderation: ModerationServiceDep,
) -> ModerationAck:
    """Reject a pending post, deleting it."""
    deleted_id = moderation.reject(current_user.id, post_id)
    return ModerationAck(post_id=deleted_id, outcome="rejected", msg="Post rejected successfully")
