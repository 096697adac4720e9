"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from plaza.core import errors
from plaza.core.security import decode_access_token
from plaza.db.ids import is_valid_id
from plaza.db.session import get_db
from plaza.models import User
from plaza.repositories import UserRepository
from plaza.services import (
    ModerationService,
    ReactionService,
    SocialGraphService,
    VisibilityService,
)

# HTTP Bearer scheme; missing credentials are reported as Unauthorized below.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        Unauthorized: If the token is missing or invalid, or the user no longer exists
    """
    if credentials is None:
        raise errors.Unauthorized("Authentication required")
    user_id = decode_access_token(credentials.credentials)
    if not is_valid_id(user_id):
        raise errors.Unauthorized()
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise errors.Unauthorized("User not found")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_moderation_service(db: SessionDep) -> ModerationService:
    """Return a moderation service bound to the request session."""
    return ModerationService(db)


def get_social_graph_service(db: SessionDep) -> SocialGraphService:
    """Return a social graph service bound to the request session."""
    return SocialGraphService(db)


def get_reaction_service(db: SessionDep) -> ReactionService:
    """Return a reaction service bound to the request session."""
    return ReactionService(db)


def get_visibility_service(db: SessionDep) -> VisibilityService:
    """Return a visibility service bound to the request session."""
    return VisibilityService(db)


ModerationServiceDep = Annotated[ModerationService, Depends(get_moderation_service)]
SocialGraphServiceDep = Annotated[SocialGraphService, Depends(get_social_graph_service)]
ReactionServiceDep = Annotated[ReactionService, Depends(get_reaction_service)]
VisibilityServiceDep = Annotated[VisibilityService, Depends(get_visibility_service)]
