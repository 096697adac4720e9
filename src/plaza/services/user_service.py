"""Registration and lookup of user accounts."""
from __future__ import annotations

import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.orm import Session

from plaza.core import errors, security
from plaza.core.settings import settings
from plaza.models.user import User
from plaza.repositories import UserRepository
from plaza.services.lookup import require_user

__all__ = [
    "register_user",
    "authenticate_user",
    "get_user",
    "list_users",
]

logger = logging.getLogger(__name__)


def register_user(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    bio: str | None = None,
    location: str | None = None,
) -> User:
    """Create an account with a hashed password and the default avatar.

    Raises:
        ValidationError: If a field is malformed or the email is already in use.
    """
    username = (username or "").strip()
    if not username:
        raise errors.ValidationError("Username is required")
    try:
        checked = validate_email((email or "").strip(), check_deliverability=False)
    except EmailNotValidError as err:
        raise errors.ValidationError("Please provide a valid email") from err
    email = checked.normalized.lower()
    password = password or ""
    if len(password) < settings.min_password_length:
        raise errors.ValidationError(
            f"Please enter a valid password ({settings.min_password_length} or more characters)"
        )
    if len(password.encode("utf-8")) > security.PASSWORD_MAX_BYTES:
        raise errors.ValidationError(
            f"Password must be at most {security.PASSWORD_MAX_BYTES} bytes long"
        )

    users = UserRepository(db)
    if users.get_by_email(email) is not None:
        raise errors.ValidationError("Email already in use")

    user = users.create(
        username=username,
        email=email,
        password_hash=security.hash_password(password),
        image=settings.default_avatar_url,
        bio=bio,
        location=location,
    )
    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(db: Session, *, email: str, password: str) -> User:
    """Return the user whose credentials match.

    Raises:
        Unauthorized: If the email is unknown or the password is wrong.
    """
    user = UserRepository(db).get_by_email((email or "").strip().lower())
    if user is None or not security.verify_password(password, user.password_hash):
        raise errors.Unauthorized("Invalid email or password")
    return user


def get_user(db: Session, user_id: str) -> User:
    """Return a single user by id."""
    return require_user(UserRepository(db), user_id)


def list_users(db: Session) -> list[User]:
    """Return all users."""
    return UserRepository(db).list_all()
