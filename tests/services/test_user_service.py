# tests/services/test_user_service.py
"""Tests for registration, authentication and password hashing."""

import pytest

from plaza.core import errors, security
from plaza.core.settings import settings
from plaza.services.user_service import authenticate_user, get_user, register_user


def test_register_sets_defaults(db_session) -> None:
    user = register_user(db_session, username="dana", email="Dana@Example.com", password="secret1")

    assert user.email == "dana@example.com"
    assert user.image == settings.default_avatar_url
    assert user.password_hash.startswith("$2b$04$")
    assert security.verify_password("secret1", user.password_hash)
    for field in ("posts", "bookmarks", "followers", "following", "visitors", "likes"):
        assert getattr(user, field) == []


@pytest.mark.parametrize(
    ("username", "email", "password"),
    [
        ("", "a@example.com", "secret1"),
        ("erin", "not-an-email", "secret1"),
        ("erin", "erin@example.com", "short"),
        ("erin", "erin@", "secret1"),
        ("erin", "erin@example.com", "x" * 73),
    ],
)
def test_register_validation(db_session, username, email, password) -> None:
    with pytest.raises(errors.ValidationError):
        register_user(db_session, username=username, email=email, password=password)


def test_register_duplicate_email(db_session, alice) -> None:
    with pytest.raises(errors.ValidationError, match="Email already in use"):
        register_user(db_session, username="other", email=alice.email, password="secret1")


def test_authenticate(db_session) -> None:
    user = register_user(db_session, username="finn", email="finn@example.com", password="hunter22")

    assert authenticate_user(db_session, email="finn@example.com", password="hunter22").id == user.id
    with pytest.raises(errors.Unauthorized):
        authenticate_user(db_session, email="finn@example.com", password="wrong-pass")
    with pytest.raises(errors.Unauthorized):
        authenticate_user(db_session, email="nobody@example.com", password="hunter22")


def test_get_user_errors(db_session) -> None:
    with pytest.raises(errors.NotFound):
        get_user(db_session, "1" * 32)
    with pytest.raises(errors.InvalidArgument):
        get_user(db_session, "nope")


def test_token_round_trip() -> None:
    token = security.create_access_token("2" * 32)
    assert security.decode_access_token(token) == "2" * 32
    with pytest.raises(errors.Unauthorized):
        security.decode_access_token("garbage.token.value")


def test_verify_password_rejects_malformed_hash() -> None:
    assert security.verify_password("anything", "no-separator") is False


def test_hash_password_is_salted() -> None:
    first = security.hash_password("same-password")
    second = security.hash_password("same-password")

    assert first != second
    assert security.verify_password("same-password", first)
    assert security.verify_password("same-password", second)
    assert not security.verify_password("other-password", first)
