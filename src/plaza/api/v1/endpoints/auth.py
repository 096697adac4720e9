"""Registration and login endpoints."""

from fastapi import APIRouter, status

from plaza.api.v1.dependencies import SessionDep
from plaza.core.security import create_access_token
from plaza.schemas.user import LoginRequest, RegisterRequest, TokenResponse
from plaza.services.user_service import authenticate_user, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: SessionDep) -> TokenResponse:
    """Register a new user and return a bearer token."""
    user = register_user(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
        bio=payload.bio,
        location=payload.location,
    )
    return TokenResponse(token=create_access_token(user.id), user_id=user.id)


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: SessionDep) -> TokenResponse:
    """Exchange credentials for a bearer token."""
    user = authenticate_user(db, email=payload.email, password=payload.password)
    return TokenResponse(token=create_access_token(user.id), user_id=user.id)
