"""Operator authentication endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from door_control.api.auth.schemas import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from door_control.config.logger import app_logger
from door_control.config.settings import settings
from door_control.db.db import get_session
from door_control.services import users as user_service
from door_control.utils.auth import CurrentUser, require_auth
from door_control.utils.local_tokens import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, session: AsyncSession = Depends(get_session)):
    """Authenticate an operator and return a bearer token."""
    user = await user_service.authenticate(session, request.username, request.password)
    if user is None:
        app_logger.warning(f"Failed login attempt for username: {request.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    access_token = create_access_token(user.id, user.username, user.role)
    app_logger.info(f"User logged in: {user.username} (ID: {user.id})")

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.LOCAL_AUTH_TOKEN_EXP_SECONDS,
        user=UserResponse.model_validate(user),
    )


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    current: CurrentUser = Depends(require_auth),
    session: AsyncSession = Depends(get_session),
):
    """Return the operator the bearer token belongs to."""
    user = await user_service.get_user_by_id(session, current.id)
    if user is None:
        # token outlived the account
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    current: CurrentUser = Depends(require_auth),
    session: AsyncSession = Depends(get_session),
):
    """Create another operator account. Only operators can create operators."""
    user = await user_service.create_user(
        session, request.username, request.password, request.role or "admin"
    )
    app_logger.info(f"User {user.username} (ID: {user.id}) registered by {current.username}")
    return user
