"""Authentication endpoints: registration, login, logout and the session cookie."""

from typing import Any, Optional
from fastapi import APIRouter, Cookie, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.config import get_settings
from components.core.exceptions import AuthenticationError, ConflictError
from components.core.init_db import get_db
from components.core.logging_config import get_logger
from components.core.schemas import MessageResponse
from components.core.security import (
    verify_password,
    create_access_token,
    verify_token,
)
from components.user.models import User
from components.user.repository import UserRepository
from components.user.schemas import UserCreate, UserLogin, User as UserSchema
from restapi.dependencies import get_user_repository

logger = get_logger(__name__)
settings = get_settings()

router = APIRouter(tags=["authentication"])


def set_session_cookie(response: Response, user: User) -> None:
    """Issue a signed session cookie for ``user``."""
    token = create_access_token(data={"sub": str(user.id)})
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    session: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
) -> User:
    """Get current user from the session cookie."""
    payload = verify_token(session) if session else None
    if payload is None or payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    user = await UserRepository(db).get_by_id(int(payload["sub"]))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


@router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def register(
    user_in: UserCreate,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
) -> Any:
    """Create a new user and log them in."""
    if await repo.get_by_username(user_in.username):
        raise ConflictError("Username already exists")
    if await repo.get_by_email(user_in.email):
        raise ConflictError("Email is already registered")

    user = await repo.create(user_in)
    set_session_cookie(response, user)
    logger.info(f"New user registered: {user.username}")
    return user


@router.post("/login", response_model=UserSchema)
async def login(
    credentials: UserLogin,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
) -> Any:
    """Check credentials and start a session."""
    user = await repo.get_by_email(credentials.email)
    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning(f"Login failed for {credentials.email}")
        raise AuthenticationError("Incorrect email or password")

    set_session_cookie(response, user)
    logger.info(f"Login successful for user: {user.username}")
    return user


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> Any:
    """End the session by clearing the cookie."""
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return MessageResponse(message="Logged out")
