"""
Email/password authentication routes.
"""
import logging
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..api.dependencies import ERROR_RESPONSES
from ..core.exceptions import BadRequestError, NotFoundError, ServerError, UnauthorizedError, ValidationError
from ..core.config import settings
from ..core.mailer import send_email
from ..core.security import generate_reset_token, get_password_hash, hash_reset_token
from ..core.validators import validate_name, validate_password
from ..crud import user as user_crud
from ..db.models.user import User
from ..db.session import get_db
from ..schemas.auth import AuthData, LoginRequest, PasswordResetConfirm, PasswordResetRequest, RegisterRequest
from ..schemas.common import ApiResponse, UserOut
from .dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", responses=ERROR_RESPONSES)


def _check_password(password: str) -> None:
    is_valid, error = validate_password(password)
    if not is_valid:
        raise ValidationError(error)


async def _session_payload(db: AsyncSession, user: User) -> Dict[str, Any]:
    session = await user_crud.create_session(db, user)
    return {
        "success": True,
        "data": {"token": session.session_token, "expires_at": session.expires_at, "user": user},
    }


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    tags=["Authentication"],
    summary="Register with email and password",
)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """
    Create an account and log it in.

    Names must be at least 2 letters; passwords need 8 characters with an
    upper-case letter, a lower-case letter and a digit.
    """
    for field, label in (("first_name", "First name"), ("last_name", "Last name")):
        is_valid, error = validate_name(getattr(payload, field), label)
        if not is_valid:
            raise ValidationError(error)
    _check_password(payload.password)

    user = await user_crud.create_user(
        db,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        headline=payload.headline,
    )
    logger.info(f"[AUTH] Registered {user.email}")
    return await _session_payload(db, user)


@router.post("/login", response_model=ApiResponse[AuthData], tags=["Authentication"])
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Exchange email and password for a session token."""
    user = await user_crud.authenticate_user(db, credentials.email, credentials.password)
    if not user or not user.is_active:
        logger.warning(f"[AUTH] Failed login for {credentials.email}")
        raise UnauthorizedError("Invalid credentials")

    logger.info(f"[AUTH] Login successful for {user.email}")
    return await _session_payload(db, user)


@router.get("/me", response_model=ApiResponse[UserOut], tags=["Authentication"])
async def me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user."""
    return {"success": True, "data": current_user}


@router.post("/password/reset", response_model=ApiResponse[Dict[str, str]], tags=["Authentication"])
async def request_password_reset(payload: PasswordResetRequest, db: AsyncSession = Depends(get_db)):
    """
    Email a one-time reset link. Only a hash of the token is stored, and it
    expires after ``RESET_TOKEN_EXPIRATION_MINUTES``.
    """
    user = await user_crud.get_user_by_email(db, payload.email)
    if not user:
        raise NotFoundError("There is no user with that email")

    token, token_hash, expires_at = generate_reset_token()
    user.reset_password_token = token_hash
    user.reset_password_expires_at = expires_at
    await db.flush()

    reset_url = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password/{token}"
    body = (
        f"Hi {user.full_name},\n\n"
        "You are receiving this email because you (or someone else) has requested "
        f"the reset of a password. Please follow this link to choose a new one:\n\n{reset_url}"
    )

    try:
        await send_email(user.email, "Password reset token", body)
    except Exception as e:
        logger.error(f"[AUTH] Reset email to {user.email} failed: {e}")
        user.reset_password_token = None
        user.reset_password_expires_at = None
        await db.flush()
        raise ServerError("Email could not be sent")

    return {"success": True, "data": {"message": "Email sent"}}


@router.put("/password/reset/{token}", response_model=ApiResponse[AuthData], tags=["Authentication"])
async def reset_password(token: str, payload: PasswordResetConfirm, db: AsyncSession = Depends(get_db)):
    """Set a new password using an emailed reset token and log the user in."""
    result = await db.execute(
        select(User).where(
            User.reset_password_token == hash_reset_token(token),
            User.reset_password_expires_at > datetime.utcnow(),
        )
    )
    user = result.scalar_one_or_none()
    if not user:
        raise BadRequestError("Invalid or expired reset token")

    _check_password(payload.password)

    user.password_hash = get_password_hash(payload.password)
    user.reset_password_token = None
    user.reset_password_expires_at = None
    await db.flush()
    logger.info(f"[AUTH] Password reset for {user.email}")
    return await _session_payload(db, user)
