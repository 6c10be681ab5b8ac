"""
Authentication dependencies for FastAPI.
"""
import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..db.models.user import User, UserSession
from ..db.session import get_db

# Configure logging
logger = logging.getLogger(__name__)

# OAuth2 scheme for token authentication
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    # Missing tokens are reported by get_current_user with the API's own message
    auto_error=False
)


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authorized to access this route",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Validate the bearer token and return the current user.
    Uses the session token stored in the UserSession table.

    Args:
        token: The session token from the Authorization header
        db: Database session

    Returns:
        User: The current authenticated user

    Raises:
        HTTPException: If authentication fails
    """
    if not token:
        raise _credentials_exception()

    # Get current time in UTC without timezone info
    current_time = datetime.utcnow()

    # Find the session with this token that hasn't expired
    result = await db.execute(
        select(UserSession).where(
            UserSession.session_token == token,
            UserSession.expires_at > current_time
        )
    )
    session = result.scalar_one_or_none()

    if not session:
        logger.debug("[AUTH] Session token not found or expired")
        raise _credentials_exception()

    # Update last activity time; committed with the request transaction
    session.last_activity = current_time

    result = await db.execute(select(User).where(User.id == session.user_id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active:
        logger.warning(f"[AUTH] Session {session.id} belongs to a missing or inactive user")
        raise _credentials_exception()

    return user
