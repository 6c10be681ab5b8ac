import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Tuple

# Import passlib for hashing
from passlib.context import CryptContext

from .config import settings

# --- Hashing Setup ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
# --- End Hashing Setup ---


def generate_session_token() -> str:
    """Opaque bearer token stored in the user_sessions table."""
    return secrets.token_urlsafe(48)


def session_expiry() -> datetime:
    # Naive UTC, compared against UserSession.expires_at in SQL
    return datetime.utcnow() + timedelta(minutes=settings.SESSION_EXPIRATION_MINUTES)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_reset_token() -> Tuple[str, str, datetime]:
    """
    Create a password reset token.

    Returns:
        Tuple of (plain token to email, sha256 hex to store, naive UTC expiry)
    """
    token = secrets.token_hex(20)
    expires_at = datetime.utcnow() + timedelta(minutes=settings.RESET_TOKEN_EXPIRATION_MINUTES)
    return token, hash_reset_token(token), expires_at
