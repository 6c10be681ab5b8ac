"""
Authentication schemas for email/password authentication.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from .common import UserOut


class RegisterRequest(BaseModel):
    """Request model for registration."""
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")  # Policy checked by validators.validate_password
    headline: Optional[str] = Field(None, max_length=255, description="Professional headline")


class LoginRequest(BaseModel):
    """Request model for email/password login."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class PasswordResetRequest(BaseModel):
    """Request a password reset email."""
    email: EmailStr = Field(..., description="Address of the account to reset")


class PasswordResetConfirm(BaseModel):
    """New password submitted with a reset token."""
    password: str = Field(..., min_length=1, description="New password")


class AuthData(BaseModel):
    """Session token issued after login, registration or password reset."""
    token: str = Field(..., description="Bearer token for authenticated requests")
    expires_at: datetime = Field(..., description="Token expiration timestamp (UTC)")
    user: UserOut
