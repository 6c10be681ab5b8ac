"""
User model for authentication and user management.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, TEXT, Uuid
from sqlalchemy.orm import relationship

from ..base import Base, TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """
    A member of the network. Referenced by posts, comments, connections,
    messages and jobs through its id.
    """
    __tablename__ = "users"

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    headline = Column(String(255))

    # Status info
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    last_login = Column(DateTime)

    # Password reset (sha256 of the emailed token)
    reset_password_token = Column(String(64), index=True)
    reset_password_expires_at = Column(DateTime)

    # Relationships
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
    profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class UserSession(Base, UUIDMixin, TimestampMixin):
    """
    Bearer session issued at login; expires_at is naive UTC.
    """
    __tablename__ = "user_sessions"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_token = Column(TEXT, unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False, index=True)
    last_activity = Column(DateTime, index=True)

    # Relationships
    user = relationship("User", back_populates="sessions")
