"""
CRUD operations for users and their login sessions.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError, NotFoundError
from ..core.permissions import ensure_owner
from ..core.security import generate_session_token, get_password_hash, session_expiry, verify_password
from ..db.models.connection import Connection
from ..db.models.job import Job
from ..db.models.message import Conversation, Message
from ..db.models.post import Comment, Post
from ..db.models.profile import Profile
from ..db.models.user import User, UserSession
from ..schemas.user import UserUpdate

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: UUID) -> Optional[User]:
    """
    Get a user by ID.

    Args:
        db: Database session
        user_id: User's UUID

    Returns:
        Optional[User]: User if found, None otherwise
    """
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_or_404(db: AsyncSession, user_id: UUID) -> User:
    user = await get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    """Get a user by email address (case-insensitive)."""
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    headline: Optional[str] = None,
) -> User:
    """
    Create a new user with a hashed password.

    Raises:
        ConflictError: If the email is already registered
    """
    email = email.strip().lower()
    if await get_user_by_email(db, email):
        raise ConflictError("Email is already registered")

    user = User(
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        email=email,
        password_hash=get_password_hash(password),
        headline=headline,
        is_active=True,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info(f"[USERS] Created user {user.id} ({email})")
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
    """
    Return the user when the email and password match, None otherwise.
    """
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


async def create_session(db: AsyncSession, user: User) -> UserSession:
    """
    Issue a new bearer session for ``user``.

    Expired sessions of the same user are removed first; other active
    sessions (other browsers or devices) are kept.
    """
    current_time = datetime.utcnow()
    await db.execute(
        delete(UserSession).where(
            UserSession.user_id == user.id,
            UserSession.expires_at < current_time,
        )
    )

    session = UserSession(
        user_id=user.id,
        session_token=generate_session_token(),
        expires_at=session_expiry(),
        last_activity=current_time,
    )
    db.add(session)
    user.last_login = current_time
    await db.flush()
    return session


async def list_users(db: AsyncSession, offset: int = 0, limit: int = 10) -> Tuple[List[User], int]:
    """
    Get a page of users, oldest first, with the total user count.
    """
    total = await db.scalar(select(func.count()).select_from(User))
    result = await db.execute(
        select(User).order_by(User.created_at, User.id).offset(offset).limit(limit)
    )
    return list(result.scalars().all()), total or 0


async def update_user(db: AsyncSession, caller_id: UUID, user_id: UUID, user_in: UserUpdate) -> User:
    """
    Update the caller's own account.

    Raises:
        UnauthorizedError: If ``user_id`` is not the caller
        NotFoundError: If the user does not exist
        ConflictError: If the new email belongs to another account
    """
    ensure_owner(user_id, caller_id, "update this user")
    user = await get_user_or_404(db, user_id)

    changes = user_in.model_dump(exclude_unset=True)
    if changes.get("email"):
        changes["email"] = changes["email"].strip().lower()
        if changes["email"] != user.email:
            existing = await get_user_by_email(db, changes["email"])
            if existing and existing.id != user.id:
                raise ConflictError("Email is already registered")

    for field, value in changes.items():
        if value is not None:
            setattr(user, field, value)

    await db.flush()
    await db.refresh(user)
    logger.info(f"[USERS] Updated user {user.id}: {sorted(changes)}")
    return user


async def delete_user(db: AsyncSession, caller_id: UUID, user_id: UUID) -> None:
    """
    Delete the caller's account and everything it owns.

    Removed: sessions, profile, connections, posts (with all their comments),
    comments on other posts, owned jobs, and conversations the user takes
    part in together with their messages. Likes and job applications the
    user left on other records are kept.
    """
    ensure_owner(user_id, caller_id, "delete this user")
    user = await get_user_or_404(db, user_id)

    await db.flush()

    own_posts = select(Post.id).where(Post.user_id == user.id)
    conversations = select(Conversation.id).where(
        or_(Conversation.participant_one_id == user.id, Conversation.participant_two_id == user.id)
    )

    await db.execute(delete(Comment).where(or_(Comment.user_id == user.id, Comment.post_id.in_(own_posts))))
    await db.execute(delete(Post).where(Post.user_id == user.id))
    await db.execute(delete(Message).where(Message.conversation_id.in_(conversations)))
    await db.execute(
        delete(Conversation).where(
            or_(Conversation.participant_one_id == user.id, Conversation.participant_two_id == user.id)
        )
    )
    await db.execute(
        delete(Connection).where(or_(Connection.requester_id == user.id, Connection.recipient_id == user.id))
    )
    await db.execute(delete(Job).where(Job.company_id == user.id))
    await db.execute(delete(Profile).where(Profile.user_id == user.id))
    await db.execute(delete(UserSession).where(UserSession.user_id == user.id))
    await db.execute(delete(User).where(User.id == user.id))
    logger.info(f"[USERS] Deleted user {user_id} and owned records")
