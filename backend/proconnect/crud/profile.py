"""
CRUD operations for profiles.
"""
import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import ensure_owner
from ..db.models.profile import Profile
from ..schemas.profile import DateRangeEntry, ProfileUpdate
from .user import get_user_or_404

logger = logging.getLogger(__name__)

DATE_RANGE_SECTIONS = {
    "experience": "Experience",
    "education": "Education",
}


def check_date_ranges(section: str, entries: List[DateRangeEntry]) -> None:
    """
    Reject entries whose end date precedes their start date.

    Raises:
        ValidationError: On the first invalid entry
    """
    label = DATE_RANGE_SECTIONS.get(section, section.capitalize())
    for entry in entries:
        if entry.to is not None and entry.to < entry.from_:
            raise ValidationError(f"{label} end date cannot be before start date")


async def get_profile(db: AsyncSession, user_id: UUID) -> Optional[Profile]:
    """
    Get a user's profile.

    Args:
        db: Database session
        user_id: Owner's UUID

    Returns:
        Optional[Profile]: Profile if found, None otherwise
    """
    result = await db.execute(
        select(Profile)
        .where(Profile.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_profile_or_404(db: AsyncSession, user_id: UUID) -> Profile:
    profile = await get_profile(db, user_id)
    if not profile:
        raise NotFoundError("Profile not found")
    return profile


def _to_storage(profile_in: ProfileUpdate) -> Dict[str, Any]:
    # Embedded entries are stored as JSON with their public field names
    return profile_in.model_dump(mode="json", by_alias=True, exclude_unset=True)


async def upsert_profile(db: AsyncSession, caller_id: UUID, user_id: UUID, profile_in: ProfileUpdate) -> Profile:
    """
    Create the caller's profile or update the fields present in ``profile_in``.

    Raises:
        UnauthorizedError: If ``user_id`` is not the caller
        ValidationError: If a date range ends before it starts
    """
    ensure_owner(user_id, caller_id, "update this profile")
    await get_user_or_404(db, user_id)

    for section in DATE_RANGE_SECTIONS:
        entries = getattr(profile_in, section)
        if entries:
            check_date_ranges(section, entries)

    changes = _to_storage(profile_in)
    profile = await get_profile(db, user_id)

    if profile is None:
        profile = Profile(user_id=user_id, **{k: v for k, v in changes.items() if v is not None})
        db.add(profile)
        logger.info(f"[USERS] Creating profile for user {user_id}")
    else:
        for field, value in changes.items():
            if value is not None:
                setattr(profile, field, value)
        logger.info(f"[USERS] Updating profile for user {user_id}: {sorted(changes)}")

    await db.flush()
    return await get_profile_or_404(db, user_id)
