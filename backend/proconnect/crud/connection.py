"""
Connection graph: requests, accepted links and suggestions.

Connections are stored directed (requester -> recipient) but an accepted
connection counts for both sides. At most one record exists per unordered
pair of users; ``Connection.pair_key`` backs this with a unique constraint.
"""
import logging
from typing import Any, Dict, List, Optional, Set
from uuid import UUID

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import BadRequestError, ConflictError, NotFoundError
from ..db.models.connection import Connection, make_pair_key
from ..db.models.user import User
from .user import get_user

logger = logging.getLogger(__name__)


def _involves(user_id: UUID):
    return or_(Connection.requester_id == user_id, Connection.recipient_id == user_id)


async def get_connection(db: AsyncSession, connection_id: UUID) -> Optional[Connection]:
    result = await db.execute(
        select(Connection)
        .where(Connection.id == connection_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def find_between(db: AsyncSession, user_a: UUID, user_b: UUID) -> Optional[Connection]:
    """
    Find the record for the unordered pair {user_a, user_b}, any status,
    either direction.
    """
    result = await db.execute(
        select(Connection).where(
            or_(
                and_(Connection.requester_id == user_a, Connection.recipient_id == user_b),
                and_(Connection.requester_id == user_b, Connection.recipient_id == user_a),
            )
        )
    )
    return result.scalars().first()


async def get_connected_user_ids(db: AsyncSession, caller_id: UUID) -> Set[UUID]:
    """
    Ids of every user with an accepted connection to the caller, on either side.
    """
    result = await db.execute(
        select(Connection.requester_id, Connection.recipient_id).where(
            _involves(caller_id), Connection.status == "accepted"
        )
    )
    return {
        recipient_id if requester_id == caller_id else requester_id
        for requester_id, recipient_id in result.all()
    }


async def get_connections(db: AsyncSession, caller_id: UUID) -> List[Dict[str, Any]]:
    """
    Accepted connections of the caller, each seen from the caller's side.

    Returns:
        List of ``{"connection_id", "user", "created_at"}`` where ``user`` is
        the other side of the connection
    """
    result = await db.execute(
        select(Connection)
        .where(_involves(caller_id), Connection.status == "accepted")
        .order_by(Connection.created_at, Connection.id)
    )
    return [
        {
            "connection_id": connection.id,
            "user": connection.other_side(caller_id),
            "created_at": connection.created_at,
        }
        for connection in result.scalars().all()
    ]


async def get_pending_requests(db: AsyncSession, caller_id: UUID) -> List[Connection]:
    """Incoming requests waiting for the caller to accept or reject them."""
    result = await db.execute(
        select(Connection)
        .where(Connection.recipient_id == caller_id, Connection.status == "pending")
        .order_by(Connection.created_at.desc(), Connection.id.desc())
    )
    return list(result.scalars().all())


async def get_suggestions(db: AsyncSession, caller_id: UUID, limit: Optional[int] = None) -> List[User]:
    """
    Users the caller has no connection record with, in any status.

    Args:
        db: Database session
        caller_id: Authenticated user's UUID
        limit: Maximum number of suggestions, defaults to ``SUGGESTION_LIMIT``

    Returns:
        List[User]: Up to ``limit`` users in creation order
    """
    limit = limit or settings.SUGGESTION_LIMIT

    result = await db.execute(
        select(Connection.requester_id, Connection.recipient_id).where(_involves(caller_id))
    )
    excluded = {caller_id}
    for requester_id, recipient_id in result.all():
        excluded.add(recipient_id if requester_id == caller_id else requester_id)

    result = await db.execute(
        select(User)
        .where(User.id.not_in(list(excluded)))
        .order_by(User.created_at, User.id)
        .limit(limit)
    )
    return list(result.scalars().all())


async def _create_request(db: AsyncSession, requester_id: UUID, recipient_id: UUID, message: str) -> Connection:
    connection = Connection(
        requester_id=requester_id,
        recipient_id=recipient_id,
        status="pending",
        pair_key=make_pair_key(requester_id, recipient_id),
    )
    db.add(connection)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race against a concurrent request for the same pair
        logger.warning(f"[CONNECTIONS] Duplicate insert for pair {requester_id} / {recipient_id}")
        raise ConflictError(message)

    logger.info(f"[CONNECTIONS] {requester_id} -> {recipient_id}: request {connection.id} created")
    return await get_connection(db, connection.id)


async def send_request(db: AsyncSession, caller_id: UUID, recipient_id: UUID) -> Connection:
    """
    Send a connection request from the caller to ``recipient_id``.

    Raises:
        BadRequestError: If the caller targets themselves
        NotFoundError: If the recipient does not exist
        ConflictError: If any record already exists for the pair, whatever
            its status or direction
    """
    if recipient_id == caller_id:
        raise BadRequestError("You cannot connect with yourself")

    if not await get_user(db, recipient_id):
        raise NotFoundError("User not found")

    if await find_between(db, caller_id, recipient_id):
        logger.warning(f"[CONNECTIONS] {caller_id} -> {recipient_id}: request already exists")
        raise ConflictError("Connection request already exists")

    return await _create_request(db, caller_id, recipient_id, "Connection request already exists")


async def _get_incoming_pending(db: AsyncSession, caller_id: UUID, connection_id: UUID) -> Connection:
    result = await db.execute(
        select(Connection).where(
            Connection.id == connection_id,
            Connection.recipient_id == caller_id,
            Connection.status == "pending",
        )
    )
    connection = result.scalar_one_or_none()
    if not connection:
        raise NotFoundError("Connection request not found")
    return connection


async def accept_request(db: AsyncSession, caller_id: UUID, connection_id: UUID) -> Connection:
    """
    Accept a pending request addressed to the caller.

    Raises:
        NotFoundError: If no pending request with this id targets the caller
    """
    connection = await _get_incoming_pending(db, caller_id, connection_id)
    connection.status = "accepted"
    await db.flush()
    logger.info(f"[CONNECTIONS] {caller_id} accepted request {connection_id}")
    return await get_connection(db, connection_id)


async def reject_request(db: AsyncSession, caller_id: UUID, connection_id: UUID) -> Connection:
    """
    Reject a pending request addressed to the caller. The record is kept,
    so the pair cannot request again.

    Raises:
        NotFoundError: If no pending request with this id targets the caller
    """
    connection = await _get_incoming_pending(db, caller_id, connection_id)
    connection.status = "rejected"
    await db.flush()
    logger.info(f"[CONNECTIONS] {caller_id} rejected request {connection_id}")
    return await get_connection(db, connection_id)


async def remove_connection(db: AsyncSession, caller_id: UUID, connection_id: UUID) -> None:
    """
    Delete an accepted connection the caller is part of.

    Raises:
        NotFoundError: If no such accepted connection exists
    """
    result = await db.execute(
        select(Connection).where(
            Connection.id == connection_id,
            _involves(caller_id),
            Connection.status == "accepted",
        )
    )
    connection = result.scalar_one_or_none()
    if not connection:
        raise NotFoundError("Connection not found")

    await db.delete(connection)
    await db.flush()
    logger.info(f"[CONNECTIONS] {caller_id} removed connection {connection_id}")


async def follow_user(db: AsyncSession, caller_id: UUID, target_id: UUID) -> Connection:
    """
    Follow a user by opening a pending request from the caller to them.

    Raises:
        BadRequestError: If the caller targets themselves
        NotFoundError: If the target does not exist
        ConflictError: If a record already exists for the pair
    """
    if target_id == caller_id:
        raise BadRequestError("You cannot follow yourself")

    if not await get_user(db, target_id):
        raise NotFoundError("User not found")

    message = "Already following or connection request pending"
    if await find_between(db, caller_id, target_id):
        raise ConflictError(message)

    return await _create_request(db, caller_id, target_id, message)


async def unfollow_user(db: AsyncSession, caller_id: UUID, target_id: UUID) -> None:
    """
    Remove the caller's own record towards ``target_id``, whatever its status.

    Raises:
        BadRequestError: If the caller targets themselves
        NotFoundError: If the caller never requested or followed the target
    """
    if target_id == caller_id:
        raise BadRequestError("You cannot unfollow yourself")

    result = await db.execute(
        select(Connection).where(
            Connection.requester_id == caller_id,
            Connection.recipient_id == target_id,
        )
    )
    connection = result.scalar_one_or_none()
    if not connection:
        raise NotFoundError("You are not following this user")

    await db.delete(connection)
    await db.flush()
    logger.info(f"[CONNECTIONS] {caller_id} unfollowed {target_id}")
