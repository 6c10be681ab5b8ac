"""
Messaging: one conversation per pair of users, with a pointer to its
newest message.
"""
import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import BadRequestError, NotFoundError
from ..core.permissions import ensure_owner
from ..db.base import utcnow
from ..db.models.message import Conversation, Message, canonical_participants
from .user import get_user

logger = logging.getLogger(__name__)


def _participates(user_id: UUID):
    return or_(Conversation.participant_one_id == user_id, Conversation.participant_two_id == user_id)


async def get_message(db: AsyncSession, message_id: UUID) -> Optional[Message]:
    result = await db.execute(
        select(Message).where(Message.id == message_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def find_conversation(db: AsyncSession, user_a: UUID, user_b: UUID) -> Optional[Conversation]:
    """Find the conversation between two users, whichever of them started it."""
    one, two = canonical_participants(user_a, user_b)
    result = await db.execute(
        select(Conversation).where(
            Conversation.participant_one_id == one,
            Conversation.participant_two_id == two,
        )
    )
    return result.scalar_one_or_none()


async def get_or_create_conversation(db: AsyncSession, user_a: UUID, user_b: UUID) -> Conversation:
    """
    Return the conversation for the pair, creating it on first contact.

    A concurrent request creating the same pair trips the unique constraint;
    the savepoint is rolled back and the other request's row is used.
    """
    conversation = await find_conversation(db, user_a, user_b)
    if conversation:
        return conversation

    one, two = canonical_participants(user_a, user_b)
    conversation = Conversation(participant_one_id=one, participant_two_id=two)
    try:
        async with db.begin_nested():
            db.add(conversation)
    except IntegrityError:
        logger.warning(f"[MESSAGES] Conversation {one}/{two} created concurrently, reusing it")
        conversation = await find_conversation(db, user_a, user_b)
        if conversation is None:
            raise
        return conversation

    logger.info(f"[MESSAGES] Created conversation {conversation.id} for {one}/{two}")
    return conversation


async def get_conversations(db: AsyncSession, caller_id: UUID) -> List[Dict[str, Any]]:
    """
    The caller's inbox, most recently active conversation first.

    Returns:
        List of ``{"id", "other_participant", "last_message", "updated_at"}``
    """
    result = await db.execute(
        select(Conversation)
        .where(_participates(caller_id))
        .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
    )
    return [
        {
            "id": conversation.id,
            "other_participant": conversation.other_participant(caller_id),
            "last_message": conversation.last_message,
            "updated_at": conversation.updated_at,
        }
        for conversation in result.scalars().all()
    ]


async def get_messages(db: AsyncSession, caller_id: UUID, conversation_id: UUID) -> List[Message]:
    """
    Messages of a conversation, oldest first. Every message the caller did
    not send is marked as read.

    Raises:
        NotFoundError: If the conversation does not exist or the caller is
            not one of its participants
    """
    result = await db.execute(
        select(Conversation.id).where(Conversation.id == conversation_id, _participates(caller_id))
    )
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Conversation not found or you are not a participant")

    result = await db.execute(
        select(Message)
        .where(Message.conversation_id == conversation_id)
        .order_by(Message.created_at, Message.id)
    )
    messages = list(result.scalars().all())

    await db.execute(
        update(Message)
        .where(
            Message.conversation_id == conversation_id,
            Message.sender_id != caller_id,
            Message.read == False,
        )
        .values(read=True)
    )
    return messages


async def send_message(db: AsyncSession, sender_id: UUID, receiver_id: UUID, content: str) -> Message:
    """
    Send a message, creating the pair's conversation if needed, and move
    the conversation's last-message pointer to it.

    Raises:
        BadRequestError: If the sender targets themselves
        NotFoundError: If the receiver does not exist
    """
    if receiver_id == sender_id:
        raise BadRequestError("You cannot send a message to yourself")

    if not await get_user(db, receiver_id):
        raise NotFoundError("Receiver not found")

    conversation = await get_or_create_conversation(db, sender_id, receiver_id)

    message = Message(conversation_id=conversation.id, sender_id=sender_id, content=content)
    db.add(message)
    await db.flush()

    conversation.last_message_id = message.id
    conversation.updated_at = utcnow()
    await db.flush()

    logger.info(f"[MESSAGES] {sender_id} -> {receiver_id}: message {message.id} in {conversation.id}")
    return await get_message(db, message.id)


async def delete_message(db: AsyncSession, caller_id: UUID, message_id: UUID) -> None:
    """
    Delete one of the caller's messages. When it was the conversation's
    newest message, the pointer moves to the newest remaining message or is
    cleared.

    Raises:
        NotFoundError: If the message does not exist
        UnauthorizedError: If the caller did not send it
    """
    message = await get_message(db, message_id)
    if not message:
        raise NotFoundError("Message not found")
    ensure_owner(message.sender_id, caller_id, "delete this message")

    conversation_id = message.conversation_id
    await db.delete(message)
    await db.flush()

    result = await db.execute(select(Conversation).where(Conversation.id == conversation_id))
    conversation = result.scalar_one_or_none()
    if conversation and conversation.last_message_id == message_id:
        result = await db.execute(
            select(Message.id)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(1)
        )
        conversation.last_message_id = result.scalar_one_or_none()
        await db.flush()
        logger.info(f"[MESSAGES] Conversation {conversation_id} pointer moved to {conversation.last_message_id}")

    logger.info(f"[MESSAGES] {caller_id} deleted message {message_id}")
