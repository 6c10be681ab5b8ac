"""
Conversation and Message models for one-to-one messaging.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..base import Base, TimestampMixin, UUIDMixin, utcnow


def canonical_participants(user_a, user_b):
    """Return the two participant ids in storage order (smaller string first)."""
    if str(user_a) <= str(user_b):
        return user_a, user_b
    return user_b, user_a


class Conversation(Base, UUIDMixin, TimestampMixin):
    """
    The single thread between two users. Participants are stored in
    canonical order so the pair is unique regardless of who wrote first.
    ``last_message_id`` points at the newest message, or is null.
    """
    __tablename__ = "conversations"
    __table_args__ = (
        UniqueConstraint("participant_one_id", "participant_two_id", name="uq_conversations_participants"),
    )

    participant_one_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    participant_two_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    last_message_id = Column(Uuid(as_uuid=True), nullable=True)

    # Relationships
    participant_one = relationship("User", foreign_keys=[participant_one_id], lazy="selectin")
    participant_two = relationship("User", foreign_keys=[participant_two_id], lazy="selectin")
    last_message = relationship(
        "Message",
        primaryjoin="foreign(Conversation.last_message_id) == Message.id",
        uselist=False,
        viewonly=True,
        lazy="selectin",
    )

    def other_participant(self, user_id):
        return self.participant_two if self.participant_one_id == user_id else self.participant_one


class Message(Base, UUIDMixin):
    __tablename__ = "messages"

    conversation_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    # Relationships
    sender = relationship("User", lazy="selectin")
