"""
Connection model: a directed request between two users that becomes a
symmetric link once accepted.
"""
from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from ..base import Base, TimestampMixin, UUIDMixin, one_of

CONNECTION_STATUS_VALUES = ("pending", "accepted", "rejected")


def make_pair_key(user_a, user_b) -> str:
    """Order-independent key for an unordered pair of user ids."""
    first, second = sorted((str(user_a), str(user_b)))
    return f"{first}:{second}"


class Connection(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "connections"

    requester_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), one_of("status", CONNECTION_STATUS_VALUES), default="pending", nullable=False, index=True)

    # One record per unordered pair, whichever side asked first
    pair_key = Column(String(80), unique=True, nullable=False)

    # Relationships
    requester = relationship("User", foreign_keys=[requester_id], lazy="selectin")
    recipient = relationship("User", foreign_keys=[recipient_id], lazy="selectin")

    def other_side(self, user_id):
        """Return the user on the opposite end from ``user_id``."""
        return self.recipient if self.requester_id == user_id else self.requester
