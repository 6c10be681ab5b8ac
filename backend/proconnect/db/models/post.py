"""
Post and Comment models.
"""
from sqlalchemy import Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from ..base import Base, JSONType, TimestampMixin, UUIDMixin, one_of

POST_PRIVACY_VALUES = ("public", "connections", "private")


class Post(Base, UUIDMixin, TimestampMixin):
    """
    A post authored by a user.

    ``likes`` is a JSON list of ``{"user": "<uuid>"}`` entries, newest first,
    with each user present at most once. Comments are separate rows.
    """
    __tablename__ = "posts"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    media = Column(JSONType, default=list, nullable=False)
    likes = Column(JSONType, default=list, nullable=False)
    privacy = Column(String(20), one_of("privacy", POST_PRIVACY_VALUES), default="public", nullable=False, index=True)

    # Relationships
    user = relationship("User", lazy="selectin")
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
        lazy="selectin",
    )

    def is_liked_by(self, user_id) -> bool:
        return any(like.get("user") == str(user_id) for like in self.likes or [])


class Comment(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "comments"

    post_id = Column(Uuid(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)

    # Relationships
    post = relationship("Post", back_populates="comments")
    user = relationship("User", lazy="selectin")
