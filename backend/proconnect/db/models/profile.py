"""
Profile model holding free-form career data.
"""
from sqlalchemy import Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from ..base import Base, JSONType, TimestampMixin, UUIDMixin


class Profile(Base, UUIDMixin, TimestampMixin):
    """
    One-to-one with User. Sub-entries (experience, education, certifications,
    languages) are embedded JSON documents validated by the profile schemas.
    """
    __tablename__ = "profiles"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    avatar = Column(String(1024), default="")
    background_image = Column(String(1024), default="")
    about = Column(Text, default="")
    experience = Column(JSONType, default=list, nullable=False)
    education = Column(JSONType, default=list, nullable=False)
    skills = Column(JSONType, default=list, nullable=False)
    certifications = Column(JSONType, default=list, nullable=False)
    languages = Column(JSONType, default=list, nullable=False)
    social_links = Column(JSONType, default=dict, nullable=False)

    # Relationships
    user = relationship("User", back_populates="profile", lazy="selectin")
