"""
Job posting model with its embedded applicant list.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from ..base import Base, JSONType, TimestampMixin, UUIDMixin, one_of

EMPLOYMENT_TYPES = ("Full-time", "Part-time", "Contract", "Temporary", "Internship")
EXPERIENCE_LEVELS = ("Entry level", "Mid-Senior level", "Senior level", "Director", "Executive")
APPLICANT_STATUSES = ("applied", "reviewed", "interviewed", "offered", "rejected")


class Job(Base, UUIDMixin, TimestampMixin):
    """
    A job posted by a user acting as the company.

    ``applicants`` is a JSON list of ``{"user", "status", "applied_at"}``
    entries; a user appears in it at most once.
    """
    __tablename__ = "jobs"

    company_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    employment_type = Column(String(50), one_of("employment_type", EMPLOYMENT_TYPES), nullable=False, index=True)
    experience_level = Column(String(50), one_of("experience_level", EXPERIENCE_LEVELS), nullable=False, index=True)
    skills = Column(JSONType, default=list, nullable=False)
    salary = Column(JSONType, default=dict, nullable=False)
    applicants = Column(JSONType, default=list, nullable=False)
    active = Column(Boolean, default=True, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    company = relationship("User", lazy="selectin")

    @property
    def applicant_count(self) -> int:
        return len(self.applicants or [])

    def find_applicant(self, user_id):
        for entry in self.applicants or []:
            if entry.get("user") == str(user_id):
                return entry
        return None
