"""
Job posting and application schemas.
"""
from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from ..db.models.job import APPLICANT_STATUSES, EMPLOYMENT_TYPES, EXPERIENCE_LEVELS
from .common import UserSummary

EmploymentType = Literal[EMPLOYMENT_TYPES]
ExperienceLevel = Literal[EXPERIENCE_LEVELS]
ApplicantStatus = Literal[APPLICANT_STATUSES]


class Salary(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "USD"


class JobCreate(BaseModel):
    """Request model for posting a job."""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    employment_type: EmploymentType
    experience_level: ExperienceLevel
    skills: List[str] = Field(default_factory=list)
    salary: Salary = Field(default_factory=Salary)
    expires_at: datetime = Field(..., description="When the posting expires")


class JobUpdate(BaseModel):
    """Partial update of a job posting."""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    employment_type: Optional[EmploymentType] = None
    experience_level: Optional[ExperienceLevel] = None
    skills: Optional[List[str]] = None
    salary: Optional[Salary] = None
    active: Optional[bool] = None
    expires_at: Optional[datetime] = None


class JobOut(BaseModel):
    """Job posting; applicants are reported only as a count."""
    id: UUID
    company: UserSummary
    title: str
    description: str
    location: str
    employment_type: EmploymentType
    experience_level: ExperienceLevel
    skills: List[str] = []
    salary: Salary = Salary()
    active: bool
    expires_at: datetime
    created_at: datetime
    applicant_count: int = 0

    class Config:
        from_attributes = True


class Applicant(BaseModel):
    """One user's application to a job."""
    user: UUID
    status: ApplicantStatus
    applied_at: datetime


class ApplicantStatusUpdate(BaseModel):
    status: ApplicantStatus


class ApplicationJob(BaseModel):
    id: UUID
    title: str
    company: UserSummary
    location: str
    employment_type: EmploymentType

    class Config:
        from_attributes = True


class ApplicationOut(BaseModel):
    """A caller's own application, with the job it belongs to."""
    job: ApplicationJob
    status: ApplicantStatus
    applied_at: datetime
