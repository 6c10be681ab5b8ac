"""
Profile schemas.
"""
from datetime import date, datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from .common import UserOut

LanguageProficiency = Literal[
    "Elementary",
    "Limited Working",
    "Professional Working",
    "Full Professional",
    "Native/Bilingual",
]


class DateRangeEntry(BaseModel):
    """Base for entries spanning a period; ``to`` is empty while current."""
    from_: date = Field(..., alias="from", description="Start date")
    to: Optional[date] = Field(None, description="End date")
    current: bool = Field(False, description="Whether the entry is ongoing")
    description: Optional[str] = None

    class Config:
        populate_by_name = True
        from_attributes = True


class ExperienceEntry(DateRangeEntry):
    title: str
    company: str
    location: Optional[str] = None


class EducationEntry(DateRangeEntry):
    school: str
    degree: str
    field_of_study: str


class CertificationEntry(BaseModel):
    name: str
    organization: str
    issue_date: Optional[date] = None
    expiration_date: Optional[date] = None
    credential_url: Optional[str] = None


class LanguageEntry(BaseModel):
    language: str
    proficiency: Optional[LanguageProficiency] = None


class SocialLinks(BaseModel):
    website: Optional[str] = None
    twitter: Optional[str] = None
    github: Optional[str] = None
    youtube: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Create-or-update payload; omitted fields keep their stored value."""
    avatar: Optional[str] = None
    background_image: Optional[str] = None
    about: Optional[str] = None
    experience: Optional[List[ExperienceEntry]] = None
    education: Optional[List[EducationEntry]] = None
    skills: Optional[List[str]] = None
    certifications: Optional[List[CertificationEntry]] = None
    languages: Optional[List[LanguageEntry]] = None
    social_links: Optional[SocialLinks] = None


class ProfileOut(BaseModel):
    """Profile together with its owner."""
    id: UUID
    user: UserOut
    avatar: Optional[str] = ""
    background_image: Optional[str] = ""
    about: Optional[str] = ""
    experience: List[ExperienceEntry] = []
    education: List[EducationEntry] = []
    skills: List[str] = []
    certifications: List[CertificationEntry] = []
    languages: List[LanguageEntry] = []
    social_links: SocialLinks = SocialLinks()
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
