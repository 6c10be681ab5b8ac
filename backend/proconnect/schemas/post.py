"""
Post and comment schemas.
"""
from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from ..db.models.post import POST_PRIVACY_VALUES
from .common import UserName, UserSummary

PostPrivacy = Literal[POST_PRIVACY_VALUES]


class PostCreate(BaseModel):
    """Request model for creating a post."""
    text: str = Field(..., min_length=1, description="Post body")
    media: List[str] = Field(default_factory=list, description="Media URLs")
    privacy: PostPrivacy = Field("public", description="Audience of the post")


class PostUpdate(BaseModel):
    """Partial update of a post."""
    text: Optional[str] = Field(None, min_length=1)
    media: Optional[List[str]] = None
    privacy: Optional[PostPrivacy] = None


class Like(BaseModel):
    user: UUID


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1, description="Comment body")


class CommentUpdate(BaseModel):
    text: str = Field(..., min_length=1, description="Comment body")


class CommentOut(BaseModel):
    """Comment with its author's name."""
    id: UUID
    post_id: UUID
    user: UserName
    text: str
    created_at: datetime

    class Config:
        from_attributes = True


class PostOut(BaseModel):
    """Post with author summary, likes and comments."""
    id: UUID
    user: UserSummary
    text: str
    media: List[str] = []
    likes: List[Like] = []
    comments: List[CommentOut] = []
    privacy: PostPrivacy
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
