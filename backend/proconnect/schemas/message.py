"""
Messaging schemas.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from .common import UserName, UserSummary


class MessageCreate(BaseModel):
    """Request model for sending a message."""
    content: str = Field(..., min_length=1, description="Message text")


class MessageOut(BaseModel):
    id: UUID
    conversation_id: UUID
    sender: UserName
    content: str
    read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ConversationOut(BaseModel):
    """Inbox entry for one conversation."""
    id: UUID
    other_participant: UserSummary
    last_message: Optional[MessageOut] = None
    updated_at: datetime
