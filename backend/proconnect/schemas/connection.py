"""
Pydantic schemas for connection operations.
"""
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from ..db.models.connection import CONNECTION_STATUS_VALUES
from .common import UserSummary

ConnectionStatus = Literal[CONNECTION_STATUS_VALUES]


class ConnectionOut(BaseModel):
    """A connection record as stored, with both sides."""
    id: UUID
    requester: UserSummary
    recipient: UserSummary
    status: ConnectionStatus
    created_at: datetime

    class Config:
        from_attributes = True


class ConnectedUser(BaseModel):
    """An accepted connection seen from one side."""
    connection_id: UUID = Field(..., description="Id of the underlying connection record")
    user: UserSummary = Field(..., description="The user on the other side")
    created_at: datetime
