"""
Shared response envelope and user projections.
"""
from datetime import datetime
from typing import Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field, model_serializer

DataT = TypeVar("DataT")


class PageRef(BaseModel):
    """Reference to a neighbouring page."""
    page: int = Field(..., description="Page number")
    limit: int = Field(..., description="Items per page")


class Pagination(BaseModel):
    """Pagination descriptor; a side is present only when that page exists."""
    next: Optional[PageRef] = None
    prev: Optional[PageRef] = None

    @model_serializer(mode="wrap")
    def _omit_missing_pages(self, handler):
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope wrapping every successful response."""
    success: bool = Field(default=True, description="Whether the request succeeded")
    data: DataT
    count: Optional[int] = Field(None, description="Number of items in data, for lists")
    pagination: Optional[Pagination] = Field(None, description="Neighbouring pages, for paginated lists")

    @model_serializer(mode="wrap")
    def _omit_unused_fields(self, handler):
        data = handler(self)
        for key in ("count", "pagination"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class ErrorResponse(BaseModel):
    """Error envelope."""
    success: bool = Field(default=False)
    error: str = Field(..., description="Error message")


class UserName(BaseModel):
    """Author name projected onto comments and messages."""
    id: UUID
    first_name: str
    last_name: str

    class Config:
        from_attributes = True


class UserSummary(UserName):
    """Author summary attached to posts, jobs and connections."""
    headline: Optional[str] = None


class UserOut(UserSummary):
    """Full public view of a user."""
    email: str
    created_at: Optional[datetime] = None
