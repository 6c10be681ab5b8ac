"""
API endpoints for one-to-one messaging.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth.dependencies import get_current_user
from ...crud import message as message_crud
from ...db.models.user import User
from ...db.session import get_db
from ...schemas.common import ApiResponse
from ...schemas.message import ConversationOut, MessageCreate, MessageOut
from ..dependencies import ERROR_RESPONSES, empty_response, list_response

router = APIRouter(
    prefix="/messages",
    tags=["messages"],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=ApiResponse[List[ConversationOut]])
async def get_conversations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The current user's conversations, most recent first."""
    conversations = await message_crud.get_conversations(db, current_user.id)
    return list_response(conversations)


@router.get("/{conversation_id}", response_model=ApiResponse[List[MessageOut]])
async def get_messages(
    conversation_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Messages of one conversation; marks the other side's messages as read."""
    messages = await message_crud.get_messages(db, current_user.id, conversation_id)
    return list_response(messages)


@router.post(
    "/{receiver_id}",
    response_model=ApiResponse[MessageOut],
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    receiver_id: UUID,
    message_in: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    message = await message_crud.send_message(db, current_user.id, receiver_id, message_in.content)
    return {"success": True, "data": message}


@router.delete("/{message_id}", response_model=ApiResponse[dict])
async def delete_message(
    message_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await message_crud.delete_message(db, current_user.id, message_id)
    return empty_response()
