"""
API endpoints for editing and deleting comments.
"""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth.dependencies import get_current_user
from ...crud import comment as comment_crud
from ...db.models.user import User
from ...db.session import get_db
from ...schemas.common import ApiResponse
from ...schemas.post import CommentOut, CommentUpdate
from ..dependencies import ERROR_RESPONSES, empty_response

router = APIRouter(
    prefix="/comments",
    tags=["comments"],
    responses=ERROR_RESPONSES,
)


@router.put("/{comment_id}", response_model=ApiResponse[CommentOut])
async def update_comment(
    comment_id: UUID,
    comment_in: CommentUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await comment_crud.update_comment(db, current_user.id, comment_id, comment_in.text)
    return {"success": True, "data": comment}


@router.delete("/{comment_id}", response_model=ApiResponse[dict])
async def delete_comment(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await comment_crud.delete_comment(db, current_user.id, comment_id)
    return empty_response()
