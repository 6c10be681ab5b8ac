"""
API endpoints for posts, likes and the feed.
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth.dependencies import get_current_user
from ...core.pagination import PageParams
from ...crud import comment as comment_crud
from ...crud import post as post_crud
from ...db.models.user import User
from ...db.session import get_db
from ...schemas.common import ApiResponse
from ...schemas.post import CommentCreate, CommentOut, Like, PostCreate, PostOut, PostUpdate
from ..dependencies import ERROR_RESPONSES, empty_response, list_response, page_response, pagination_params

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["posts"],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=ApiResponse[List[PostOut]])
async def get_feed(
    params: PageParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    The current user's feed: public posts plus posts by the user and their
    connections, newest first.
    """
    posts, total = await post_crud.get_feed(db, current_user.id, params.page, params.limit)
    return page_response(posts, total, params)


@router.post("", response_model=ApiResponse[PostOut], status_code=status.HTTP_201_CREATED)
async def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await post_crud.create_post(db, current_user.id, post_in)
    return {"success": True, "data": post}


@router.get("/{post_id}", response_model=ApiResponse[PostOut])
async def get_post(
    post_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await post_crud.get_post_or_404(db, post_id)
    return {"success": True, "data": post}


@router.put("/{post_id}", response_model=ApiResponse[PostOut])
async def update_post(
    post_id: UUID,
    post_in: PostUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await post_crud.update_post(db, current_user.id, post_id, post_in)
    return {"success": True, "data": post}


@router.delete("/{post_id}", response_model=ApiResponse[dict])
async def delete_post(
    post_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await post_crud.delete_post(db, current_user.id, post_id)
    return empty_response()


@router.post("/{post_id}/like", response_model=ApiResponse[List[Like]])
async def like_post(
    post_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    likes = await post_crud.like_post(db, current_user.id, post_id)
    return {"success": True, "data": likes}


@router.delete("/{post_id}/like", response_model=ApiResponse[List[Like]])
async def unlike_post(
    post_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    likes = await post_crud.unlike_post(db, current_user.id, post_id)
    return {"success": True, "data": likes}


@router.get("/{post_id}/comments", response_model=ApiResponse[List[CommentOut]])
async def get_comments(
    post_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comments = await comment_crud.list_comments(db, post_id)
    return list_response(comments)


@router.post(
    "/{post_id}/comments",
    response_model=ApiResponse[CommentOut],
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: UUID,
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await comment_crud.add_comment(db, current_user.id, post_id, comment_in.text)
    return {"success": True, "data": comment}
