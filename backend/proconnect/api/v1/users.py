"""
API endpoints for users, profiles and follows.
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth.dependencies import get_current_user
from ...core.pagination import PageParams
from ...crud import connection as connection_crud
from ...crud import job as job_crud
from ...crud import post as post_crud
from ...crud import profile as profile_crud
from ...crud import user as user_crud
from ...db.models.user import User
from ...db.session import get_db
from ...schemas.common import ApiResponse, UserOut
from ...schemas.connection import ConnectionOut
from ...schemas.job import ApplicationOut
from ...schemas.post import PostOut
from ...schemas.profile import ProfileOut, ProfileUpdate
from ...schemas.user import UserUpdate
from ..dependencies import ERROR_RESPONSES, empty_response, list_response, page_response, pagination_params

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=ApiResponse[List[UserOut]])
async def get_users(
    params: PageParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    users, total = await user_crud.list_users(db, offset=params.offset, limit=params.limit)
    return page_response(users, total, params)


@router.get("/{user_id}", response_model=ApiResponse[UserOut])
async def get_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await user_crud.get_user_or_404(db, user_id)
    return {"success": True, "data": user}


@router.put("/{user_id}", response_model=ApiResponse[UserOut])
async def update_user(
    user_id: UUID,
    user_in: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await user_crud.update_user(db, current_user.id, user_id, user_in)
    return {"success": True, "data": user}


@router.delete("/{user_id}", response_model=ApiResponse[dict])
async def delete_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete the current user's account and the records it owns."""
    await user_crud.delete_user(db, current_user.id, user_id)
    return empty_response()


@router.get("/{user_id}/profile", response_model=ApiResponse[ProfileOut])
async def get_user_profile(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_crud.get_profile_or_404(db, user_id)
    return {"success": True, "data": profile}


@router.put("/{user_id}/profile", response_model=ApiResponse[ProfileOut])
async def update_user_profile(
    user_id: UUID,
    profile_in: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create or update the current user's profile."""
    profile = await profile_crud.upsert_profile(db, current_user.id, user_id, profile_in)
    return {"success": True, "data": profile}


@router.post("/{user_id}/follow", response_model=ApiResponse[ConnectionOut])
async def follow_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    connection = await connection_crud.follow_user(db, current_user.id, user_id)
    return {"success": True, "data": connection}


@router.delete("/{user_id}/follow", response_model=ApiResponse[dict])
async def unfollow_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await connection_crud.unfollow_user(db, current_user.id, user_id)
    return empty_response()


@router.get("/{user_id}/posts", response_model=ApiResponse[List[PostOut]])
async def get_user_posts(
    user_id: UUID,
    params: PageParams = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    posts, total = await post_crud.get_user_posts(db, user_id, params.page, params.limit)
    return page_response(posts, total, params)


@router.get("/{user_id}/applications", response_model=ApiResponse[List[ApplicationOut]])
async def get_user_applications(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The current user's job applications."""
    applications = await job_crud.list_user_applications(db, current_user.id, user_id)
    return list_response(applications)
