"""
API endpoints for the connection graph.
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth.dependencies import get_current_user
from ...crud import connection as connection_crud
from ...db.models.user import User
from ...db.session import get_db
from ...schemas.common import ApiResponse, UserSummary
from ...schemas.connection import ConnectedUser, ConnectionOut
from ..dependencies import ERROR_RESPONSES, empty_response, list_response

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/connections",
    tags=["connections"],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=ApiResponse[List[ConnectedUser]])
async def get_connections(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Accepted connections of the current user."""
    connections = await connection_crud.get_connections(db, current_user.id)
    return list_response(connections)


@router.get("/suggestions", response_model=ApiResponse[List[UserSummary]])
async def get_suggestions(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Users the current user has no connection record with."""
    users = await connection_crud.get_suggestions(db, current_user.id)
    return list_response(users)


@router.get("/pending", response_model=ApiResponse[List[ConnectionOut]])
async def get_pending_requests(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Incoming requests awaiting the current user's answer."""
    requests = await connection_crud.get_pending_requests(db, current_user.id)
    return list_response(requests)


@router.post(
    "/request/{user_id}",
    response_model=ApiResponse[ConnectionOut],
    status_code=status.HTTP_201_CREATED,
)
async def send_connection_request(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    connection = await connection_crud.send_request(db, current_user.id, user_id)
    return {"success": True, "data": connection}


@router.put("/accept/{connection_id}", response_model=ApiResponse[ConnectionOut])
async def accept_connection_request(
    connection_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    connection = await connection_crud.accept_request(db, current_user.id, connection_id)
    return {"success": True, "data": connection}


@router.put("/reject/{connection_id}", response_model=ApiResponse[ConnectionOut])
async def reject_connection_request(
    connection_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    connection = await connection_crud.reject_request(db, current_user.id, connection_id)
    return {"success": True, "data": connection}


@router.delete("/{connection_id}", response_model=ApiResponse[dict])
async def remove_connection(
    connection_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await connection_crud.remove_connection(db, current_user.id, connection_id)
    return empty_response()
