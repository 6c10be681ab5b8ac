"""
CRUD operations for comments.
"""
import logging
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError
from ..core.permissions import ensure_owner
from ..db.models.post import Comment
from .post import get_post_or_404

logger = logging.getLogger(__name__)


async def get_comment(db: AsyncSession, comment_id: UUID) -> Comment:
    result = await db.execute(
        select(Comment).where(Comment.id == comment_id).execution_options(populate_existing=True)
    )
    comment = result.scalar_one_or_none()
    if not comment:
        raise NotFoundError("Comment not found")
    return comment


async def list_comments(db: AsyncSession, post_id: UUID) -> List[Comment]:
    """
    Comments on a post, newest first.

    Raises:
        NotFoundError: If the post does not exist
    """
    await get_post_or_404(db, post_id)
    result = await db.execute(
        select(Comment)
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    return list(result.scalars().all())


async def add_comment(db: AsyncSession, caller_id: UUID, post_id: UUID, text: str) -> Comment:
    """
    Comment on a post as the caller.

    Raises:
        NotFoundError: If the post does not exist
    """
    await get_post_or_404(db, post_id)
    comment = Comment(post_id=post_id, user_id=caller_id, text=text)
    db.add(comment)
    await db.flush()
    logger.info(f"[FEED] User {caller_id} commented on post {post_id}")
    return await get_comment(db, comment.id)


async def update_comment(db: AsyncSession, caller_id: UUID, comment_id: UUID, text: str) -> Comment:
    """
    Raises:
        NotFoundError: If the comment does not exist
        UnauthorizedError: If the caller did not write it
    """
    comment = await get_comment(db, comment_id)
    ensure_owner(comment.user_id, caller_id, "update this comment")
    comment.text = text
    await db.flush()
    return await get_comment(db, comment_id)


async def delete_comment(db: AsyncSession, caller_id: UUID, comment_id: UUID) -> None:
    """
    Raises:
        NotFoundError: If the comment does not exist
        UnauthorizedError: If the caller did not write it
    """
    comment = await get_comment(db, comment_id)
    ensure_owner(comment.user_id, caller_id, "delete this comment")
    await db.delete(comment)
    await db.flush()
    logger.info(f"[FEED] User {caller_id} deleted comment {comment_id}")
