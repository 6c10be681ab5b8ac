"""
CRUD operations for posts, likes and the feed.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import BadRequestError, ConflictError, NotFoundError
from ..core.pagination import page_offset
from ..core.permissions import ensure_owner
from ..db.models.post import Post
from ..schemas.post import PostCreate, PostUpdate
from .connection import get_connected_user_ids
from .user import get_user_or_404

logger = logging.getLogger(__name__)


async def get_post(db: AsyncSession, post_id: UUID) -> Optional[Post]:
    """
    Get a post by ID, with its author and comments loaded.

    Args:
        db: Database session
        post_id: Post ID

    Returns:
        Optional[Post]: Post if found, None otherwise
    """
    result = await db.execute(
        select(Post).where(Post.id == post_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_post_or_404(db: AsyncSession, post_id: UUID) -> Post:
    post = await get_post(db, post_id)
    if not post:
        raise NotFoundError("Post not found")
    return post


def feed_visibility(caller_id: UUID, connected_ids, hide_private_connection_posts: bool = False):
    """
    Build the WHERE clause selecting posts visible to the caller.

    A post is visible when it is public, or when its author is the caller
    or one of the caller's connections. The connection branch ignores the
    post's own privacy unless ``hide_private_connection_posts`` is set, in
    which case other users' private posts are left out.
    """
    if not hide_private_connection_posts:
        authors = list(connected_ids | {caller_id})
        return or_(Post.user_id.in_(authors), Post.privacy == "public")

    return or_(
        Post.user_id == caller_id,
        and_(Post.user_id.in_(list(connected_ids)), Post.privacy != "private"),
        Post.privacy == "public",
    )


async def get_feed(
    db: AsyncSession,
    caller_id: UUID,
    page: int = 1,
    limit: int = 10,
    hide_private_connection_posts: Optional[bool] = None,
) -> Tuple[List[Post], int]:
    """
    Assemble one page of the caller's feed, newest first.

    Args:
        db: Database session
        caller_id: Authenticated user's UUID
        page: 1-based page number
        limit: Page size
        hide_private_connection_posts: Overrides
            ``FEED_HIDE_PRIVATE_CONNECTION_POSTS`` when given

    Returns:
        Tuple of (posts on this page, total number of visible posts)
    """
    if hide_private_connection_posts is None:
        hide_private_connection_posts = settings.FEED_HIDE_PRIVATE_CONNECTION_POSTS

    connected_ids = await get_connected_user_ids(db, caller_id)
    visible = feed_visibility(caller_id, connected_ids, hide_private_connection_posts)

    total = await db.scalar(select(func.count(Post.id)).where(visible))
    result = await db.execute(
        select(Post)
        .where(visible)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(page_offset(page, limit))
        .limit(limit)
    )
    posts = list(result.scalars().all())
    logger.debug(
        f"[FEED] User {caller_id}: page {page}/{limit} -> {len(posts)} of {total} "
        f"({len(connected_ids)} connections)"
    )
    return posts, total or 0


async def get_user_posts(db: AsyncSession, user_id: UUID, page: int = 1, limit: int = 10) -> Tuple[List[Post], int]:
    """
    One page of a user's posts, newest first, with the user's post count.

    Raises:
        NotFoundError: If the user does not exist
    """
    await get_user_or_404(db, user_id)

    total = await db.scalar(select(func.count(Post.id)).where(Post.user_id == user_id))
    result = await db.execute(
        select(Post)
        .where(Post.user_id == user_id)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(page_offset(page, limit))
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0


async def create_post(db: AsyncSession, caller_id: UUID, post_in: PostCreate) -> Post:
    """
    Create a new post owned by the caller.

    Args:
        db: Database session
        caller_id: Author's UUID
        post_in: Post data

    Returns:
        Post: Created post
    """
    db_post = Post(user_id=caller_id, **post_in.model_dump())
    db.add(db_post)
    await db.flush()
    logger.info(f"[FEED] User {caller_id} created post {db_post.id} ({db_post.privacy})")
    return await get_post_or_404(db, db_post.id)


async def update_post(db: AsyncSession, caller_id: UUID, post_id: UUID, post_in: PostUpdate) -> Post:
    """
    Update text, media or privacy of the caller's post.

    Raises:
        NotFoundError: If the post does not exist
        UnauthorizedError: If the caller is not the author
    """
    post = await get_post_or_404(db, post_id)
    ensure_owner(post.user_id, caller_id, "update this post")

    for field, value in post_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(post, field, value)

    await db.flush()
    return await get_post_or_404(db, post_id)


async def delete_post(db: AsyncSession, caller_id: UUID, post_id: UUID) -> None:
    """
    Delete the caller's post together with its comments.

    Raises:
        NotFoundError: If the post does not exist
        UnauthorizedError: If the caller is not the author
    """
    post = await get_post_or_404(db, post_id)
    ensure_owner(post.user_id, caller_id, "delete this post")

    comment_count = len(post.comments)
    await db.delete(post)
    await db.flush()
    logger.info(f"[FEED] User {caller_id} deleted post {post_id} and {comment_count} comments")


async def like_post(db: AsyncSession, caller_id: UUID, post_id: UUID) -> List[Dict[str, Any]]:
    """
    Like a post. The new like goes first in the list.

    Returns:
        The post's likes after the change

    Raises:
        NotFoundError: If the post does not exist
        ConflictError: If the caller already likes the post
    """
    post = await get_post_or_404(db, post_id)
    if post.is_liked_by(caller_id):
        raise ConflictError("Post already liked")

    # JSON columns only track reassignment
    post.likes = [{"user": str(caller_id)}, *(post.likes or [])]
    await db.flush()
    return post.likes


async def unlike_post(db: AsyncSession, caller_id: UUID, post_id: UUID) -> List[Dict[str, Any]]:
    """
    Remove the caller's like.

    Returns:
        The post's likes after the change

    Raises:
        NotFoundError: If the post does not exist
        BadRequestError: If the caller has not liked the post
    """
    post = await get_post_or_404(db, post_id)
    if not post.is_liked_by(caller_id):
        raise BadRequestError("Post has not yet been liked")

    post.likes = [like for like in post.likes if like.get("user") != str(caller_id)]
    await db.flush()
    return post.likes
