"""
Page/limit pagination helpers.
"""
from typing import Any, Dict, NamedTuple

from fastapi import Query

MAX_LIMIT = 100

# Largest OFFSET a BIGINT column (and SQLite INTEGER) can carry
MAX_OFFSET = 2 ** 63 - 1


def page_offset(page: int, limit: int) -> int:
    """Rows skipped before ``page``; pages past the end clamp to ``MAX_OFFSET``."""
    return min((page - 1) * limit, MAX_OFFSET)


class PageParams(NamedTuple):
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.limit)


def pagination_params(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(10, ge=1, le=MAX_LIMIT, description="Items per page"),
) -> PageParams:
    """FastAPI dependency reading ``page`` and ``limit`` from the query string."""
    return PageParams(page=page, limit=limit)


def build_pagination(page: int, limit: int, total: int) -> Dict[str, Any]:
    """
    Build the pagination descriptor for a page of ``total`` items.

    ``next`` is present only while more items follow this page, ``prev``
    only after the first page. Both are omitted otherwise.
    """
    pagination: Dict[str, Any] = {}
    if page * limit < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if page > 1:
        pagination["prev"] = {"page": page - 1, "limit": limit}
    return pagination
