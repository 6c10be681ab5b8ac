"""
Shared dependencies and envelope helpers for API endpoints.
"""
from typing import Any, Dict, Sequence

from ..core.pagination import PageParams, build_pagination, pagination_params
from ..schemas.common import ErrorResponse

__all__ = ["ERROR_RESPONSES", "pagination_params", "list_response", "page_response", "empty_response"]

# Error envelope documented on every router
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or conflicting state"},
    401: {"model": ErrorResponse, "description": "Missing token or not allowed to act on this resource"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
}


def list_response(items: Sequence[Any]) -> Dict[str, Any]:
    return {"success": True, "count": len(items), "data": items}


def page_response(items: Sequence[Any], total: int, params: PageParams) -> Dict[str, Any]:
    """Envelope for one page of a paginated listing."""
    return {
        "success": True,
        "count": len(items),
        "pagination": build_pagination(params.page, params.limit, total),
        "data": items,
    }


def empty_response() -> Dict[str, Any]:
    return {"success": True, "data": {}}
