"""
Ownership checks shared by every mutating operation.
"""
import logging
from typing import Any

from .exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def is_owner(owner_id: Any, caller_id: Any) -> bool:
    return owner_id is not None and str(owner_id) == str(caller_id)


def ensure_owner(owner_id: Any, caller_id: Any, action: str) -> None:
    """
    Raise ``UnauthorizedError("Not authorized to <action>")`` unless the
    caller owns the resource.

    Args:
        owner_id: Id of the user that owns the resource
        caller_id: Id of the authenticated caller
        action: Verb phrase used in the error, e.g. "update this post"

    Raises:
        UnauthorizedError: If the caller is not the owner
    """
    if not is_owner(owner_id, caller_id):
        logger.warning(f"[PERMISSIONS] User {caller_id} denied: {action} (owner {owner_id})")
        raise UnauthorizedError(f"Not authorized to {action}")
