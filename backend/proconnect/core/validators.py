"""
Validation utilities for authentication and user data.
"""
import re
from typing import Tuple


def validate_password(password: str) -> Tuple[bool, str]:
    """
    Validate password strength: at least 8 characters with one upper-case
    letter, one lower-case letter and one digit.

    Args:
        password: Password to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password:
        return False, "Password is required"

    if len(password) < 8:
        return False, "Password must be at least 8 characters long"

    if not re.search(r"[A-Z]", password):
        return False, "Password must contain an uppercase letter"

    if not re.search(r"[a-z]", password):
        return False, "Password must contain a lowercase letter"

    if not re.search(r"\d", password):
        return False, "Password must contain a number"

    return True, ""


def validate_name(name: str, field: str = "Name") -> Tuple[bool, str]:
    """
    Names are letters separated by spaces, hyphens or apostrophes, at least
    2 characters.
    """
    if not name or len(name.strip()) < 2:
        return False, f"{field} must be at least 2 characters long"

    if not re.match(r"^[^\W\d_]+(?:[ '\-][^\W\d_]+)*$", name.strip()):
        return False, f"{field} contains invalid characters"

    return True, ""
