"""
CRUD operations for the application.
"""
from . import comment, connection, job, message, post, profile, user

__all__ = ["comment", "connection", "job", "message", "post", "profile", "user"]
