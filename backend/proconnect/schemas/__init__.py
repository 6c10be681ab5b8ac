"""
Pydantic schemas for the application.
"""
from . import auth, common, connection, job, message, post, profile, user

__all__ = ["auth", "common", "connection", "job", "message", "post", "profile", "user"]
