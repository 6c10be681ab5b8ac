"""
Import all models to ensure they are registered with SQLAlchemy.
"""
from ..base import Base
from .user import User, UserSession
from .profile import Profile
from .post import Post, Comment
from .connection import Connection
from .message import Conversation, Message
from .job import Job

__all__ = [
    "Base",
    "User",
    "UserSession",
    "Profile",
    "Post",
    "Comment",
    "Connection",
    "Conversation",
    "Message",
    "Job",
]
