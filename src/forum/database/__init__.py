"""
Database module for the Forum backend
"""

from .connection import get_async_engine, get_async_session, init_database
from .repository import ForumRepository

__all__ = ["get_async_engine", "get_async_session", "init_database", "ForumRepository"]
