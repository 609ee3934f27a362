"""
Repository layer: SQL against a session, results returned raw.

Usage:
    from user_service.repositories import UserRepository
"""

from .base_repository import BaseRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
]
