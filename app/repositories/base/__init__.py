"""
Base repositories package.

Provides the generic repository every aggregate repository extends.
"""

from app.repositories.base.base_repository import BaseRepository, ModelType

__all__ = [
    "BaseRepository",
    "ModelType",
]
