"""Database models."""

from .base import Base, TimestampMixin
from .storage_entry import StorageEntry

__all__ = [
    "Base",
    "TimestampMixin",
    "StorageEntry",
]
