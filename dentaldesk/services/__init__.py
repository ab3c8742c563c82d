"""
Services package initialization.
"""

from dentaldesk.services.storage_service import (
    StorageBackend,
    StorageKeys,
    MemoryStorage,
    DatabaseStorage,
    build_storage,
)
from dentaldesk.services.data_store import DataStore
from dentaldesk.services.auth_service import AuthService

__all__ = [
    "StorageBackend",
    "StorageKeys",
    "MemoryStorage",
    "DatabaseStorage",
    "build_storage",
    "DataStore",
    "AuthService",
]
