"""
Core package initialization.
"""

from dentaldesk.core.config import settings, get_settings
from dentaldesk.core.exceptions import (
    DentalDeskError,
    EntityNotFoundError,
    DanglingReferenceError,
    DuplicateEntityError,
    StorageWriteError,
    AuthenticationError,
    RegistrationError,
)

__all__ = [
    "settings",
    "get_settings",
    "DentalDeskError",
    "EntityNotFoundError",
    "DanglingReferenceError",
    "DuplicateEntityError",
    "StorageWriteError",
    "AuthenticationError",
    "RegistrationError",
]
