"""
Shared dependencies for FastAPI dependency injection.
"""

from fastapi import Request

from dentaldesk.core.config import get_settings, Settings
from dentaldesk.services.auth_service import AuthService
from dentaldesk.services.data_store import DataStore


def get_settings_dependency() -> Settings:
    """Dependency to get application settings."""
    return get_settings()


def get_data_store(request: Request) -> DataStore:
    """Dependency to get the store created at startup."""
    return request.app.state.store


def get_auth_service(request: Request) -> AuthService:
    """Dependency to get an auth service over the shared store."""
    return AuthService(get_data_store(request))
