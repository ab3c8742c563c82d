"""
API routes.
"""

from dentaldesk.api.v1 import router

__all__ = ["router"]
