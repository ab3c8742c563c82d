"""
Pydantic schemas shared by the API endpoints.
"""

from datetime import datetime
from pydantic import BaseModel, Field


# Health Check Schema
class HealthCheck(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    version: str
    persisted: bool = True
    timestamp: datetime = Field(default_factory=datetime.now)
