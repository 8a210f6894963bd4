"""
Health check response schema.
"""

from pydantic import BaseModel
from typing import Any, Dict


class DatabaseHealth(BaseModel):
    state: str
    ping: Dict[str, Any]


class HealthResponse(BaseModel):
    """Service and database health."""

    status: str
    timestamp: str
    service: str
    database: DatabaseHealth
