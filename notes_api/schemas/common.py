"""
Notes API — Shared Response Schemas
=====================================

What:  Error and health payloads shared by every router.

Error formats:
    {"error": "Note with ID '7' was not found"}
    {"errors": ["title must not be empty"]}
"""

from typing import List

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(description="Human-readable error description")


class ValidationErrorResponse(BaseModel):
    errors: List[str] = Field(description="One message per invalid or missing field")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
