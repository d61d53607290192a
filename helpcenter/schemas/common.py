"""
Help Center Backend — Shared Response Schemas
===============================================

What:  Error, message and health payloads used by every router.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after a profile update or logout."""
    message: str = Field(description="Human-readable result in the deployment's language")


class ErrorResponse(BaseModel):
    """
    Standard error body for every JSON error.

    Example:
        {
            "error": "conflict",
            "message": "El email ya está registrado.",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for container and load balancer probes."""
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
