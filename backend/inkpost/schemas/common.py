"""
Inkpost Backend — Shared Response Envelope
============================================

What:  Base models for the `{error, message, ...payload}` envelope every
       response body follows, plus the error and health payloads.
Who:   Extended by the auth and blog schemas; ErrorResponse documents the
       shape produced by the global exception handlers in main.py.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes snake_case fields as camelCase and accepts either form on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(CamelModel):
    """Success envelope. Subclasses add the payload fields."""

    error: bool = Field(default=False, description="Always false on success")
    message: str = Field(default="OK", description="Human-readable outcome")


class MessageResponse(Envelope):
    """Envelope with no payload (e.g. delete confirmation)."""


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Fields:
        error: Always true
        message: Human-readable description for display to users
        code: Machine-readable error kind (e.g. "validation_error", "forbidden")
        details: Optional extra context (e.g. which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": true,
            "message": "Access denied: not the author",
            "code": "forbidden",
            "request_id": "1f0c9a2e"
        }
    """
    error: bool = Field(default=True)
    message: str
    code: str
    details: Optional[dict] = None
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
