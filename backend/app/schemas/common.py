"""
Inkwell Backend — Shared Schemas
==================================

Error and health payloads used across every router.
"""

from typing import Dict, Union

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Error body returned for every failed request.
    Why:   Clients only ever need to look at one field.

    Example:
        {"error": "Email already exists"}
        {"error": {"title": "Title must be a string"}}
    """
    error: Union[str, Dict[str, str]] = Field(
        description="Error message, or field-to-message map for structural validation"
    )


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
