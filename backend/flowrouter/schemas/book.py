"""
FlowRouter Backend - Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the JSON contract of the example endpoints.
How:   Handlers parse request bodies with `body_as(request, Model)` and
       serialize ORM rows with `BookResponse.model_validate(row)`.

Schemas are separate from the SQLAlchemy model so the API never exposes
columns by accident and so create payloads cannot set the identifier.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BookCreate(BaseModel):
    """Body of PUT /api/v10/book. The identifier is always generated."""
    title: str = Field(min_length=1, max_length=255, description="Book title")
    first_edition: int = Field(description="Publication year of the first edition")


class BookTitleUpdate(BaseModel):
    """Body of PATCH /api/v10/book/{id}."""
    title: str = Field(min_length=1, max_length=255, description="New book title")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BookResponse(BaseModel):
    id: int = Field(description="System-generated identifier")
    title: str = Field(description="Book title")
    first_edition: int = Field(description="Publication year of the first edition")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "book with ID '42' was not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
