"""
Blog API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the /posts API contract.
How:   FastAPI uses these models to validate request bodies, serialize
       responses, and generate the OpenAPI document.
Who:   Used by the routes, PostResource and every PostStore implementation.

Schemas are separate from the SQLAlchemy model (models/post.py): the store
maps rows onto these types, so the resource never sees ORM objects.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ══════════════════════════════════════════════════════════════════════════
# Domain Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class Post(BaseModel):
    """
    What:  Full representation of a blog post.
    Who:   Returned by GET /posts/{id}.

    created_at and updated_at are server-assigned; created_at survives
    updates, updated_at moves only when the content fields change.
    """
    id: str = Field(min_length=1, description="Opaque post identifier")
    title: str = Field(description="Post title")
    content: str = Field(default="", description="Post body")
    author: Optional[str] = Field(default=None, description="Display name of the author")
    created_at: datetime = Field(description="When the post was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the post was last changed (UTC ISO 8601)")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v: datetime) -> datetime:
        return as_utc(v)


class PostSummary(BaseModel):
    """
    What:  Compact post representation for the listing view.
    Who:   Returned by GET /posts as array items.
    """
    id: str = Field(description="Opaque post identifier")
    title: str = Field(description="Post title")
    author: Optional[str] = Field(default=None, description="Display name of the author")
    created_at: datetime = Field(description="Creation timestamp (UTC)")

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        return as_utc(v)

    @classmethod
    def from_post(cls, post: Post) -> "PostSummary":
        return cls(id=post.id, title=post.title, author=post.author, created_at=post.created_at)


class SuccessResponse(BaseModel):
    """Acknowledgement-only response; carries no post data."""
    success: bool = Field(default=True)
    message: str = Field(default="OK", description="Human-readable outcome")


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class PostUpdate(BaseModel):
    """
    What:  Body of PUT/POST /posts/{id}.
    How:   Replaces the content fields of an existing post, or seeds a new one.
           Server-assigned fields (id, timestamps) are not accepted.
    """
    title: str = Field(max_length=255, description="Post title")
    content: str = Field(default="", description="Post body")
    author: Optional[str] = Field(default=None, max_length=255, description="Author name")

    model_config = {"extra": "forbid"}

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Titles must contain something other than whitespace."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("title must not be blank")
        return stripped


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all application errors.

    Example:
        {
            "error": "not_found",
            "message": "post with ID 'abc' was not found",
            "details": null,
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store_backend: str = Field(description="Configured store: none, memory, database")
    store: str = Field(description="Store status: available, unavailable")
    writes_enabled: bool = Field(description="Whether the write policy gate is open")
    uptime_seconds: float = Field(description="Seconds since service started")
