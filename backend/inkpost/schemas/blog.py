"""
Inkpost Backend — Blog Request/Response Schemas
=================================================

What:  Pydantic models defining the blog API contract.
How:   Wire names are camelCase (`coverImageUrl`, `createdAt`); Python code
       uses snake_case through CamelModel's alias generator.

Tags input:
    Clients may send tags either as a JSON array of strings or as one
    comma-delimited string ("python, fastapi"). BlogService normalizes both
    into a list; the schema only accepts the two shapes.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import Field, field_validator

from inkpost.models.blog import Blog
from inkpost.schemas.common import CamelModel, Envelope


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BlogCreate(CamelModel):
    title: Optional[str] = Field(default=None, max_length=300)
    content: Optional[str] = None
    cover_image_url: Optional[str] = Field(default=None, max_length=2048)
    tags: Optional[Union[List[str], str]] = None


class BlogUpdate(CamelModel):
    """
    Partial update. A field that is absent or null is left unchanged;
    at least one field must carry a value.
    """
    title: Optional[str] = Field(default=None, max_length=300)
    content: Optional[str] = None
    cover_image_url: Optional[str] = Field(default=None, max_length=2048)
    tags: Optional[Union[List[str], str]] = None

    def provided_fields(self) -> dict:
        """Recognized fields that carry a value, keyed by snake_case name."""
        return {
            name: value
            for name, value in self.model_dump(include={"title", "content", "cover_image_url", "tags"}).items()
            if value is not None
        }


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AuthorSnapshot(CamelModel):
    """Author identity frozen at blog creation time."""
    id: str
    name: str


class BlogResponse(CamelModel):
    id: uuid.UUID
    title: str
    slug: str
    content: str
    cover_image_url: str
    tags: List[str]
    author: AuthorSnapshot
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """SQLite hands back naive datetimes; every stored instant is UTC."""
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)

    @classmethod
    def from_model(cls, blog: Blog) -> "BlogResponse":
        return cls(
            id=blog.id,
            title=blog.title,
            slug=blog.slug,
            content=blog.content,
            cover_image_url=blog.cover_image_url or "",
            tags=list(blog.tags or []),
            author=AuthorSnapshot(id=blog.author_id, name=blog.author_name),
            created_at=blog.created_at,
            updated_at=blog.updated_at,
        )


class BlogEnvelope(Envelope):
    blog: BlogResponse


class BlogListEnvelope(Envelope):
    blogs: List[BlogResponse]
