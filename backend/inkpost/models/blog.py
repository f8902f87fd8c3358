"""
Inkpost Backend — Blog SQLAlchemy Model
=========================================

What:  ORM model representing the `blogs` table.
Who:   Used by BlogStore for CRUD operations and by Alembic for schema management.
When:  Created by an authenticated user; mutated and deleted only by its author.

Table Design:
    - slug: unique index; derived from title on create and on every title change
    - tags: JSON list of strings (order irrelevant, default empty)
    - author_id / author_name: denormalized snapshot of the creator taken at
      creation time. Not a foreign key: renaming a user does not rewrite
      past blogs, and the author never changes after creation.
    - created_at index: serves the newest-first listing
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from inkpost.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Blog(Base):
    """
    A blog post.

    Lifecycle:
        1. Created by POST /api/blogs (author = the authenticated user)
        2. Updated by PUT /api/blogs/{id} (author only; slug follows title)
        3. Deleted by DELETE /api/blogs/{id} (author only; permanent)
    """

    __tablename__ = "blogs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(300), nullable=False)

    slug: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Empty string means "no cover image"
    cover_image_url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        default="",
    )

    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    # ── Author Snapshot ───────────────────────────────────────────────────
    author_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    author_name: Mapped[str] = mapped_column(String(100), nullable=False)

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        Index("idx_blogs_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Blog(id={self.id}, slug='{self.slug}', author_id='{self.author_id}')>"
