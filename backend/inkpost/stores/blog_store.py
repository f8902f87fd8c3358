"""
Inkpost Backend — Blog Store
==============================

What:  Reads and writes Blog records.
Who:   BlogService and the attach_blog dependency.

Query Patterns:
    - Newest first: SELECT ... ORDER BY created_at DESC
      → served by idx_blogs_created_at; full scan, no pagination
    - Point lookups by primary key and by the unique slug index
"""

import uuid
from typing import List, Optional

from sqlalchemy import desc, select

from inkpost.models.blog import Blog
from inkpost.stores.base import SessionStore

SLUG_CONFLICT_MESSAGE = "A blog with this title already exists"


class BlogStore(SessionStore):

    async def get_by_id(self, blog_id: uuid.UUID) -> Optional[Blog]:
        result = await self._execute(
            "blog.get_by_id",
            select(Blog).where(Blog.id == blog_id),
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Blog]:
        result = await self._execute(
            "blog.get_by_slug",
            select(Blog).where(Blog.slug == slug),
        )
        return result.scalar_one_or_none()

    async def slug_taken(self, slug: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
        """True if another blog already owns `slug`."""
        query = select(Blog.id).where(Blog.slug == slug)
        if exclude_id is not None:
            query = query.where(Blog.id != exclude_id)
        result = await self._execute("blog.slug_taken", query.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_newest_first(self) -> List[Blog]:
        result = await self._execute(
            "blog.list",
            select(Blog).order_by(desc(Blog.created_at)),
        )
        return list(result.scalars().all())

    async def add(self, blog: Blog) -> Blog:
        self.db.add(blog)
        await self._flush("blog.add", SLUG_CONFLICT_MESSAGE)
        return blog

    async def save(self, blog: Blog) -> Blog:
        """Flushes changes made to an already-loaded blog."""
        await self._flush("blog.save", SLUG_CONFLICT_MESSAGE)
        return blog

    async def delete(self, blog: Blog) -> None:
        await self.db.delete(blog)
        await self._flush("blog.delete", "Blog could not be deleted")
