"""
Inkpost Backend — Blog Service (Business Logic)
=================================================

What:  Validated create/update/delete/read operations on blogs.
How:   Applies field rules, derives slugs, checks slug uniqueness and
       persists through BlogStore.
Who:   Called by routes/blogs.py. Mutations receive the blog already loaded
       and authorized by the auth dependency chain.
When:  For every blog request.

Update Flow (PUT /api/blogs/{id}):
    ┌────────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │ attach     │───▶│ authenticate │───▶│ authorize    │───▶│ update() │
    │ blog (404) │    │ token (401)  │    │ author (403) │    │ (400/409)│
    └────────────┘    └──────────────┘    └──────────────┘    └──────────┘

Slug rules:
    - slug = slugify(title) on create and whenever the title changes
    - a slug owned by another blog → ConflictError (409)
    - a title with no letters or digits has no slug → ValidationError (400)
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.context import AuthContext
from inkpost.exceptions import ConflictError, NotFoundError, ValidationError
from inkpost.models.blog import Blog
from inkpost.schemas.blog import BlogCreate, BlogResponse, BlogUpdate
from inkpost.services.slug import slugify
from inkpost.stores.base import parse_id
from inkpost.stores.blog_store import SLUG_CONFLICT_MESSAGE, BlogStore

logger = logging.getLogger(__name__)


def normalize_tags(tags: Optional[Union[List[str], str]]) -> List[str]:
    """
    Accepts a list of tags or one comma-delimited string.

    Entries are trimmed and blanks dropped; None becomes [].

        normalize_tags("python, fastapi,,")  → ["python", "fastapi"]
        normalize_tags([" a ", "b"])         → ["a", "b"]
    """
    if tags is None:
        return []
    items = tags.split(",") if isinstance(tags, str) else tags
    return [tag.strip() for tag in items if tag and tag.strip()]


class BlogService:
    """
    Business logic layer for blog operations.

    Stateless: the database session arrives with each call and the store
    is built around it.
    """

    def __init__(self, store_factory=BlogStore):
        self.store_factory = store_factory

    # ── Validation helpers ────────────────────────────────────────────────

    @staticmethod
    def _require_text(value: Optional[str], field: str) -> str:
        if value is None or not value.strip():
            raise ValidationError(f"{field.capitalize()} must not be empty", field=field)
        return value

    @staticmethod
    def _slug_for(title: str) -> str:
        slug = slugify(title)
        if not slug:
            raise ValidationError(
                "Title must contain at least one letter or digit",
                field="title",
            )
        return slug

    async def _ensure_slug_available(
        self, store: BlogStore, slug: str, exclude: Optional[Blog] = None
    ) -> None:
        if await store.slug_taken(slug, exclude_id=exclude.id if exclude else None):
            logger.info("Slug '%s' already in use", slug)
            raise ConflictError(SLUG_CONFLICT_MESSAGE, field="title", context={"slug": slug})

    # ── Mutations ─────────────────────────────────────────────────────────

    async def create_blog(
        self, db: AsyncSession, auth: AuthContext, payload: BlogCreate
    ) -> BlogResponse:
        """
        Creates a blog authored by the authenticated actor.

        The author snapshot comes from the token claims, never from the
        request body.

        Raises:
            ValidationError: missing/empty title or content, unsluggable title
            ConflictError: the derived slug is already taken
        """
        if not (payload.title and payload.title.strip() and payload.content and payload.content.strip()):
            raise ValidationError("Title and content are required")

        store = self.store_factory(db)
        slug = self._slug_for(payload.title)
        await self._ensure_slug_available(store, slug)

        now = datetime.now(timezone.utc)
        blog = Blog(
            title=payload.title,
            slug=slug,
            content=payload.content,
            cover_image_url=payload.cover_image_url or "",
            tags=normalize_tags(payload.tags),
            author_id=auth.claims.subject_id,
            author_name=auth.claims.name,
            created_at=now,
            updated_at=now,
        )
        await store.add(blog)
        await store.commit("blog.create")
        logger.info("Blog %s created by %s (slug=%s)", blog.id, blog.author_id, slug)
        return BlogResponse.from_model(blog)

    async def update_blog(
        self, db: AsyncSession, blog: Blog, payload: BlogUpdate
    ) -> BlogResponse:
        """
        Overwrites the provided fields of an authorized blog.

        Absent or null fields are left unchanged. A title change re-derives
        the slug.

        Raises:
            ValidationError: no recognized field provided, or an empty
                             title/content
            ConflictError: the new slug belongs to another blog
        """
        changes = payload.provided_fields()
        if not changes:
            raise ValidationError("No changes provided")

        store = self.store_factory(db)

        if "title" in changes:
            title = self._require_text(changes["title"], "title")
            slug = self._slug_for(title)
            if slug != blog.slug:
                await self._ensure_slug_available(store, slug, exclude=blog)
            blog.title = title
            blog.slug = slug

        if "content" in changes:
            blog.content = self._require_text(changes["content"], "content")

        if "cover_image_url" in changes:
            blog.cover_image_url = changes["cover_image_url"]

        if "tags" in changes:
            blog.tags = normalize_tags(changes["tags"])

        blog.updated_at = datetime.now(timezone.utc)
        await store.save(blog)
        await store.commit("blog.update")
        logger.info("Blog %s updated: %s", blog.id, ", ".join(sorted(changes)))
        return BlogResponse.from_model(blog)

    async def delete_blog(self, db: AsyncSession, blog: Blog) -> None:
        """Removes an authorized blog permanently."""
        store = self.store_factory(db)
        await store.delete(blog)
        await store.commit("blog.delete")
        logger.info("Blog %s deleted by %s", blog.id, blog.author_id)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_blogs(self, db: AsyncSession) -> List[BlogResponse]:
        """All blogs, newest first."""
        blogs = await self.store_factory(db).list_newest_first()
        return [BlogResponse.from_model(blog) for blog in blogs]

    async def get_blog(self, db: AsyncSession, blog_id: str) -> BlogResponse:
        """
        Raises:
            ValidationError: `blog_id` is not a UUID
            NotFoundError: no blog with that id
        """
        parsed = parse_id(blog_id, "blog")
        blog = await self.store_factory(db).get_by_id(parsed)
        if blog is None:
            raise NotFoundError(resource="blog", resource_id=str(parsed))
        return BlogResponse.from_model(blog)

    async def get_blog_by_slug(self, db: AsyncSession, slug: str) -> BlogResponse:
        blog = await self.store_factory(db).get_by_slug(slug)
        if blog is None:
            raise NotFoundError(resource="blog", resource_id=slug)
        return BlogResponse.from_model(blog)


# Stateless; shared by every request
blog_service = BlogService()
