"""
Inkpost Backend — Blog Service Unit Tests
===========================================

What:  Tests for BlogService business logic in isolation.
How:   A fake BlogStore (MagicMock with AsyncMock methods) is injected through
       `store_factory`, so no database is involved.

What we test:
    ✅ create: author snapshot from token claims, slug derivation, tag normalization
    ✅ create: missing fields, unsluggable title, slug conflict
    ✅ update: partial overwrite, slug re-derivation, empty payload rejected
    ✅ reads: list ordering passthrough, bad id format vs unknown id
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from inkpost.auth.context import AuthContext
from inkpost.exceptions import ConflictError, NotFoundError, ValidationError
from inkpost.schemas.auth import UserSummary
from inkpost.schemas.blog import BlogCreate, BlogUpdate
from inkpost.services.blog_service import BlogService, normalize_tags
from inkpost.services.token_service import TokenClaims


def _assign_id(blog):
    blog.id = uuid.uuid4()
    return blog


@pytest.fixture
def store():
    fake = MagicMock()
    fake.add = AsyncMock(side_effect=_assign_id)
    fake.save = AsyncMock(side_effect=lambda blog: blog)
    fake.delete = AsyncMock()
    fake.commit = AsyncMock()
    fake.slug_taken = AsyncMock(return_value=False)
    fake.get_by_id = AsyncMock(return_value=None)
    fake.get_by_slug = AsyncMock(return_value=None)
    fake.list_newest_first = AsyncMock(return_value=[])
    return fake


@pytest.fixture
def service(store):
    return BlogService(store_factory=lambda db: store)


@pytest.fixture
def auth():
    user_id = uuid.uuid4()
    return AuthContext(
        claims=TokenClaims(subject_id=str(user_id), name="Alice"),
        user=UserSummary(id=user_id, name="Alice", username="alice", email="a@x.com"),
    )


# ══════════════════════════════════════════════════════════════════════════
# normalize_tags
# ══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("python, fastapi", ["python", "fastapi"]),
        ("solo", ["solo"]),
        (" a , ,b,", ["a", "b"]),
        ([" x ", "y", ""], ["x", "y"]),
        ([], []),
    ],
)
def test_normalize_tags(raw, expected):
    assert normalize_tags(raw) == expected


# ══════════════════════════════════════════════════════════════════════════
# create_blog
# ══════════════════════════════════════════════════════════════════════════

class TestCreateBlog:

    @pytest.mark.asyncio
    async def test_create_uses_token_identity_and_derives_slug(self, service, store, auth, mock_db_session):
        payload = BlogCreate(title="Hello World", content="Body", tags="python, fastapi")

        result = await service.create_blog(mock_db_session, auth, payload)

        assert result.slug == "hello-world"
        assert result.author.id == auth.claims.subject_id
        assert result.author.name == "Alice"
        assert result.tags == ["python", "fastapi"]
        assert result.cover_image_url == ""
        assert result.created_at == result.updated_at
        store.slug_taken.assert_awaited_once_with("hello-world", exclude_id=None)
        store.add.assert_awaited_once()
        store.commit.assert_awaited_once_with("blog.create")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fields",
        [{"content": "Body"}, {"title": "Title"}, {"title": "   ", "content": "Body"}, {"title": "T", "content": ""}],
    )
    async def test_create_requires_title_and_content(self, service, store, auth, mock_db_session, fields):
        with pytest.raises(ValidationError, match="Title and content are required"):
            await service.create_blog(mock_db_session, auth, BlogCreate(**fields))
        store.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_rejects_title_without_slug(self, service, store, auth, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_blog(mock_db_session, auth, BlogCreate(title="!!!", content="Body"))
        assert exc_info.value.field == "title"
        store.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_conflicting_slug(self, service, store, auth, mock_db_session):
        store.slug_taken.return_value = True

        with pytest.raises(ConflictError) as exc_info:
            await service.create_blog(mock_db_session, auth, BlogCreate(title="Hello World", content="Body"))

        assert exc_info.value.context["slug"] == "hello-world"
        store.add.assert_not_awaited()
        store.commit.assert_not_awaited()


# ══════════════════════════════════════════════════════════════════════════
# update_blog
# ══════════════════════════════════════════════════════════════════════════

class TestUpdateBlog:

    @pytest.mark.asyncio
    async def test_update_overwrites_only_provided_fields(self, service, store, make_blog, mock_db_session):
        earlier = datetime.now(timezone.utc) - timedelta(hours=1)
        blog = make_blog(tags=["old"], created_at=earlier, updated_at=earlier)

        result = await service.update_blog(mock_db_session, blog, BlogUpdate(content="New body"))

        assert result.content == "New body"
        assert result.title == "Hello World"
        assert result.slug == "hello-world"
        assert result.tags == ["old"]
        assert result.created_at == earlier
        assert result.updated_at > earlier
        store.slug_taken.assert_not_awaited()
        store.save.assert_awaited_once_with(blog)
        store.commit.assert_awaited_once_with("blog.update")

    @pytest.mark.asyncio
    async def test_title_change_rederives_slug(self, service, store, make_blog, mock_db_session):
        blog = make_blog()

        result = await service.update_blog(mock_db_session, blog, BlogUpdate(title="Second Take"))

        assert result.slug == "second-take"
        store.slug_taken.assert_awaited_once_with("second-take", exclude_id=blog.id)

    @pytest.mark.asyncio
    async def test_same_slug_title_skips_conflict_check(self, service, store, make_blog, mock_db_session):
        blog = make_blog()

        result = await service.update_blog(mock_db_session, blog, BlogUpdate(title="HELLO, world!"))

        assert result.title == "HELLO, world!"
        assert result.slug == "hello-world"
        store.slug_taken.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_title_taken_by_another_blog(self, service, store, make_blog, mock_db_session):
        blog = make_blog()
        store.slug_taken.return_value = True

        with pytest.raises(ConflictError):
            await service.update_blog(mock_db_session, blog, BlogUpdate(title="Taken Title"))

        assert blog.title == "Hello World"
        store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_update_is_rejected(self, service, store, make_blog, mock_db_session):
        blog = make_blog()

        with pytest.raises(ValidationError, match="No changes provided"):
            await service.update_blog(mock_db_session, blog, BlogUpdate())

        store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_fields_alone_are_an_empty_update(self, service, make_blog, mock_db_session):
        payload = BlogUpdate.model_validate({"author": {"id": "x", "name": "Mallory"}})

        with pytest.raises(ValidationError, match="No changes provided"):
            await service.update_blog(mock_db_session, make_blog(), payload)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["title", "content"])
    async def test_blank_required_text_is_rejected(self, service, make_blog, mock_db_session, field):
        with pytest.raises(ValidationError) as exc_info:
            await service.update_blog(mock_db_session, make_blog(), BlogUpdate(**{field: "  "}))
        assert exc_info.value.field == field

    @pytest.mark.asyncio
    async def test_tags_and_cover_are_replaced(self, service, make_blog, mock_db_session):
        blog = make_blog(tags=["old"])

        result = await service.update_blog(
            mock_db_session,
            blog,
            BlogUpdate.model_validate({"tags": ["new", " other "], "coverImageUrl": "http://img/x.png"}),
        )

        assert result.tags == ["new", "other"]
        assert result.cover_image_url == "http://img/x.png"


# ══════════════════════════════════════════════════════════════════════════
# Reads and delete
# ══════════════════════════════════════════════════════════════════════════

class TestReads:

    @pytest.mark.asyncio
    async def test_list_preserves_store_order(self, service, store, make_blog, mock_db_session):
        newer, older = make_blog(slug="b"), make_blog(slug="a")
        store.list_newest_first.return_value = [newer, older]

        result = await service.list_blogs(mock_db_session)

        assert [b.slug for b in result] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_get_blog_with_malformed_id(self, service, store, mock_db_session):
        with pytest.raises(ValidationError, match="Invalid blog id format"):
            await service.get_blog(mock_db_session, "not-a-uuid")
        store.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_blog_unknown_id(self, service, mock_db_session):
        with pytest.raises(NotFoundError, match="Blog not found"):
            await service.get_blog(mock_db_session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_get_blog_found(self, service, store, make_blog, mock_db_session):
        blog = make_blog()
        store.get_by_id.return_value = blog

        result = await service.get_blog(mock_db_session, str(blog.id))

        assert result.id == blog.id
        store.get_by_id.assert_awaited_once_with(blog.id)

    @pytest.mark.asyncio
    async def test_get_by_slug_unknown(self, service, mock_db_session):
        with pytest.raises(NotFoundError):
            await service.get_blog_by_slug(mock_db_session, "nothing-here")

    @pytest.mark.asyncio
    async def test_delete_goes_through_store(self, service, store, make_blog, mock_db_session):
        blog = make_blog()
        await service.delete_blog(mock_db_session, blog)
        store.delete.assert_awaited_once_with(blog)
        store.commit.assert_awaited_once_with("blog.delete")
