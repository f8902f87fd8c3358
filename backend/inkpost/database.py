"""
Inkpost Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine/session factories and the FastAPI session dependency.
How:   create_app() builds one engine and one session factory per application
       and stores them on `app.state`. The session dependency opens a session
       per request, commits on success and rolls back on error.
Who:   Used by route handlers and auth dependencies via Depends(get_db_session).
When:  Engine is created at app construction; sessions are created per-request.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite (tests, local development) uses SQLAlchemy's default pool, which
    does not accept the sizing arguments.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from inkpost.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for --autogenerate
    and `create_all_tables()` uses for development bootstrap.
    """
    pass


# ── Engine & Session Factories ────────────────────────────────────────────

def create_engine(settings: Settings) -> AsyncEngine:
    """Builds the async engine described by `settings.database_url`."""
    options = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(settings.database_url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False: ORM objects stay readable after commit, so route
    handlers can serialize a Blog after the session has committed it.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_all_tables(engine: AsyncEngine) -> None:
    """Creates every mapped table that does not exist yet."""
    # Register models with Base.metadata before create_all
    from inkpost.models import blog, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ── Session Dependency ────────────────────────────────────────────────────

async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's factory
        2. Yields it to the dependency chain and the route handler
        3. On success: commits whatever is still pending (writes are
           normally committed by the store before the handler returns;
           this step runs after the response has been sent)
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    FastAPI caches dependencies per request, so the auth dependency, the
    blog attachment dependency and the handler all share this one session.

    Example usage in a route:
        @router.get("/blogs")
        async def list_blogs(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────

async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
