"""Shared helpers for the session-bound stores."""

import logging
import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.exceptions import ConflictError, DatabaseError, ValidationError

logger = logging.getLogger(__name__)


def parse_id(value: str, resource: str) -> uuid.UUID:
    """
    Parses a path identifier.

    Raises:
        ValidationError: `value` is not a UUID (400, distinct from a 404 for
                         a well-formed identifier that matches nothing)
    """
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(
            message=f"Invalid {resource} id format",
            field="id",
            context={"value": str(value)[:64]},
        )


def try_parse_id(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class SessionStore:
    """Base class holding the request's session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _execute(self, operation: str, statement):
        """Runs a query, wrapping driver failures in DatabaseError."""
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as e:
            logger.error("%s failed: %s", operation, str(e), exc_info=True)
            raise DatabaseError(context={"operation": operation, "error_type": type(e).__name__})

    async def _flush(self, operation: str, conflict_message: str) -> None:
        """
        Flushes pending writes so constraint violations surface inside the
        handler (before the response is produced) instead of at commit.
        """
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning("%s: unique constraint violated: %s", operation, e.orig)
            raise ConflictError(message=conflict_message, context={"operation": operation})
        except SQLAlchemyError as e:
            logger.error("%s failed: %s", operation, str(e), exc_info=True)
            raise DatabaseError(context={"operation": operation, "error_type": type(e).__name__})

    async def commit(self, operation: str) -> None:
        """
        Commits the request's transaction before the handler returns, so a
        failed commit reaches the client as an error response.
        """
        try:
            await self.db.commit()
        except IntegrityError as e:
            logger.warning("%s: commit rejected: %s", operation, e.orig)
            await self.db.rollback()
            raise ConflictError(message="Resource already exists", context={"operation": operation})
        except SQLAlchemyError as e:
            logger.error("%s: commit failed: %s", operation, str(e), exc_info=True)
            await self.db.rollback()
            raise DatabaseError(context={"operation": operation, "error_type": type(e).__name__})
