"""
Inkpost Backend — Credential Store
====================================

What:  Reads and writes User records.
Who:   UserService (register/login) and the auth dependency (identity re-check).
"""

import uuid
from typing import Optional

from sqlalchemy import or_, select

from inkpost.models.user import User
from inkpost.stores.base import SessionStore


class UserStore(SessionStore):

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        result = await self._execute(
            "user.get_by_id",
            select(User).where(User.id == user_id),
        )
        return result.scalar_one_or_none()

    async def find_by_username_or_email(self, username: str, email: str) -> Optional[User]:
        """First user holding either `username` or `email` (registration duplicate check)."""
        result = await self._execute(
            "user.find_duplicate",
            select(User).where(or_(User.username == username, User.email == email)).limit(1),
        )
        return result.scalar_one_or_none()

    async def find_by_login(self, username_or_email: str) -> Optional[User]:
        """Matches the login identifier against both username and email."""
        result = await self._execute(
            "user.find_by_login",
            select(User)
            .where(or_(User.username == username_or_email, User.email == username_or_email))
            .limit(1),
        )
        return result.scalar_one_or_none()

    async def add(self, user: User) -> User:
        self.db.add(user)
        await self._flush("user.add", "Username or email already exists")
        return user
