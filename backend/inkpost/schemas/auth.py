"""
Inkpost Backend — Account Request/Response Schemas
====================================================

What:  API contract for registration, login and identity lookup.
How:   Request fields are optional at the schema level; UserService reports
       missing values with a single "All fields are required" message so the
       client sees the same 400 whichever field it forgot.
"""

import uuid
from typing import Optional

from pydantic import EmailStr, Field

from inkpost.schemas.common import CamelModel, Envelope


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(CamelModel):
    name: Optional[str] = Field(default=None, max_length=100)
    username: Optional[str] = Field(default=None, max_length=50)
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    """`usernameOrEmail` is matched against both the username and the email column."""
    username_or_email: Optional[str] = None
    password: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserSummary(CamelModel):
    """
    Public view of a User.

    Never carries the password hash; this is also the shape the auth
    dependency hands to downstream handlers.
    """
    id: uuid.UUID
    name: str
    username: str
    email: str

    model_config = {"from_attributes": True}


class AuthResponse(Envelope):
    """Returned by register (201) and login (200)."""
    user: UserSummary
    token: str = Field(description="Bearer token for the Authorization header")


class UserResponse(Envelope):
    """Returned by GET /api/auth/get-user."""
    user: UserSummary
