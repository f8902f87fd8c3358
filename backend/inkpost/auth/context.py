"""
Request-scoped context values produced by the auth dependency chain.

Each stage returns one of these to the next stage instead of mutating the
request:

    attach_blog        → BlogContext | None
    authenticate_token → AuthContext
    authorize_author   → AuthorizedBlog (both of the above, ownership checked)
"""

from dataclasses import dataclass

from inkpost.models.blog import Blog
from inkpost.schemas.auth import UserSummary
from inkpost.services.token_service import TokenClaims


@dataclass(frozen=True)
class AuthContext:
    """The verified token claims plus the password-free user record."""
    claims: TokenClaims
    user: UserSummary

    @property
    def actor_id(self) -> str:
        return self.claims.subject_id


@dataclass(frozen=True)
class BlogContext:
    """The blog addressed by the route's `blog_id` path parameter."""
    blog: Blog


@dataclass(frozen=True)
class AuthorizedBlog:
    """A blog the authenticated actor is allowed to mutate."""
    auth: AuthContext
    blog: Blog
