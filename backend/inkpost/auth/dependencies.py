"""
Inkpost Backend — Authentication & Authorization Dependencies
===============================================================

What:  The per-request gates guarding account and blog routes.
How:   FastAPI dependencies composed with Depends(). Each gate returns an
       explicit context value (see auth/context.py) consumed by the next
       gate or by the route handler.
Who:   Declared in route signatures (routes/auth.py, routes/blogs.py).

Pipeline for PUT/DELETE /api/blogs/{blog_id}:

    attached_blog ──▶ BlogContext      (404 if the blog does not exist,
                                        400 if blog_id is not a UUID)
    authenticate_token ──▶ AuthContext (401 on missing/invalid/expired
                                        token or unknown user)
    authorize_author ──▶ AuthorizedBlog (403 if the actor is not the author)

    FastAPI resolves sub-dependencies in declaration order, so the blog is
    attached before the token is checked: a request for a missing blog
    answers 404 whatever its credentials.

Dependency caching:
    FastAPI calls each dependency once per request, keyed by the callable.
    `attached_blog` is a single module-level instance, so a route that
    depends on it directly AND through authorize_author loads the blog once.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.context import AuthContext, AuthorizedBlog, BlogContext
from inkpost.database import get_db_session
from inkpost.exceptions import (
    ForbiddenError,
    MissingResourceError,
    NotFoundError,
    TokenError,
    UnauthenticatedError,
)
from inkpost.schemas.auth import UserSummary
from inkpost.services.token_service import TokenService
from inkpost.stores.base import parse_id, try_parse_id
from inkpost.stores.blog_store import BlogStore
from inkpost.stores.user_store import UserStore

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must produce our 401 envelope,
# not Starlette's default 403
bearer_scheme = HTTPBearer(auto_error=False)

BLOG_ID_PARAM = "blog_id"


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# ══════════════════════════════════════════════════════════════════════════
# Authentication
# ══════════════════════════════════════════════════════════════════════════

async def authenticate_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db_session),
) -> AuthContext:
    """
    Verifies the bearer token and re-loads the user it names.

    The user lookup runs on every request: a well-signed token for an
    account that no longer exists is rejected like any other bad token.

    Raises:
        UnauthenticatedError: no token, invalid/expired token, unknown user
    """
    if credentials is None:
        raise UnauthenticatedError("Access denied: no token provided")

    try:
        claims = token_service.verify(credentials.credentials)
    except TokenError as e:
        logger.info("Rejected bearer token: %s", e)
        raise UnauthenticatedError(
            "Invalid or expired token",
            context={"reason": type(e).__name__},
        )

    user_id = try_parse_id(claims.subject_id)
    user = await UserStore(db).get_by_id(user_id) if user_id else None
    if user is None:
        logger.warning("Token subject %s no longer exists", claims.subject_id)
        raise UnauthenticatedError("User not found", context={"subject_id": claims.subject_id})

    return AuthContext(claims=claims, user=UserSummary.model_validate(user))


# ══════════════════════════════════════════════════════════════════════════
# Resource Attachment
# ══════════════════════════════════════════════════════════════════════════

def attach_blog(
    store_factory: Callable[[AsyncSession], BlogStore] = BlogStore,
) -> Callable:
    """
    Builds a dependency that loads the blog named by the `blog_id` path
    parameter.

    Returns None when the route has no `blog_id` parameter, so the same
    dependency can sit in front of any route.

    Args:
        store_factory: Builds the BlogStore for the request's session.
    """

    async def _attach(
        request: Request,
        db: AsyncSession = Depends(get_db_session),
    ) -> Optional[BlogContext]:
        raw_id = request.path_params.get(BLOG_ID_PARAM)
        if raw_id is None:
            return None

        blog_id = parse_id(raw_id, "blog")
        blog = await store_factory(db).get_by_id(blog_id)
        if blog is None:
            raise NotFoundError(resource="blog", resource_id=str(blog_id))
        return BlogContext(blog=blog)

    return _attach


attached_blog = attach_blog(BlogStore)


# ══════════════════════════════════════════════════════════════════════════
# Authorization
# ══════════════════════════════════════════════════════════════════════════

async def authorize_author(
    blog_ctx: Optional[BlogContext] = Depends(attached_blog),
    auth: AuthContext = Depends(authenticate_token),
) -> AuthorizedBlog:
    """
    Allows the request through only if the actor wrote the attached blog.

    Raises:
        MissingResourceError: no blog attached (route wiring bug → 500)
        ForbiddenError: actor is not the blog's author
    """
    if blog_ctx is None:
        raise MissingResourceError("blog")

    blog = blog_ctx.blog
    if auth.actor_id != str(blog.author_id):
        logger.warning(
            "User %s denied access to blog %s (author %s)",
            auth.actor_id,
            blog.id,
            blog.author_id,
        )
        raise ForbiddenError(
            "Access denied: not the author",
            context={"blog_id": str(blog.id)},
        )

    return AuthorizedBlog(auth=auth, blog=blog)
