"""
Inkpost Backend — Blog Route Handlers
=======================================

What:  Blog CRUD endpoints.
How:   Routes declare the auth chain in their signatures and delegate to
       BlogService.
Who:   Called by the frontend feed, editor and post pages.

Route Inventory:
    POST   /api/blogs            token            create
    GET    /api/blogs            public           list, newest first
    GET    /api/blogs/{blog_id}  token            read by id
    PUT    /api/blogs/{blog_id}  token + author   update
    DELETE /api/blogs/{blog_id}  token + author   delete
    GET    /api/blog/{slug}      public           read by slug
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.context import AuthContext, AuthorizedBlog
from inkpost.auth.dependencies import authenticate_token, authorize_author
from inkpost.database import get_db_session
from inkpost.schemas.blog import BlogCreate, BlogEnvelope, BlogListEnvelope, BlogUpdate
from inkpost.schemas.common import ErrorResponse, MessageResponse
from inkpost.services.blog_service import blog_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Blogs"])

_AUTH_ERRORS = {
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
}
_MUTATION_ERRORS = {
    **_AUTH_ERRORS,
    400: {"description": "Invalid input or blog id", "model": ErrorResponse},
    403: {"description": "Not the author", "model": ErrorResponse},
    404: {"description": "Blog not found", "model": ErrorResponse},
    409: {"description": "Slug already in use", "model": ErrorResponse},
}


@router.post(
    "/blogs",
    status_code=201,
    response_model=BlogEnvelope,
    responses={**_AUTH_ERRORS, 400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create a blog",
)
async def create_blog(
    payload: BlogCreate,
    auth: AuthContext = Depends(authenticate_token),
    db: AsyncSession = Depends(get_db_session),
) -> BlogEnvelope:
    blog = await blog_service.create_blog(db, auth, payload)
    return BlogEnvelope(message="Blog added successfully", blog=blog)


@router.get(
    "/blogs",
    response_model=BlogListEnvelope,
    summary="List all blogs, newest first",
)
async def list_blogs(db: AsyncSession = Depends(get_db_session)) -> BlogListEnvelope:
    """
    Public listing of every blog.

    No pagination: the full table is returned on each call.
    """
    blogs = await blog_service.list_blogs(db)
    return BlogListEnvelope(message="Blogs retrieved successfully", blogs=blogs)


@router.get(
    "/blogs/{blog_id}",
    response_model=BlogEnvelope,
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Invalid blog id", "model": ErrorResponse},
        404: {"description": "Blog not found", "model": ErrorResponse},
    },
    summary="Get a blog by id",
)
async def get_blog(
    blog_id: str,
    auth: AuthContext = Depends(authenticate_token),
    db: AsyncSession = Depends(get_db_session),
) -> BlogEnvelope:
    blog = await blog_service.get_blog(db, blog_id)
    return BlogEnvelope(message="Blog retrieved successfully", blog=blog)


@router.put(
    "/blogs/{blog_id}",
    response_model=BlogEnvelope,
    responses=_MUTATION_ERRORS,
    summary="Update a blog (author only)",
)
async def update_blog(
    blog_id: str,
    payload: BlogUpdate,
    authorized: AuthorizedBlog = Depends(authorize_author),
    db: AsyncSession = Depends(get_db_session),
) -> BlogEnvelope:
    blog = await blog_service.update_blog(db, authorized.blog, payload)
    return BlogEnvelope(message="Blog updated successfully", blog=blog)


@router.delete(
    "/blogs/{blog_id}",
    response_model=MessageResponse,
    responses=_MUTATION_ERRORS,
    summary="Delete a blog (author only)",
)
async def delete_blog(
    blog_id: str,
    authorized: AuthorizedBlog = Depends(authorize_author),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await blog_service.delete_blog(db, authorized.blog)
    return MessageResponse(message="Blog deleted successfully")


@router.get(
    "/blog/{slug}",
    response_model=BlogEnvelope,
    responses={404: {"description": "Blog not found", "model": ErrorResponse}},
    summary="Get a blog by slug",
)
async def get_blog_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db_session),
) -> BlogEnvelope:
    blog = await blog_service.get_blog_by_slug(db, slug)
    return BlogEnvelope(message="Blog retrieved successfully", blog=blog)
