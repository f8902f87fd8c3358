"""
Inkpost Backend — Account Route Handlers
==========================================

What:  POST /api/auth/register (alias /create-account), POST /api/auth/login,
       GET /api/auth/get-user.
How:   Thin handlers: parse the body, delegate to UserService, return the envelope.
Who:   Called by the frontend sign-up and sign-in forms.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.context import AuthContext
from inkpost.auth.dependencies import authenticate_token
from inkpost.database import get_db_session
from inkpost.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from inkpost.schemas.common import ErrorResponse
from inkpost.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


@router.post(
    "/register",
    status_code=201,
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing fields", "model": ErrorResponse},
        409: {"description": "Username or email already exists", "model": ErrorResponse},
    },
    summary="Create an account",
)
@router.post(
    "/create-account",
    status_code=201,
    response_model=AuthResponse,
    include_in_schema=False,
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    user_service: UserService = Depends(get_user_service),
) -> AuthResponse:
    """Registers a user and returns its summary plus a session token."""
    return await user_service.register(db, payload)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Exchange credentials for a session token",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    user_service: UserService = Depends(get_user_service),
) -> AuthResponse:
    return await user_service.login(db, payload)


@router.get(
    "/get-user",
    response_model=UserResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Current user",
)
async def get_user(auth: AuthContext = Depends(authenticate_token)) -> UserResponse:
    """The authenticated user's summary, as re-loaded by the auth dependency."""
    return UserResponse(message="User retrieved successfully", user=auth.user)
