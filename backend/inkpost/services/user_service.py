"""
Inkpost Backend — User Service (Registration & Login)
=======================================================

What:  Creates accounts and exchanges credentials for session tokens.
How:   Validates input, checks uniqueness through UserStore, hashes with
       PasswordHasher, signs tokens with TokenService.
Who:   Called by the /api/auth route handlers.
When:  Once per register/login request.

Login failure policy:
    Unknown identifier and wrong password produce the same
    "Invalid credentials" ValidationError, so the response does not reveal
    whether an account exists.
"""

import asyncio
import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.exceptions import ConflictError, ValidationError
from inkpost.models.user import User
from inkpost.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserSummary
from inkpost.services.password_service import PasswordHasher
from inkpost.services.token_service import TokenService
from inkpost.stores.user_store import UserStore

logger = logging.getLogger(__name__)


def normalize_login_identifier(identifier: str) -> str:
    """
    Brings an email-shaped identifier into the form EmailStr stored at
    registration (domain lowercased). Usernames and unparseable values
    pass through unchanged.
    """
    if "@" not in identifier:
        return identifier
    try:
        return validate_email(identifier, check_deliverability=False).normalized
    except EmailNotValidError:
        return identifier


class UserService:
    """
    Account workflows.

    Holds only immutable collaborators (token signer, password hasher); the
    database session is passed to each call.
    """

    def __init__(self, token_service: TokenService, password_hasher: PasswordHasher):
        self.token_service = token_service
        self.password_hasher = password_hasher

    async def register(self, db: AsyncSession, payload: RegisterRequest) -> AuthResponse:
        """
        Creates a user and signs a token for it.

        Raises:
            ValidationError: a field is missing/blank, or the password is too long
            ConflictError: username or email already taken
        """
        name = (payload.name or "").strip()
        username = (payload.username or "").strip()
        email = (payload.email or "").strip()
        password = payload.password or ""
        if not (name and username and email and password):
            raise ValidationError("All fields are required")

        store = UserStore(db)
        existing = await store.find_by_username_or_email(username, email)
        if existing is not None:
            field = "username" if existing.username == username else "email"
            logger.info("Registration rejected: %s already taken", field)
            raise ConflictError("Username or email already exists", field=field)

        user = User(
            name=name,
            username=username,
            email=email,
            # bcrypt is CPU-bound; keep it off the event loop
            password_hash=await asyncio.to_thread(self.password_hasher.hash, password),
        )
        await store.add(user)
        await store.commit("user.register")
        logger.info("User registered: %s (%s)", user.id, username)

        return AuthResponse(
            message="Account created successfully",
            user=UserSummary.model_validate(user),
            token=self.token_service.issue(user),
        )

    async def login(self, db: AsyncSession, payload: LoginRequest) -> AuthResponse:
        """
        Raises:
            ValidationError: missing fields or invalid credentials
        """
        identifier = (payload.username_or_email or "").strip()
        password = payload.password or ""
        if not (identifier and password):
            raise ValidationError("All fields are required")

        user = await UserStore(db).find_by_login(normalize_login_identifier(identifier))
        if user is None or not await asyncio.to_thread(
            self.password_hasher.verify, password, user.password_hash
        ):
            logger.info("Failed login for identifier %r", identifier)
            raise ValidationError("Invalid credentials")

        logger.info("User logged in: %s", user.id)
        return AuthResponse(
            message="Login successful",
            user=UserSummary.model_validate(user),
            token=self.token_service.issue(user),
        )
