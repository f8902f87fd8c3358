"""
Inkpost Backend — Session Token Service
=========================================

What:  Issues and verifies signed, time-bound session tokens (JWT, HS256).
How:   PyJWT signs `{id, name, iat, exp}` with the configured secret;
       verification checks the signature, the expiry and the claim shape.
Who:   UserService issues tokens at register/login; the auth dependency
       verifies them on every authenticated request.
When:  Constructed once per application from Settings (see main.create_app).

Token lifecycle:
    login/register → issue() → client stores token
    every request  → Authorization: Bearer <token> → verify()
    after `exp`    → ExpiredTokenError (there is no revocation list;
                     a token stays valid until it expires)
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Protocol

import jwt

from inkpost.exceptions import ExpiredTokenError, InvalidTokenError

logger = logging.getLogger(__name__)


class TokenSubject(Protocol):
    """Anything with an identifier and a display name (a User, a UserSummary)."""
    id: Any
    name: str


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""
    subject_id: str
    name: str


class TokenService:
    """
    Stateless JWT issuer/verifier.

    Args:
        secret:    HMAC signing key
        lifetime:  How long an issued token stays valid
        algorithm: JWS algorithm (HS256 by default)
        clock:     Returns the issuing instant (`iat`). Verification always
                   compares `exp` against the real current time.
    """

    def __init__(
        self,
        secret: str,
        lifetime: timedelta = timedelta(days=1),
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock
        self.lifetime = lifetime

    def issue(self, subject: TokenSubject) -> str:
        """Signs a token for `subject` expiring `lifetime` from now."""
        now = self._clock()
        payload = {
            "id": str(subject.id),
            "name": subject.name,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Returns the claims of a valid token.

        Raises:
            ExpiredTokenError: signature is fine but `exp` has passed
            InvalidTokenError: bad signature, malformed token, missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "id"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidTokenError("Not a valid token") from e

        subject_id = payload.get("id")
        name = payload.get("name")
        if not isinstance(subject_id, str) or not subject_id or not isinstance(name, str):
            raise InvalidTokenError("Token claims are incomplete")

        return TokenClaims(subject_id=subject_id, name=name)
