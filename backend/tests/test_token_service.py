"""
Inkpost Backend — Token Service Unit Tests
============================================

What:  Tests for TokenService issue/verify.
How:   Real PyJWT signing with a test secret; expired tokens are produced by
       issuing with a clock set in the past.

What we test:
    ✅ Issued tokens verify back to the subject's id and name
    ✅ exp = iat + lifetime
    ✅ Wrong secret, tampering, garbage and missing claims → InvalidTokenError
    ✅ Past expiry → ExpiredTokenError (never success)
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from inkpost.exceptions import ExpiredTokenError, InvalidTokenError, TokenError
from inkpost.services.token_service import TokenClaims, TokenService

SECRET = "unit-test-signing-secret-for-tokens"


@dataclass
class Subject:
    id: uuid.UUID
    name: str


@pytest.fixture
def subject():
    return Subject(id=uuid.uuid4(), name="Alice")


class TestIssueAndVerify:

    def test_round_trip_returns_claims(self, subject):
        service = TokenService(secret=SECRET)
        claims = service.verify(service.issue(subject))

        assert claims == TokenClaims(subject_id=str(subject.id), name="Alice")

    def test_expiry_is_issue_time_plus_lifetime(self, subject):
        issued_at = datetime(2020, 1, 1, tzinfo=timezone.utc)
        service = TokenService(
            secret=SECRET,
            lifetime=timedelta(hours=12),
            clock=lambda: issued_at,
        )
        payload = jwt.decode(
            service.issue(subject),
            SECRET,
            algorithms=["HS256"],
            options={"verify_exp": False},
        )

        assert payload["exp"] - payload["iat"] == 12 * 3600
        assert payload["id"] == str(subject.id)
        assert payload["name"] == "Alice"

    def test_default_lifetime_is_one_day(self):
        assert TokenService(secret=SECRET).lifetime == timedelta(days=1)


class TestVerifyFailures:

    def test_wrong_secret_is_invalid(self, subject):
        token = TokenService(secret="another-signing-secret-for-tokens").issue(subject)
        with pytest.raises(InvalidTokenError):
            TokenService(secret=SECRET).verify(token)

    def test_tampered_payload_is_invalid(self, subject):
        service = TokenService(secret=SECRET)
        header, payload, signature = service.issue(subject).split(".")
        forged = jwt.encode({"id": str(uuid.uuid4()), "name": "Mallory"}, SECRET).split(".")[1]

        with pytest.raises(InvalidTokenError):
            service.verify(".".join([header, forged, signature]))

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
    def test_malformed_token_is_invalid(self, token):
        with pytest.raises(InvalidTokenError):
            TokenService(secret=SECRET).verify(token)

    def test_missing_id_claim_is_invalid(self):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"name": "Alice", "exp": exp}, SECRET, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            TokenService(secret=SECRET).verify(token)

    def test_missing_name_claim_is_invalid(self):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"id": str(uuid.uuid4()), "exp": exp}, SECRET, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            TokenService(secret=SECRET).verify(token)

    def test_expired_token_fails_with_expired_error(self, subject):
        two_days_ago = datetime.now(timezone.utc) - timedelta(days=2)
        issuer = TokenService(secret=SECRET, clock=lambda: two_days_ago)

        with pytest.raises(ExpiredTokenError):
            TokenService(secret=SECRET).verify(issuer.issue(subject))

    def test_token_errors_share_a_base_class(self):
        assert issubclass(InvalidTokenError, TokenError)
        assert issubclass(ExpiredTokenError, TokenError)
