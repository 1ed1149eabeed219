"""
Glee Threads Backend — Auth Service Unit Tests
================================================

What:  Tests for password hashing, token issue/verification and admin login.
How:   Real bcrypt (at the minimum cost factor) and PyJWT; the DB is mocked.

What we test:
    ✅ Hash/verify round trip and malformed stored hashes
    ✅ Tokens: claims survive a round trip; expired, forged and garbage tokens fail
    ✅ Login: missing fields, unknown email, non-admin, wrong password, success
    ✅ Bearer header parsing
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import jwt
import pytest

from app.config import settings
from app.exceptions import AuthenticationError, PermissionDeniedError, ValidationError
from app.services.auth_service import AuthService, extract_bearer_token


def _result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestPasswords:

    def setup_method(self):
        self.service = AuthService()

    def test_hash_and_verify(self):
        with patch.object(settings, "bcrypt_rounds", 4):
            hashed = self.service.hash_password("s3cret-pass")
        assert hashed.startswith("$2")
        assert self.service.verify_password("s3cret-pass", hashed) is True
        assert self.service.verify_password("wrong", hashed) is False

    def test_malformed_hash_is_a_mismatch(self):
        assert self.service.verify_password("anything", "not-a-bcrypt-hash") is False


class TestTokens:

    def setup_method(self):
        self.service = AuthService()

    def test_round_trip(self, user_factory):
        token = self.service.create_token(user_factory("admin", user_id=7))
        claims = self.service.decode_token(token)
        assert claims.userId == 7
        assert claims.role == "admin"
        assert claims.email == "admin@gleethreads.test"

    def test_expired_token_rejected(self):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"userId": 1, "email": "a@b.c", "role": "admin", "iat": past, "exp": past + timedelta(hours=1)},
            settings.jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            self.service.decode_token(token)

    def test_wrong_secret_rejected(self):
        token = jwt.encode(
            {"userId": 1, "email": "a@b.c", "role": "admin",
             "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "some-other-secret-entirely",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            self.service.decode_token(token)

    def test_missing_claims_rejected(self):
        token = jwt.encode(
            {"sub": "1", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            settings.jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            self.service.decode_token(token)

    def test_token_without_expiry_rejected(self):
        token = jwt.encode({"userId": 1, "email": "a@b.c", "role": "admin"}, settings.jwt_secret, algorithm="HS256")
        with pytest.raises(AuthenticationError):
            self.service.decode_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(AuthenticationError) as exc_info:
            self.service.decode_token("not.a.jwt")
        assert exc_info.value.message == "Unauthorized"


class TestLogin:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    async def test_missing_fields(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.login(mock_db_session, "  ", "pw")
        assert exc_info.value.message == "Email and password are required"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_email(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)
        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.login(mock_db_session, "nobody@x.com", "pw")
        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_non_admin_forbidden(self, mock_db_session, user_factory):
        mock_db_session.execute.return_value = _result(user_factory("user"))
        with pytest.raises(PermissionDeniedError) as exc_info:
            await self.service.login(mock_db_session, "user@gleethreads.test", "pw")
        assert exc_info.value.message == "Access denied. Admin only."

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db_session, user_factory):
        user = user_factory("admin")
        mock_db_session.execute.return_value = _result(user)
        with patch.object(self.service, "verify_password", return_value=False):
            with pytest.raises(AuthenticationError) as exc_info:
                await self.service.login(mock_db_session, "admin@gleethreads.test", "wrong")
        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_success_returns_token_and_user(self, mock_db_session, user_factory):
        user = user_factory("admin", user_id=3)
        mock_db_session.execute.return_value = _result(user)
        with patch.object(self.service, "verify_password", return_value=True):
            response = await self.service.login(mock_db_session, " admin@gleethreads.test ", "right")

        assert response.user.id == 3
        assert response.user.role == "admin"
        assert self.service.decode_token(response.token).userId == 3


class TestBearerHeader:

    @pytest.mark.parametrize(
        "header,expected",
        [
            ("Bearer abc.def.ghi", "abc.def.ghi"),
            ("bearer   tok ", "tok"),
            (None, None),
            ("", None),
            ("Basic dXNlcjpwYXNz", None),
            ("Bearer ", None),
        ],
    )
    def test_extract(self, header, expected):
        assert extract_bearer_token(header) == expected
