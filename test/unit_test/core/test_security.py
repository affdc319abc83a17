"""Unit tests for password hashing and access tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from coworkspace.core.errors import BadRequestError, UnauthorizedError
from coworkspace.core.security import (
    check_password_strength,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from coworkspace.server.core.config import settings


class TestPasswordHashing:
    def test_hash_is_not_plain_text(self):
        hashed = hash_password("Passw0rd123")

        assert hashed != "Passw0rd123"
        assert hashed.startswith("$2")

    def test_verify_password(self):
        hashed = hash_password("Passw0rd123")

        assert verify_password("Passw0rd123", hashed) is True
        assert verify_password("passw0rd123", hashed) is False

    def test_same_password_hashes_differently(self):
        assert hash_password("Passw0rd123") != hash_password("Passw0rd123")

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("Passw0rd123", "not-a-hash") is False


class TestPasswordStrength:
    def test_strong_password(self):
        check_password_strength("Secret123")

    @pytest.mark.parametrize(
        "password,fragment",
        [("Ab1", "at least 8"), ("onlyletters", "digit"), ("12345678", "letter")],
    )
    def test_weak_passwords(self, password, fragment):
        with pytest.raises(BadRequestError, match=fragment):
            check_password_strength(password)


class TestAccessTokens:
    def test_round_trip_claims(self):
        token = create_access_token(42, "manager", "m@example.com")

        claims = decode_access_token(token)

        assert claims["sub"] == "42"
        assert claims["role"] == "manager"
        assert claims["email"] == "m@example.com"
        assert claims["iss"] == settings.auth.jwt_issuer
        assert claims["aud"] == settings.auth.jwt_audience

    def test_expired_token(self):
        token = create_access_token(1, "user", "u@example.com", expires_delta=timedelta(seconds=-5))

        with pytest.raises(UnauthorizedError, match="expired"):
            decode_access_token(token)

    def test_token_signed_with_other_secret(self):
        auth = settings.auth
        now = datetime.now(timezone.utc)
        forged = jwt.encode(
            {
                "sub": "1",
                "exp": now + timedelta(minutes=5),
                "iss": auth.jwt_issuer,
                "aud": auth.jwt_audience,
            },
            "some-other-secret",
            algorithm=auth.jwt_algorithm,
        )

        with pytest.raises(UnauthorizedError, match="Invalid access token"):
            decode_access_token(forged)

    def test_token_for_other_audience(self):
        auth = settings.auth
        token = jwt.encode(
            {
                "sub": "1",
                "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
                "iss": auth.jwt_issuer,
                "aud": "somebody-else",
            },
            auth.jwt_secret,
            algorithm=auth.jwt_algorithm,
        )

        with pytest.raises(UnauthorizedError):
            decode_access_token(token)

    def test_garbage_token(self):
        with pytest.raises(UnauthorizedError):
            decode_access_token("abc.def.ghi")
