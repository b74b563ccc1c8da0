"""Unit tests for bcrypt hashing and JWT issuing."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from rbac_admin.core.enums import ErrorCode
from rbac_admin.core.result import Failure, Success
from rbac_admin.infrastructure.security import BcryptPasswordService, JWTService

SECRET = "unit-test-secret-key-with-at-least-32-characters"


@pytest.mark.unit
class TestBcryptPasswordService:
    def test_hash_and_verify(self):
        service = BcryptPasswordService(cost_factor=10)

        password_hash = service.hash_password("123456")

        assert password_hash.startswith("$2b$10$")
        assert service.verify_password("123456", password_hash)
        assert not service.verify_password("654321", password_hash)

    def test_each_hash_is_salted(self):
        service = BcryptPasswordService(cost_factor=10)

        assert service.hash_password("123456") != service.hash_password("123456")

    def test_malformed_hash_does_not_verify(self):
        assert not BcryptPasswordService(cost_factor=10).verify_password("x", "not-a-hash")

    @pytest.mark.parametrize("cost", [4, 9, 21])
    def test_cost_factor_bounds(self, cost):
        with pytest.raises(ValueError):
            BcryptPasswordService(cost_factor=cost)


@pytest.mark.unit
class TestJWTService:
    def test_round_trip_claims(self):
        service = JWTService(secret_key=SECRET, expiration_minutes=5)

        token = service.generate_access_token(user_id=1, username="admin")
        result = service.validate_access_token(token)

        assert isinstance(result, Success)
        assert result.value["sub"] == "1"
        assert result.value["username"] == "admin"
        assert result.value["jti"]

    def test_expired_token(self):
        service = JWTService(secret_key=SECRET)
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = jwt.encode(
            {"sub": "1", "username": "admin", "exp": int(past.timestamp())},
            SECRET,
            algorithm="HS256",
        )

        result = service.validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED

    def test_foreign_signature_rejected(self):
        other = JWTService(secret_key="another-secret-key-that-is-long-enough-too")
        token = other.generate_access_token(user_id=1, username="admin")

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_token_without_username_rejected(self):
        future = datetime.now(UTC) + timedelta(minutes=5)
        token = jwt.encode(
            {"sub": "1", "exp": int(future.timestamp())}, SECRET, algorithm="HS256"
        )

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_short_secret_rejected(self):
        with pytest.raises(ValueError):
            JWTService(secret_key="short")
