"""Unit tests for domain-to-application error mapping and HTTP status codes."""

import pytest

from rbac_admin.application.errors import (
    ApplicationErrorCode,
    from_domain_error,
)
from rbac_admin.core.enums import ErrorCode
from rbac_admin.core.errors import DomainError
from rbac_admin.domain.errors import PolicyEngineError, StorageError, StorageErrorCause
from rbac_admin.presentation.routers.api.v1.errors import ErrorResponseBuilder


@pytest.mark.unit
class TestFromDomainError:
    @pytest.mark.parametrize(
        "cause,expected",
        [
            (StorageErrorCause.NOT_FOUND, ApplicationErrorCode.NOT_FOUND),
            (StorageErrorCause.UNIQUE_VIOLATION, ApplicationErrorCode.CONFLICT),
            (StorageErrorCause.TRANSIENT_BACKEND, ApplicationErrorCode.STORAGE_FAILURE),
            (StorageErrorCause.UNKNOWN, ApplicationErrorCode.STORAGE_FAILURE),
        ],
    )
    def test_storage_causes(self, cause, expected):
        error = StorageError(code=ErrorCode.STORAGE_FAILED, message="db", cause=cause)

        mapped = from_domain_error(error)

        assert mapped.code == expected
        assert mapped.domain_error is error
        assert mapped.message == "db"

    def test_engine_error(self):
        error = PolicyEngineError(
            code=ErrorCode.POLICY_ENGINE_FAILED, message="engine", operation="save"
        )

        assert from_domain_error(error).code == ApplicationErrorCode.ENGINE_FAILURE

    def test_message_override(self):
        error = DomainError(code=ErrorCode.VALIDATION_FAILED, message="bad")

        mapped = from_domain_error(error, "Role name is required")

        assert mapped.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        assert mapped.message == "Role name is required"


@pytest.mark.unit
class TestStatusCodes:
    @pytest.mark.parametrize(
        "code,status",
        [
            (ApplicationErrorCode.COMMAND_VALIDATION_FAILED, 400),
            (ApplicationErrorCode.CONFLICT, 400),
            (ApplicationErrorCode.UNAUTHORIZED, 401),
            (ApplicationErrorCode.FORBIDDEN, 403),
            (ApplicationErrorCode.NOT_FOUND, 404),
            (ApplicationErrorCode.STORAGE_FAILURE, 500),
            (ApplicationErrorCode.ENGINE_FAILURE, 500),
        ],
    )
    def test_mapping(self, code, status):
        assert ErrorResponseBuilder.get_status_code(code) == status

