"""Error response builder for RFC 9457 Problem Details.

Converts ApplicationError into a problem+json response. Conflicts map to
400, not 409: clients of this API treat every duplicate as a bad request.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from rbac_admin.application.errors import ApplicationError, ApplicationErrorCode
from rbac_admin.core.config import get_settings
from rbac_admin.presentation.routers.api.middleware.trace_middleware import (
    get_trace_id,
)
from rbac_admin.presentation.routers.api.v1.errors.problem_details import ProblemDetails

PROBLEM_JSON = "application/problem+json"

_STATUS_CODES = {
    ApplicationErrorCode.COMMAND_VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ApplicationErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ApplicationErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ApplicationErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ApplicationErrorCode.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ApplicationErrorCode.STORAGE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ApplicationErrorCode.ENGINE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_TITLES = {
    ApplicationErrorCode.COMMAND_VALIDATION_FAILED: "Validation Failed",
    ApplicationErrorCode.UNAUTHORIZED: "Authentication Required",
    ApplicationErrorCode.FORBIDDEN: "Access Denied",
    ApplicationErrorCode.NOT_FOUND: "Resource Not Found",
    ApplicationErrorCode.CONFLICT: "Resource Conflict",
    ApplicationErrorCode.STORAGE_FAILURE: "Storage Failure",
    ApplicationErrorCode.ENGINE_FAILURE: "Policy Engine Failure",
}


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses.

    Example:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.NOT_FOUND,
        ...     message="Role not found",
        ... )
        >>> response = ErrorResponseBuilder.from_application_error(error, request)
        >>> response.status_code
        404
    """

    @staticmethod
    def from_application_error(
        error: ApplicationError,
        request: Request,
        trace_id: str | None = None,
    ) -> JSONResponse:
        status_code = ErrorResponseBuilder.get_status_code(error.code)
        problem = ProblemDetails(
            type=f"{get_settings().api_base_url}/errors/{error.code.value}",
            title=_TITLES.get(error.code, "Internal Server Error"),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            trace_id=trace_id or get_trace_id(),
        )

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            media_type=PROBLEM_JSON,
        )

    @staticmethod
    def get_status_code(code: ApplicationErrorCode) -> int:
        """Map application error code to HTTP status code.

        Example:
            >>> ErrorResponseBuilder.get_status_code(ApplicationErrorCode.CONFLICT)
            400
        """
        return _STATUS_CODES.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)
