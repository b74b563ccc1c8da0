"""Global exception handlers for the FastAPI application.

Handlers:
    http_exception_handler: HTTPException (auth dependencies, 404 routes)
    validation_exception_handler: RequestValidationError, reported as 400
    generic_exception_handler: anything unhandled, reported as 500

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rbac_admin.core.config import get_settings
from rbac_admin.core.container import get_logger
from rbac_admin.presentation.routers.api.v1.errors.error_response_builder import (
    PROBLEM_JSON,
)
from rbac_admin.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

# HTTP status code to (title, slug) mapping for RFC 9457
_HTTP_STATUS_INFO: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    401: ("Authentication Required", "unauthorized"),
    403: ("Access Denied", "forbidden"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    500: ("Internal Server Error", "internal-server-error"),
}


def _problem_response(
    request: Request,
    status_code: int,
    detail: str,
    *,
    errors: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    title, slug = _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))
    problem = ProblemDetails(
        type=f"{get_settings().api_base_url}/errors/{slug}",
        title=title,
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        errors=errors,
        trace_id=getattr(request.state, "trace_id", None),
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
        media_type=PROBLEM_JSON,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert HTTPException to RFC 9457, keeping headers such as WWW-Authenticate."""
    assert isinstance(exc, StarletteHTTPException)
    return _problem_response(
        request,
        exc.status_code,
        exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Convert RequestValidationError to 400 with field-level errors.

    Covers malformed bodies, methods outside the allowed set and
    unparseable ids in path segments.
    """
    assert isinstance(exc, RequestValidationError)

    field_errors: list[ErrorDetail] = []
    for error in exc.errors():
        # ["body", "method"] -> "method"
        field_parts = [str(p) for p in error.get("loc", []) if p != "body"]
        field_errors.append(
            ErrorDetail(
                field=".".join(field_parts) if field_parts else "unknown",
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Validation failed"),
            )
        )

    return _problem_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Request validation failed. Check 'errors' for details.",
        errors=field_errors or None,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log and hide unexpected exceptions behind a 500."""
    get_logger().error(
        "unhandled_exception",
        error=exc,
        path=request.url.path,
        method=request.method,
    )
    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please contact support with the trace ID.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
