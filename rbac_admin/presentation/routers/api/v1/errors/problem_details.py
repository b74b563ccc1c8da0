"""RFC 9457 Problem Details for HTTP APIs.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Examples:
        >>> ErrorDetail(field="method", code="literal_error", message="Input should be 'GET'...")
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: Request path of this occurrence
        errors: Field-specific errors (validation failures only)
        trace_id: Request trace ID for debugging
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["http://localhost:8000/errors/forbidden"],
    )
    title: str = Field(..., examples=["Access Denied"])
    status: int = Field(..., examples=[403])
    detail: str = Field(..., examples=["Permission denied"])
    instance: str = Field(..., examples=["/api/v1/permissions/policies"])
    errors: list[ErrorDetail] | None = Field(None)
    trace_id: str | None = Field(None)
