"""
Common API schemas: RFC 7807 error envelope.

Successful model responses are the store's native JSON and have no schema
here; errors raised by the registry itself use :class:`ProblemDetail`.

Doc-Types: API_REFERENCE
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Structured error detail for field-level errors."""

    code: str = Field(description="Machine-readable error code (e.g., 'VALIDATION')")
    message: str = Field(description="Human-readable error description")
    field: str | None = Field(default=None, description="Field path if error is field-specific")


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Error Codes:
        - 400: Request body missing or entity model invalid
        - 500: Models index unavailable, or unexpected server error
        - 501: Method and endpoint not implemented

    Example:
        {
            "type": "about:blank",
            "title": "Bad Request",
            "status": 400,
            "detail": "Request body is missing.",
            "instance": "/models/person",
            "errors": []
        }
    """

    type: str = Field(default="about:blank", description="Error type URI (usually 'about:blank')")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code (e.g., 400, 501, 500)")
    detail: str = Field(default="", description="Human-readable explanation of the error")
    instance: str = Field(default="", description="URI of the failing request")
    errors: list[ErrorDetail] = Field(
        default_factory=list,
        description="List of field-level error details",
    )
