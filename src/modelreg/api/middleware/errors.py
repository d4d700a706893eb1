"""
Error-handling middleware: RFC 7807 envelope for failures outside the adapter.

Registry errors are mapped by :class:`~modelreg.api.adapter.RequestAdapter`;
this module covers whatever escapes it.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from modelreg.api.schemas.common import ProblemDetail
from modelreg.core.logging import get_logger

logger = get_logger(__name__)


def problem_response(
    *,
    status: int,
    title: str,
    detail: str = "",
    instance: str = "",
) -> JSONResponse:
    """Build a RFC 7807 JSON error response."""
    body = ProblemDetail(
        title=title,
        status=status,
        detail=detail,
        instance=instance,
    )
    return JSONResponse(status_code=status, content=body.model_dump())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: returns 500 with ProblemDetail."""
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return problem_response(
        status=500,
        title="Internal Server Error",
        detail=str(exc) if request.app.state.settings.debug else "An unexpected error occurred.",
        instance=request.url.path,
    )
