"""API schemas."""

from modelreg.api.schemas.common import ErrorDetail, ProblemDetail

__all__ = ["ErrorDetail", "ProblemDetail"]
