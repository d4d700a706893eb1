"""
Structured error types for the entity model registry.

Every failure the registry can report is a :class:`RegistryError` subclass
carrying a category, a retry flag, structured context and an optional
chained cause. The HTTP adapter maps each class to exactly one status code,
so the class *is* the error's public contract.

Manifesto:
    - **Typed taxonomy:** one class per caller-visible failure mode
    - **Explicit retry semantics:** nothing in this package retries a
      ``retryable=False`` error
    - **Store errors pass through:** :class:`StoreError` keeps the store's
      own status and body so the response layer can forward them unmodified
    - **Error chaining:** wrap, never swallow, the original exception

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                        RegistryError                          │
        │        (category, retryable, context, cause)                  │
        ├──────────────────────────────────────────────────────────────┤
        │                                                               │
        │  BadInputError          MethodNotImplementedError             │
        │  (VALIDATION, 400)      (REQUEST, 501)                        │
        │       │                                                       │
        │  ModelValidationError   InfrastructureError                   │
        │                         (INFRASTRUCTURE, 500)                 │
        │                                                               │
        │  StoreError (STORAGE, status/body from the store)             │
        │       │                                                       │
        │  LocationNotFoundError   LocationExistsError                  │
        │  DocumentExistsError     StoreUnavailableError                │
        └──────────────────────────────────────────────────────────────┘

Usage:
    from modelreg.core.errors import BadInputError, StoreError

    try:
        await registry.create(entity_type, body)
    except StoreError as exc:
        return exc.status, exc.body

Tags:
    error-handling, exception-hierarchy, error-taxonomy, modelreg

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    VALIDATION = "VALIDATION"
    REQUEST = "REQUEST"
    STORAGE = "STORAGE"
    NETWORK = "NETWORK"
    INFRASTRUCTURE = "INFRASTRUCTURE"
    INTERNAL = "INTERNAL"

    def __str__(self) -> str:
        return self.value


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error for logging.

    Attributes:
        operation: Registry operation in progress (``create``, ``get_one``, ...)
        entity_type: Entity type the operation addressed
        index: Storage location name
        url: Store URL that was being accessed
        http_status: Store HTTP status code if applicable
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    entity_type: str | None = None
    index: str | None = None
    url: str | None = None
    http_status: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "entity_type", "index", "url", "http_status"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RegistryError(Exception):
    """
    Base exception for all registry errors.

    Subclasses set ``default_category`` and ``default_retryable`` so most
    call sites only pass a message.

    Examples:
        >>> error = RegistryError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(operation="create").context.operation
        'create'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RegistryError:
        """
        Add context to this error (fluent API).

        Usage:
            raise InfrastructureError("Index creation failed").with_context(
                index=".zentity-models",
                operation="create_index",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# REQUEST ERRORS (detected before any store call)
# =============================================================================


class BadInputError(RegistryError):
    """
    Missing or malformed caller input.

    Raised for a missing/empty body on a write verb, an empty entity type,
    or (via :class:`ModelValidationError`) a body that fails validation.
    Never retryable and never triggers a self-heal.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False


class ModelValidationError(BadInputError):
    """An entity model body failed syntactic or semantic validation."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class MethodNotImplementedError(RegistryError):
    """The verb/path combination is not routed to any registry operation."""

    default_category = ErrorCategory.REQUEST
    default_retryable = False

    def __init__(self, method: str, path: str | None = None, message: str | None = None):
        super().__init__(message or "Method and endpoint not implemented.")
        self.method = method
        self.path = path


# =============================================================================
# INFRASTRUCTURE ERRORS (fatal, never retried)
# =============================================================================


class InfrastructureError(RegistryError):
    """
    The storage location could not be made available.

    Raised when creating the models index fails for a reason other than
    "already exists", or when the index is still missing right after a
    self-heal. Signals a deeper problem with the store.
    """

    default_category = ErrorCategory.INFRASTRUCTURE
    default_retryable = False


# =============================================================================
# STORE ERRORS (status and body come from the store)
# =============================================================================


class StoreError(RegistryError):
    """
    An error reported by the document store.

    ``status`` and ``body`` hold the store's own HTTP status and JSON error
    body so the response layer can forward them unmodified.
    """

    default_category = ErrorCategory.STORAGE
    default_retryable = False
    default_status: int = 500
    error_type: str = "store_exception"

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        body: dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.status = status if status is not None else self.default_status
        self.body = body if body is not None else _error_body(self.error_type, message, self.status)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status"] = self.status
        return result


class LocationNotFoundError(StoreError):
    """The models index does not exist (recovered locally by self-heal)."""

    default_status = 404
    error_type = "index_not_found_exception"


class LocationExistsError(StoreError):
    """Index creation lost a race: the index already exists (benign)."""

    default_status = 400
    error_type = "resource_already_exists_exception"


class DocumentExistsError(StoreError):
    """Create-only write found a document for the entity type already."""

    default_status = 409
    error_type = "version_conflict_engine_exception"


class StoreUnavailableError(StoreError):
    """The store could not be reached (connect error, timeout, ...)."""

    default_category = ErrorCategory.NETWORK
    default_retryable = True
    default_status = 503
    error_type = "store_unavailable_exception"


def _error_body(error_type: str, reason: str, status: int) -> dict[str, Any]:
    """Build an error body in the store's native shape."""
    cause = {"type": error_type, "reason": reason}
    return {"error": {"root_cause": [cause], **cause}, "status": status}


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RegistryError",
    "BadInputError",
    "ModelValidationError",
    "MethodNotImplementedError",
    "InfrastructureError",
    "StoreError",
    "LocationNotFoundError",
    "LocationExistsError",
    "DocumentExistsError",
    "StoreUnavailableError",
]
