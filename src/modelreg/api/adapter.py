"""
Request adapter: verb + path + body + options → one registry operation.

The adapter is transport-agnostic: the FastAPI router hands it a
:class:`ModelRequest` and writes back the :class:`AdapterResponse`. Routing
is a plain handler map keyed by ``(verb, has_entity_type)``:

=========  ================  ==========  ===========
Verb       Entity type?      Body?       Operation
=========  ================  ==========  ===========
GET        no                no          list_all
GET        yes               no          get_one
POST       yes               required    create
PUT        yes               required    update
DELETE     yes               no          delete
=========  ================  ==========  ===========

Anything else is answered with 501. For routes that require a body, a
missing or empty body is rejected with 400 before the validator runs, and
the validator runs before the registry is called.

Error → status:
    - ``BadInputError`` (incl. ``ModelValidationError``) → 400 problem body
    - ``MethodNotImplementedError`` → 501 problem body
    - ``InfrastructureError`` → 500 problem body
    - ``StoreError`` → the store's own status and body, unmodified

Manifesto:
    Routing is data, not inheritance. Adding a verb means adding one entry
    to the map; swapping the validator means passing another callable.

Tags:
    adapter, routing, handler-map, error-mapping, modelreg

Doc-Types:
    api-reference
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from modelreg.api.schemas.common import ErrorDetail, ProblemDetail
from modelreg.core.errors import (
    BadInputError,
    InfrastructureError,
    MethodNotImplementedError,
    ModelValidationError,
    RegistryError,
    StoreError,
)
from modelreg.core.logging import get_logger
from modelreg.core.model import Validator, validate_entity_model
from modelreg.ops.registry import ModelRegistry

logger = get_logger(__name__)

_TRUTHY = {"", "true", "1", "yes", "on"}


def parse_pretty(value: str | None) -> bool:
    """Interpret the ``pretty`` query option (a bare ``?pretty`` is true)."""
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


# ── Request / response ───────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ModelRequest:
    """One inbound call, independent of the HTTP framework.

    Attributes:
        method: HTTP verb.
        entity_type: Entity type from the path, or None for the collection.
        body: Raw request body (``bytes`` are decoded as UTF-8).
        pretty: Indent the JSON response.
        path: Request path, echoed in problem responses.
    """

    method: str
    entity_type: str | None = None
    body: str | bytes | None = None
    pretty: bool = False
    path: str = ""

    @property
    def has_entity_type(self) -> bool:
        return bool(self.entity_type)


@dataclass(frozen=True, slots=True)
class AdapterResponse:
    """Status code plus JSON body."""

    status: int
    body: dict[str, Any]

    def render(self, pretty: bool = False) -> bytes:
        if pretty:
            return json.dumps(self.body, indent=2, ensure_ascii=False).encode("utf-8")
        return json.dumps(self.body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


# ── Handler map ──────────────────────────────────────────────────────────

Handler = Callable[[ModelRegistry, str | None, str | None], Awaitable[dict[str, Any]]]


@dataclass(frozen=True, slots=True)
class Route:
    """A registry call plus whether it needs a validated body."""

    handler: Handler
    requires_body: bool = False


async def _list_all(registry: ModelRegistry, entity_type: str | None, body: str | None) -> dict[str, Any]:
    return await registry.list_all()


async def _get_one(registry: ModelRegistry, entity_type: str | None, body: str | None) -> dict[str, Any]:
    return await registry.get_one(entity_type)


async def _create(registry: ModelRegistry, entity_type: str | None, body: str | None) -> dict[str, Any]:
    return await registry.create(entity_type, body)


async def _update(registry: ModelRegistry, entity_type: str | None, body: str | None) -> dict[str, Any]:
    return await registry.update(entity_type, body)


async def _delete(registry: ModelRegistry, entity_type: str | None, body: str | None) -> dict[str, Any]:
    return await registry.delete(entity_type)


DEFAULT_ROUTES: dict[tuple[str, bool], Route] = {
    ("GET", False): Route(_list_all),
    ("GET", True): Route(_get_one),
    ("POST", True): Route(_create, requires_body=True),
    ("PUT", True): Route(_update, requires_body=True),
    ("DELETE", True): Route(_delete),
}


def _problem(status: int, title: str, exc: RegistryError, path: str) -> AdapterResponse:
    body = ProblemDetail(title=title, status=status, detail=exc.message, instance=path)
    if isinstance(exc, ModelValidationError):
        body.errors = [
            ErrorDetail(code=exc.category.value, message=exc.message, field=exc.field)
        ]
    return AdapterResponse(status=status, body=body.model_dump())


# ── Adapter ──────────────────────────────────────────────────────────────


class RequestAdapter:
    """Dispatches :class:`ModelRequest` objects to a :class:`ModelRegistry`.

    Parameters
    ----------
    registry : ModelRegistry
        Registry the routes call into.
    validator : Validator
        Called with the raw body before any write; raises
        ``ModelValidationError`` to reject it.
    routes : Mapping[tuple[str, bool], Route] | None
        Handler map; defaults to :data:`DEFAULT_ROUTES`.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        *,
        validator: Validator = validate_entity_model,
        routes: Mapping[tuple[str, bool], Route] | None = None,
    ) -> None:
        self.registry = registry
        self.validator = validator
        self.routes: dict[tuple[str, bool], Route] = dict(
            DEFAULT_ROUTES if routes is None else routes
        )

    def register(
        self,
        method: str,
        has_entity_type: bool,
        handler: Handler,
        *,
        requires_body: bool = False,
    ) -> None:
        """Add or replace one route."""
        self.routes[(method.upper(), has_entity_type)] = Route(handler, requires_body)

    def _body_text(self, body: str | bytes | None) -> str:
        if body is None:
            return ""
        if isinstance(body, bytes):
            try:
                return body.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise BadInputError("Request body must be UTF-8 encoded JSON.", cause=exc) from exc
        return body

    async def handle(self, request: ModelRequest) -> AdapterResponse:
        """Run the request and map its outcome to a status code and body."""
        method = request.method.upper()
        try:
            route = self.routes.get((method, request.has_entity_type))
            if route is None:
                raise MethodNotImplementedError(method, request.path)

            body: str | None = None
            if route.requires_body:
                body = self._body_text(request.body)
                if body == "":
                    raise BadInputError("Request body is missing.")
                self.validator(body)

            result = await route.handler(self.registry, request.entity_type, body)
            return AdapterResponse(status=200, body=result)

        except BadInputError as exc:
            logger.info("request_rejected", method=method, path=request.path, reason=exc.message)
            return _problem(400, "Bad Request", exc, request.path)
        except MethodNotImplementedError as exc:
            logger.info("request_not_implemented", method=method, path=request.path)
            return _problem(501, "Not Implemented", exc, request.path)
        except InfrastructureError as exc:
            logger.error("request_failed", method=method, path=request.path, error=exc.to_dict())
            return _problem(500, "Internal Server Error", exc, request.path)
        except StoreError as exc:
            logger.warning(
                "store_error",
                method=method,
                path=request.path,
                status=exc.status,
                error=exc.message,
            )
            return AdapterResponse(status=exc.status, body=exc.body)


__all__ = [
    "AdapterResponse",
    "DEFAULT_ROUTES",
    "Handler",
    "ModelRequest",
    "RequestAdapter",
    "Route",
    "parse_pretty",
]
