"""
Entity model registry operations.

:class:`ModelRegistry` is the CRUD surface over the models index. Every
operation is one direct store round trip (plus, at most, one index creation
and one retry); nothing is cached between calls.

Healing strategy:
    - **Writes** (``create``, ``update``) heal proactively: they call
      :meth:`LocationManager.ensure_exists` first, because a write into a
      missing index cannot succeed.
    - **Reads and deletes** (``list_all``, ``get_one``, ``delete``) assume
      the index exists. If the store answers "index not found" they create
      it and retry exactly once. A second consecutive "index not found" is
      an :class:`InfrastructureError`.

Consistency:
    Writes and deletes use ``refresh=wait_for``: the store acknowledges only
    once the change is visible to search, so a read issued after the call
    returns observes it.

Bodies passed to ``create``/``update`` must already have passed
:func:`modelreg.core.model.validate_entity_model`; the registry stores the
raw text unchanged.

Tags:
    registry, crud, self-heal, read-your-writes, modelreg

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from typing import Any

from modelreg.core.errors import BadInputError, InfrastructureError, LocationNotFoundError
from modelreg.core.logging import get_logger
from modelreg.core.settings import RegistrySettings
from modelreg.ops.lifecycle import LocationManager
from modelreg.store.base import DocumentStore

logger = get_logger(__name__)

DEFAULT_LIST_SIZE = 10000

# First attempt plus exactly one retry after a reactive heal.
HEAL_ATTEMPTS = 2


class _Timer:
    """Minimal stopwatch for timing operations."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 2)


def _require_entity_type(entity_type: str | None) -> str:
    if not entity_type or not entity_type.strip():
        raise BadInputError("Entity type must be a non-empty string.")
    return entity_type


class ModelRegistry:
    """CRUD over entity models, keyed by entity type.

    Parameters
    ----------
    store : DocumentStore
        Backing store client.
    locations : LocationManager | None
        Lifecycle manager for the models index; built from *store* when
        omitted.
    list_size : int
        Upper bound on the number of models :meth:`list_all` returns.
    """

    def __init__(
        self,
        store: DocumentStore,
        locations: LocationManager | None = None,
        *,
        list_size: int = DEFAULT_LIST_SIZE,
    ) -> None:
        self.store = store
        self.locations = locations or LocationManager(store)
        self.list_size = list_size

    @classmethod
    def from_settings(cls, store: DocumentStore, settings: RegistrySettings) -> ModelRegistry:
        """Build a registry whose index topology and list bound come from *settings*."""
        locations = LocationManager(
            store, shards=settings.index_shards, replicas=settings.index_replicas
        )
        return cls(store, locations, list_size=settings.list_size)

    @property
    def index(self) -> str:
        return self.locations.index

    # ------------------------------------------------------------------ #
    # Reactive heal
    # ------------------------------------------------------------------ #

    async def _with_heal(
        self,
        operation: str,
        call: Callable[[], Awaitable[dict[str, Any]]],
        entity_type: str | None = None,
    ) -> dict[str, Any]:
        """Run *call*; on a missing index, create it and run *call* once more."""
        for attempt in range(1, HEAL_ATTEMPTS + 1):
            try:
                return await call()
            except LocationNotFoundError as exc:
                if attempt == HEAL_ATTEMPTS:
                    raise InfrastructureError(
                        f"Index [{self.index}] still missing after self-heal", cause=exc
                    ).with_context(
                        operation=operation, entity_type=entity_type, index=self.index
                    ) from exc
                logger.warning(
                    "models_index_missing",
                    operation=operation,
                    entity_type=entity_type,
                    index=self.index,
                )
                await self.locations.create_unconditionally()
        raise AssertionError("unreachable")  # pragma: no cover

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    async def list_all(self) -> dict[str, Any]:
        """Return the search response holding every entity model."""
        timer = _Timer()
        response = await self._with_heal(
            "list_all",
            lambda: self.store.search_documents(self.index, size=self.list_size),
        )
        logger.debug("models_listed", elapsed_ms=timer.elapsed_ms)
        return response

    async def get_one(self, entity_type: str) -> dict[str, Any]:
        """Return the get response for *entity_type*.

        A missing model is reported by the store's ``"found": false`` shape,
        not by an exception.
        """
        entity_type = _require_entity_type(entity_type)
        timer = _Timer()
        response = await self._with_heal(
            "get_one",
            lambda: self.store.get_document(self.index, entity_type),
            entity_type,
        )
        logger.debug(
            "model_fetched",
            entity_type=entity_type,
            found=response.get("found"),
            elapsed_ms=timer.elapsed_ms,
        )
        return response

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    async def create(self, entity_type: str, body: str) -> dict[str, Any]:
        """Store a new model; fail if *entity_type* already has one.

        Raises:
            DocumentExistsError: a model for *entity_type* already exists.
        """
        entity_type = _require_entity_type(entity_type)
        timer = _Timer()
        await self.locations.ensure_exists()
        response = await self.store.index_document(
            self.index, entity_type, body, create_only=True, refresh="wait_for"
        )
        logger.info("model_created", entity_type=entity_type, elapsed_ms=timer.elapsed_ms)
        return response

    async def update(self, entity_type: str, body: str) -> dict[str, Any]:
        """Replace the model for *entity_type*, creating it if absent."""
        entity_type = _require_entity_type(entity_type)
        timer = _Timer()
        await self.locations.ensure_exists()
        response = await self.store.index_document(
            self.index, entity_type, body, create_only=False, refresh="wait_for"
        )
        logger.info(
            "model_updated",
            entity_type=entity_type,
            result=response.get("result"),
            elapsed_ms=timer.elapsed_ms,
        )
        return response

    async def delete(self, entity_type: str) -> dict[str, Any]:
        """Delete the model for *entity_type*.

        Deleting a model that does not exist returns the store's
        ``"result": "not_found"`` response.
        """
        entity_type = _require_entity_type(entity_type)
        timer = _Timer()
        response = await self._with_heal(
            "delete",
            lambda: self.store.delete_document(self.index, entity_type, refresh="wait_for"),
            entity_type,
        )
        logger.info(
            "model_deleted",
            entity_type=entity_type,
            result=response.get("result"),
            elapsed_ms=timer.elapsed_ms,
        )
        return response


__all__ = ["ModelRegistry", "DEFAULT_LIST_SIZE", "HEAL_ATTEMPTS"]
