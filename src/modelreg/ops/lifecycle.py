"""
Models index lifecycle.

:class:`LocationManager` is the only code that creates the models index.
Two entry points:

- :meth:`LocationManager.ensure_exists`: existence check, then create if
  absent. Write operations call it before touching the store.
- :meth:`LocationManager.create_unconditionally`: create without checking.
  Read and delete operations call it after the store reported the index
  missing (reactive self-heal).

Both tolerate a concurrent creator: "already exists" is success. Any other
creation failure is an :class:`~modelreg.core.errors.InfrastructureError`
and is not retried here.

Manifesto:
    The index is created lazily and never deleted. Creation must be safe to
    attempt redundantly, because nothing stops two requests from observing a
    missing index at the same time.

Tags:
    lifecycle, self-heal, idempotent-bootstrap, modelreg
"""

from __future__ import annotations

from modelreg.core.errors import InfrastructureError, LocationExistsError, StoreError
from modelreg.core.logging import get_logger
from modelreg.core.schema import DEFAULT_REPLICAS, DEFAULT_SHARDS, MODELS_INDEX, index_body
from modelreg.store.base import DocumentStore

logger = get_logger(__name__)


class LocationManager:
    """Creates the models index on demand.

    Parameters
    ----------
    store : DocumentStore
        Backing store client.
    index : str
        Index name (the fixed models index unless a test overrides it).
    shards, replicas : int
        Topology used when the index is created.
    """

    def __init__(
        self,
        store: DocumentStore,
        index: str = MODELS_INDEX,
        *,
        shards: int = DEFAULT_SHARDS,
        replicas: int = DEFAULT_REPLICAS,
    ) -> None:
        self.store = store
        self.index = index
        self.shards = shards
        self.replicas = replicas

    async def ensure_exists(self) -> bool:
        """Create the index if it does not exist.

        Returns ``True`` if this call created the index.
        """
        if await self.store.index_exists(self.index):
            return False
        return await self.create_unconditionally()

    async def create_unconditionally(self) -> bool:
        """Create the index without checking first.

        Returns ``True`` if this call created the index, ``False`` if another
        caller got there first.

        Raises:
            InfrastructureError: creation failed for any other reason.
        """
        try:
            await self.store.create_index(self.index, index_body(self.shards, self.replicas))
        except LocationExistsError:
            logger.debug("models_index_already_exists", index=self.index)
            return False
        except StoreError as exc:
            logger.error("models_index_create_failed", index=self.index, error=str(exc))
            raise InfrastructureError(
                f"Failed to create index [{self.index}]: {exc.message}", cause=exc
            ).with_context(index=self.index, operation="create_index") from exc
        logger.info(
            "models_index_created",
            index=self.index,
            shards=self.shards,
            replicas=self.replicas,
        )
        return True
