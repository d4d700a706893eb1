"""Build the configured document store."""

from __future__ import annotations

from modelreg.core.logging import get_logger
from modelreg.core.settings import RegistrySettings
from modelreg.store.base import DocumentStore
from modelreg.store.http import HttpDocumentStore
from modelreg.store.memory import InMemoryDocumentStore

logger = get_logger(__name__)


def create_store(settings: RegistrySettings) -> DocumentStore:
    """Return a store for ``settings.store_backend``."""
    if settings.store_backend == "memory":
        logger.warning("memory_store_selected", detail="models are not persisted")
        return InMemoryDocumentStore()
    logger.info("http_store_selected", url=settings.store_url)
    return HttpDocumentStore.from_settings(settings)
