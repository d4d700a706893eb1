"""
Document store contract.

The registry talks to its backing store only through :class:`DocumentStore`.
Responses are the store's native JSON bodies (Elasticsearch shapes) returned
as plain dicts; the registry never reshapes them.

Every implementation raises:
    - :class:`~modelreg.core.errors.LocationNotFoundError` when the index is
      missing (get, search, delete)
    - :class:`~modelreg.core.errors.LocationExistsError` when ``create_index``
      finds the index already there
    - :class:`~modelreg.core.errors.DocumentExistsError` when a create-only
      write finds an existing document
    - :class:`~modelreg.core.errors.StoreUnavailableError` on transport failure
    - :class:`~modelreg.core.errors.StoreError` for anything else

A missing *document* is not an error: ``get_document`` returns a body with
``"found": false`` and ``delete_document`` one with ``"result": "not_found"``.
"""

from __future__ import annotations

from typing import Any, Literal, Protocol, runtime_checkable

Refresh = Literal["wait_for", "true", "false"]


@runtime_checkable
class DocumentStore(Protocol):
    """Async client for an index-per-collection document store."""

    async def index_exists(self, index: str) -> bool:
        """Return whether *index* exists."""
        ...

    async def create_index(self, index: str, body: dict[str, Any]) -> dict[str, Any]:
        """Create *index* with settings + mappings *body*."""
        ...

    async def get_document(self, index: str, doc_id: str) -> dict[str, Any]:
        """Fetch one document (``found`` tells whether it exists)."""
        ...

    async def search_documents(self, index: str, *, size: int) -> dict[str, Any]:
        """Return up to *size* documents of *index* (match-all)."""
        ...

    async def index_document(
        self,
        index: str,
        doc_id: str,
        source: str,
        *,
        create_only: bool,
        refresh: Refresh = "wait_for",
    ) -> dict[str, Any]:
        """Write raw JSON *source* under *doc_id* (create-only or overwrite)."""
        ...

    async def delete_document(
        self,
        index: str,
        doc_id: str,
        *,
        refresh: Refresh = "wait_for",
    ) -> dict[str, Any]:
        """Delete one document."""
        ...

    async def ping(self) -> bool:
        """Return ``True`` if the store answers; raise otherwise."""
        ...

    async def close(self) -> None:
        """Release connections."""
        ...
