"""
Elasticsearch REST implementation of :class:`~modelreg.store.base.DocumentStore`.

Built on ``httpx.AsyncClient``: every call is a single awaitable round trip,
so cancelling the awaiting task aborts the in-flight request, and every
request is bounded by the client timeout.

Store error bodies are classified by their ``error.type``:

==================================== ==============================
``index_not_found_exception``        ``LocationNotFoundError``
``resource_already_exists_exception`` ``LocationExistsError``
``version_conflict_engine_exception`` ``DocumentExistsError``
anything else                        ``StoreError``
==================================== ==============================

Transport failures (connect errors, timeouts) become
``StoreUnavailableError``.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from modelreg.core.errors import (
    DocumentExistsError,
    LocationExistsError,
    LocationNotFoundError,
    StoreError,
    StoreUnavailableError,
)
from modelreg.core.logging import get_logger
from modelreg.core.settings import RegistrySettings
from modelreg.store.base import Refresh

logger = get_logger(__name__)

_ERROR_TYPES: dict[str, type[StoreError]] = {
    "index_not_found_exception": LocationNotFoundError,
    "resource_already_exists_exception": LocationExistsError,
    "version_conflict_engine_exception": DocumentExistsError,
}


def _doc_path(index: str, endpoint: str, doc_id: str) -> str:
    return f"/{quote(index, safe='')}/{endpoint}/{quote(doc_id, safe='')}"


def _body(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON body, wrapping non-JSON payloads in an error shape."""
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {
            "error": {"type": "store_exception", "reason": response.text[:500]},
            "status": response.status_code,
        }
    return data if isinstance(data, dict) else {"data": data}


class HttpDocumentStore:
    """Async Elasticsearch REST client.

    Parameters
    ----------
    base_url : str
        Store URL, e.g. ``http://localhost:9200``.
    auth : tuple[str, str] | None
        Basic-auth credentials.
    timeout : float
        Seconds before any single request is abandoned.
    verify : bool
        Verify TLS certificates.
    transport : httpx.AsyncBaseTransport | None
        Custom transport (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth: tuple[str, str] | None = None,
        timeout: float = 30.0,
        verify: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=auth,
            timeout=timeout,
            verify=verify,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: RegistrySettings) -> HttpDocumentStore:
        auth = None
        if settings.store_username:
            password = settings.store_password.get_secret_value() if settings.store_password else ""
            auth = (settings.store_username, password)
        return cls(
            settings.store_url,
            auth=auth,
            timeout=settings.store_timeout_s,
            verify=settings.store_verify_tls,
        )

    # ------------------------------------------------------------------ #
    # Transport
    # ------------------------------------------------------------------ #

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        headers = {"Content-Type": "application/json"} if content is not None else None
        try:
            return await self._client.request(
                method, path, params=params, json=json, content=content, headers=headers
            )
        except httpx.TimeoutException as exc:
            raise StoreUnavailableError(
                f"Store request timed out: {method} {path}", cause=exc
            ).with_context(url=f"{self.base_url}{path}") from exc
        except httpx.TransportError as exc:
            raise StoreUnavailableError(
                f"Store unreachable: {method} {path}: {exc}", cause=exc
            ).with_context(url=f"{self.base_url}{path}") from exc

    def _error(self, response: httpx.Response) -> StoreError:
        """Build the typed error for a failed response."""
        body = _body(response)
        error = body.get("error")
        if isinstance(error, dict):
            error_type = error.get("type", "")
            reason = error.get("reason") or error_type or f"HTTP {response.status_code}"
        else:
            error_type = ""
            reason = str(error) if error else f"HTTP {response.status_code}"
        cls = _ERROR_TYPES.get(error_type, StoreError)
        if cls is StoreError and response.status_code == 409:
            cls = DocumentExistsError
        exc = cls(reason, status=response.status_code, body=body)
        exc.with_context(url=str(response.request.url), http_status=response.status_code)
        return exc

    # ------------------------------------------------------------------ #
    # Index operations
    # ------------------------------------------------------------------ #

    async def index_exists(self, index: str) -> bool:
        response = await self._request("HEAD", f"/{quote(index, safe='')}")
        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        raise self._error(response)

    async def create_index(self, index: str, body: dict[str, Any]) -> dict[str, Any]:
        response = await self._request("PUT", f"/{quote(index, safe='')}", json=body)
        if response.is_success:
            return _body(response)
        raise self._error(response)

    # ------------------------------------------------------------------ #
    # Document operations
    # ------------------------------------------------------------------ #

    async def get_document(self, index: str, doc_id: str) -> dict[str, Any]:
        response = await self._request("GET", _doc_path(index, "_doc", doc_id))
        body = _body(response)
        if response.is_success:
            return body
        if response.status_code == 404 and "found" in body:
            return body
        raise self._error(response)

    async def search_documents(self, index: str, *, size: int) -> dict[str, Any]:
        response = await self._request(
            "POST",
            f"/{quote(index, safe='')}/_search",
            json={"size": size, "query": {"match_all": {}}},
        )
        if response.is_success:
            return _body(response)
        raise self._error(response)

    async def index_document(
        self,
        index: str,
        doc_id: str,
        source: str,
        *,
        create_only: bool,
        refresh: Refresh = "wait_for",
    ) -> dict[str, Any]:
        endpoint = "_create" if create_only else "_doc"
        response = await self._request(
            "PUT",
            _doc_path(index, endpoint, doc_id),
            params={"refresh": refresh},
            content=source.encode("utf-8"),
        )
        if response.is_success:
            return _body(response)
        raise self._error(response)

    async def delete_document(
        self,
        index: str,
        doc_id: str,
        *,
        refresh: Refresh = "wait_for",
    ) -> dict[str, Any]:
        response = await self._request(
            "DELETE",
            _doc_path(index, "_doc", doc_id),
            params={"refresh": refresh},
        )
        body = _body(response)
        if response.is_success:
            return body
        if response.status_code == 404 and body.get("result") == "not_found":
            return body
        raise self._error(response)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def ping(self) -> bool:
        response = await self._request("GET", "/")
        if response.is_success:
            return True
        raise self._error(response)

    async def close(self) -> None:
        await self._client.aclose()
        logger.debug("store_client_closed", url=self.base_url)
