"""
In-process :class:`~modelreg.store.base.DocumentStore`.

Keeps indices in a dict and answers with the same JSON shapes and error
types as the HTTP store, including strict-mapping enforcement and
create-only conflicts. Used by the test suite and by
``MODELREG_STORE_BACKEND=memory`` for local development; data does not
survive the process.

Writes are visible as soon as the call returns, so ``refresh`` is accepted
and ignored.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any

from modelreg.core.errors import (
    DocumentExistsError,
    LocationExistsError,
    LocationNotFoundError,
    StoreError,
)
from modelreg.store.base import Refresh


@dataclass
class _Doc:
    source: dict[str, Any]
    version: int
    seq_no: int


@dataclass
class _Index:
    settings: dict[str, Any] = field(default_factory=dict)
    mappings: dict[str, Any] = field(default_factory=dict)
    docs: dict[str, _Doc] = field(default_factory=dict)
    seq_no: int = -1

    def next_seq_no(self) -> int:
        self.seq_no += 1
        return self.seq_no


_SHARDS_OK = {"total": 2, "successful": 1, "failed": 0}


class InMemoryDocumentStore:
    """Dict-backed document store with Elasticsearch response shapes.

    Parameters
    ----------
    auto_create_index : bool
        Create a missing index (with no mapping) on the first write to it,
        as Elasticsearch does by default.
    """

    def __init__(self, *, auto_create_index: bool = True) -> None:
        self.auto_create_index = auto_create_index
        self._indices: dict[str, _Index] = {}

    # ------------------------------------------------------------------ #
    # Test helpers
    # ------------------------------------------------------------------ #

    def delete_index(self, index: str) -> bool:
        """Drop *index* (simulates out-of-band deletion)."""
        return self._indices.pop(index, None) is not None

    def mappings(self, index: str) -> dict[str, Any]:
        return copy.deepcopy(self._require(index).mappings)

    def settings(self, index: str) -> dict[str, Any]:
        return copy.deepcopy(self._require(index).settings)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _require(self, index: str) -> _Index:
        try:
            return self._indices[index]
        except KeyError:
            raise LocationNotFoundError(f"no such index [{index}]").with_context(index=index) from None

    def _check_mapping(self, idx: _Index, source: dict[str, Any]) -> None:
        if idx.mappings.get("dynamic") != "strict":
            return
        known = idx.mappings.get("properties", {})
        for key in source:
            if key not in known:
                reason = (
                    f"mapping set to strict, dynamic introduction of [{key}] "
                    "within [_doc] is not allowed"
                )
                raise StoreError(
                    reason,
                    status=400,
                    body={
                        "error": {
                            "root_cause": [{"type": "strict_dynamic_mapping_exception", "reason": reason}],
                            "type": "strict_dynamic_mapping_exception",
                            "reason": reason,
                        },
                        "status": 400,
                    },
                )

    @staticmethod
    def _parse(source: str) -> dict[str, Any]:
        try:
            parsed = json.loads(source)
        except ValueError as exc:
            raise StoreError(f"failed to parse: {exc}", status=400) from exc
        if not isinstance(parsed, dict):
            raise StoreError("failed to parse: document must be an object", status=400)
        return parsed

    # ------------------------------------------------------------------ #
    # Index operations
    # ------------------------------------------------------------------ #

    async def index_exists(self, index: str) -> bool:
        return index in self._indices

    async def create_index(self, index: str, body: dict[str, Any]) -> dict[str, Any]:
        if index in self._indices:
            raise LocationExistsError(
                f"index [{index}] already exists"
            ).with_context(index=index)
        self._indices[index] = _Index(
            settings=copy.deepcopy(body.get("settings", {})),
            mappings=copy.deepcopy(body.get("mappings", {})),
        )
        return {"acknowledged": True, "shards_acknowledged": True, "index": index}

    # ------------------------------------------------------------------ #
    # Document operations
    # ------------------------------------------------------------------ #

    async def get_document(self, index: str, doc_id: str) -> dict[str, Any]:
        idx = self._require(index)
        doc = idx.docs.get(doc_id)
        if doc is None:
            return {"_index": index, "_id": doc_id, "found": False}
        return {
            "_index": index,
            "_id": doc_id,
            "_version": doc.version,
            "_seq_no": doc.seq_no,
            "_primary_term": 1,
            "found": True,
            "_source": copy.deepcopy(doc.source),
        }

    async def search_documents(self, index: str, *, size: int) -> dict[str, Any]:
        idx = self._require(index)
        docs = sorted(idx.docs.items(), key=lambda item: item[1].seq_no)
        hits = [
            {"_index": index, "_id": doc_id, "_score": 1.0, "_source": copy.deepcopy(doc.source)}
            for doc_id, doc in docs[:size]
        ]
        return {
            "took": 0,
            "timed_out": False,
            "_shards": {"total": 1, "successful": 1, "skipped": 0, "failed": 0},
            "hits": {
                "total": {"value": len(docs), "relation": "eq"},
                "max_score": 1.0 if hits else None,
                "hits": hits,
            },
        }

    async def index_document(
        self,
        index: str,
        doc_id: str,
        source: str,
        *,
        create_only: bool,
        refresh: Refresh = "wait_for",
    ) -> dict[str, Any]:
        parsed = self._parse(source)
        if index not in self._indices and self.auto_create_index:
            self._indices[index] = _Index()
        idx = self._require(index)
        self._check_mapping(idx, parsed)

        existing = idx.docs.get(doc_id)
        if existing is not None and create_only:
            raise DocumentExistsError(
                f"[{doc_id}]: version conflict, document already exists "
                f"(current version [{existing.version}])"
            ).with_context(index=index, entity_type=doc_id)

        version = existing.version + 1 if existing else 1
        doc = _Doc(source=parsed, version=version, seq_no=idx.next_seq_no())
        idx.docs[doc_id] = doc
        return {
            "_index": index,
            "_id": doc_id,
            "_version": version,
            "result": "updated" if existing else "created",
            "_shards": dict(_SHARDS_OK),
            "_seq_no": doc.seq_no,
            "_primary_term": 1,
        }

    async def delete_document(
        self,
        index: str,
        doc_id: str,
        *,
        refresh: Refresh = "wait_for",
    ) -> dict[str, Any]:
        idx = self._require(index)
        existing = idx.docs.pop(doc_id, None)
        return {
            "_index": index,
            "_id": doc_id,
            "_version": existing.version + 1 if existing else 1,
            "result": "deleted" if existing else "not_found",
            "_shards": dict(_SHARDS_OK),
            "_seq_no": idx.next_seq_no(),
            "_primary_term": 1,
        }

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None
