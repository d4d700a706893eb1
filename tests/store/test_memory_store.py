"""
Tests for the in-memory document store.
"""

from __future__ import annotations

import json

import pytest
import pytest_asyncio

from modelreg.core.errors import (
    DocumentExistsError,
    LocationExistsError,
    LocationNotFoundError,
    StoreError,
)
from modelreg.core.schema import MODELS_INDEX, index_body
from modelreg.store.base import DocumentStore
from modelreg.store.memory import InMemoryDocumentStore


@pytest_asyncio.fixture
async def ready_store() -> InMemoryDocumentStore:
    s = InMemoryDocumentStore()
    await s.create_index(MODELS_INDEX, index_body())
    return s


def test_satisfies_protocol():
    assert isinstance(InMemoryDocumentStore(), DocumentStore)


class TestIndices:
    @pytest.mark.asyncio
    async def test_create_and_exists(self):
        s = InMemoryDocumentStore()
        assert await s.index_exists(MODELS_INDEX) is False
        resp = await s.create_index(MODELS_INDEX, index_body())
        assert resp["acknowledged"] is True
        assert await s.index_exists(MODELS_INDEX) is True
        assert s.mappings(MODELS_INDEX)["dynamic"] == "strict"
        assert s.settings(MODELS_INDEX)["index"]["number_of_shards"] == 1

    @pytest.mark.asyncio
    async def test_create_twice_raises_exists(self):
        s = InMemoryDocumentStore()
        await s.create_index(MODELS_INDEX, index_body())
        with pytest.raises(LocationExistsError):
            await s.create_index(MODELS_INDEX, index_body())

    @pytest.mark.asyncio
    async def test_missing_index_on_read(self):
        s = InMemoryDocumentStore()
        with pytest.raises(LocationNotFoundError):
            await s.get_document(MODELS_INDEX, "person")
        with pytest.raises(LocationNotFoundError):
            await s.search_documents(MODELS_INDEX, size=10)
        with pytest.raises(LocationNotFoundError):
            await s.delete_document(MODELS_INDEX, "person")

    @pytest.mark.asyncio
    async def test_write_auto_creates_unmapped_index(self):
        s = InMemoryDocumentStore()
        await s.index_document("scratch", "a", '{"anything": 1}', create_only=False)
        assert s.mappings("scratch") == {}

    @pytest.mark.asyncio
    async def test_write_without_auto_create(self):
        s = InMemoryDocumentStore(auto_create_index=False)
        with pytest.raises(LocationNotFoundError):
            await s.index_document(MODELS_INDEX, "a", "{}", create_only=False)


class TestDocuments:
    @pytest.mark.asyncio
    async def test_create_then_get(self, ready_store, model_body, model_dict):
        resp = await ready_store.index_document(MODELS_INDEX, "person", model_body, create_only=True)
        assert resp["result"] == "created"
        assert resp["_version"] == 1

        got = await ready_store.get_document(MODELS_INDEX, "person")
        assert got["found"] is True
        assert got["_source"] == model_dict

    @pytest.mark.asyncio
    async def test_create_only_conflict(self, ready_store, model_body):
        await ready_store.index_document(MODELS_INDEX, "person", model_body, create_only=True)
        with pytest.raises(DocumentExistsError) as exc_info:
            await ready_store.index_document(MODELS_INDEX, "person", model_body, create_only=True)
        assert exc_info.value.status == 409
        assert exc_info.value.body["error"]["type"] == "version_conflict_engine_exception"

    @pytest.mark.asyncio
    async def test_upsert_bumps_version(self, ready_store, model_body):
        first = await ready_store.index_document(MODELS_INDEX, "person", model_body, create_only=False)
        second = await ready_store.index_document(MODELS_INDEX, "person", model_body, create_only=False)
        assert first["result"] == "created"
        assert second["result"] == "updated"
        assert second["_version"] == 2

    @pytest.mark.asyncio
    async def test_strict_mapping_rejects_unknown_field(self, ready_store):
        with pytest.raises(StoreError) as exc_info:
            await ready_store.index_document(MODELS_INDEX, "person", '{"bogus": {}}', create_only=False)
        assert exc_info.value.status == 400
        assert exc_info.value.body["error"]["type"] == "strict_dynamic_mapping_exception"

    @pytest.mark.asyncio
    async def test_unparseable_source(self, ready_store):
        with pytest.raises(StoreError) as exc_info:
            await ready_store.index_document(MODELS_INDEX, "person", "[1, 2]", create_only=False)
        assert exc_info.value.status == 400

    @pytest.mark.asyncio
    async def test_get_missing_document(self, ready_store):
        got = await ready_store.get_document(MODELS_INDEX, "nobody")
        assert got == {"_index": MODELS_INDEX, "_id": "nobody", "found": False}

    @pytest.mark.asyncio
    async def test_delete(self, ready_store, model_body):
        await ready_store.index_document(MODELS_INDEX, "person", model_body, create_only=True)
        resp = await ready_store.delete_document(MODELS_INDEX, "person")
        assert resp["result"] == "deleted"
        again = await ready_store.delete_document(MODELS_INDEX, "person")
        assert again["result"] == "not_found"

    @pytest.mark.asyncio
    async def test_search_in_write_order_with_size(self, ready_store, model_body):
        for name in ("b", "a", "c"):
            await ready_store.index_document(MODELS_INDEX, name, model_body, create_only=True)
        resp = await ready_store.search_documents(MODELS_INDEX, size=2)
        assert resp["hits"]["total"]["value"] == 3
        assert [h["_id"] for h in resp["hits"]["hits"]] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_returned_source_is_a_copy(self, ready_store, model_body):
        await ready_store.index_document(MODELS_INDEX, "person", model_body, create_only=True)
        got = await ready_store.get_document(MODELS_INDEX, "person")
        got["_source"]["attributes"].clear()
        again = await ready_store.get_document(MODELS_INDEX, "person")
        assert again["_source"] == json.loads(model_body)


@pytest.mark.asyncio
async def test_delete_index_helper():
    s = InMemoryDocumentStore()
    await s.create_index(MODELS_INDEX, index_body())
    assert s.delete_index(MODELS_INDEX) is True
    assert s.delete_index(MODELS_INDEX) is False
    assert await s.index_exists(MODELS_INDEX) is False
