"""
Shared pytest fixtures for modelreg tests.

Provides a valid entity model body, an in-memory document store, and a
registry/adapter/app stack wired to it.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from modelreg.api.adapter import RequestAdapter
from modelreg.api.app import create_app
from modelreg.api.settings import RegistryAPISettings
from modelreg.core.logging import clear_context
from modelreg.ops.lifecycle import LocationManager
from modelreg.ops.registry import ModelRegistry
from modelreg.store.memory import InMemoryDocumentStore

MODELS_INDEX = ".zentity-models"


def make_model(**overrides: Any) -> dict[str, Any]:
    """A small but complete entity model; sections can be overridden."""
    model: dict[str, Any] = {
        "attributes": {
            "name": {"type": "string"},
            "dob": {"type": "date", "score": 0.8},
        },
        "resolvers": {
            "name_dob": {"attributes": ["name", "dob"]},
        },
        "matchers": {
            "exact": {"clause": {"term": {"{{ field }}": "{{ value }}"}}, "quality": 0.95},
        },
        "indices": {
            "people": {
                "fields": {
                    "full_name": {"attribute": "name", "matcher": "exact"},
                    "birth_date": {"attribute": "dob"},
                }
            }
        },
    }
    model.update(overrides)
    return model


@pytest.fixture()
def model_dict() -> dict[str, Any]:
    return make_model()


@pytest.fixture()
def model_body(model_dict: dict[str, Any]) -> str:
    """Valid entity model as raw JSON text."""
    return json.dumps(model_dict)


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def locations(store: InMemoryDocumentStore) -> LocationManager:
    return LocationManager(store)


@pytest.fixture()
def registry(store: InMemoryDocumentStore, locations: LocationManager) -> ModelRegistry:
    return ModelRegistry(store, locations)


@pytest.fixture()
def adapter(registry: ModelRegistry) -> RequestAdapter:
    return RequestAdapter(registry)


@pytest.fixture()
def api_settings() -> RegistryAPISettings:
    return RegistryAPISettings(store_backend="memory", log_format="json")


@pytest.fixture()
def client(api_settings: RegistryAPISettings, store: InMemoryDocumentStore) -> Iterator[TestClient]:
    """TestClient over an app backed by the shared in-memory store."""
    app = create_app(settings=api_settings, store=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def _clean_log_context() -> Iterator[None]:
    yield
    clear_context()
