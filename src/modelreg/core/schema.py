"""
Storage layout of the models index.

All entity models live in one index. Its mapping is strict (no unexpected
top-level fields) and disables indexing on the four model sections, so their
values are stored and returned verbatim but never interpreted as search
fields.

The mapping is immutable once the index is created; there is no migration
logic anywhere in the package.

Tags:
    schema, mapping, elasticsearch, storage-layout, modelreg

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import copy
from typing import Any

MODELS_INDEX = ".zentity-models"

MODEL_SECTIONS: tuple[str, ...] = ("attributes", "resolvers", "matchers", "indices")

DEFAULT_SHARDS = 1
DEFAULT_REPLICAS = 1

INDEX_MAPPING: dict[str, Any] = {
    "dynamic": "strict",
    "properties": {
        section: {"type": "object", "enabled": False} for section in MODEL_SECTIONS
    },
}


def index_mapping() -> dict[str, Any]:
    """Return a copy of the fixed mapping."""
    return copy.deepcopy(INDEX_MAPPING)


def index_settings(
    shards: int = DEFAULT_SHARDS,
    replicas: int = DEFAULT_REPLICAS,
) -> dict[str, Any]:
    """Index-level settings for the models index topology."""
    return {
        "index": {
            "number_of_shards": shards,
            "number_of_replicas": replicas,
        }
    }


def index_body(
    shards: int = DEFAULT_SHARDS,
    replicas: int = DEFAULT_REPLICAS,
) -> dict[str, Any]:
    """Full create-index request body (settings + mappings).

    Example:
        >>> body = index_body()
        >>> body["mappings"]["dynamic"]
        'strict'
        >>> body["settings"]["index"]["number_of_shards"]
        1
    """
    return {
        "settings": index_settings(shards, replicas),
        "mappings": index_mapping(),
    }


__all__ = [
    "MODELS_INDEX",
    "MODEL_SECTIONS",
    "DEFAULT_SHARDS",
    "DEFAULT_REPLICAS",
    "INDEX_MAPPING",
    "index_mapping",
    "index_settings",
    "index_body",
]
