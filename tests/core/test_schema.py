"""
Tests for the models index layout.
"""

from __future__ import annotations

from modelreg.core.schema import (
    INDEX_MAPPING,
    MODEL_SECTIONS,
    MODELS_INDEX,
    index_body,
    index_mapping,
    index_settings,
)


def test_index_name():
    assert MODELS_INDEX == ".zentity-models"


def test_sections():
    assert MODEL_SECTIONS == ("attributes", "resolvers", "matchers", "indices")


def test_mapping_is_strict_with_disabled_sections():
    assert INDEX_MAPPING["dynamic"] == "strict"
    assert set(INDEX_MAPPING["properties"]) == set(MODEL_SECTIONS)
    for section in MODEL_SECTIONS:
        assert INDEX_MAPPING["properties"][section] == {"type": "object", "enabled": False}


def test_index_mapping_returns_copy():
    mapping = index_mapping()
    mapping["properties"]["attributes"]["enabled"] = True
    assert INDEX_MAPPING["properties"]["attributes"]["enabled"] is False


def test_default_topology():
    assert index_settings() == {"index": {"number_of_shards": 1, "number_of_replicas": 1}}


def test_index_body():
    body = index_body(shards=2, replicas=0)
    assert body["settings"]["index"] == {"number_of_shards": 2, "number_of_replicas": 0}
    assert body["mappings"] == INDEX_MAPPING
