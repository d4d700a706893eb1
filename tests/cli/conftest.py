"""Shared fixtures for CLI tests."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from modelreg.store.memory import InMemoryDocumentStore


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def cli_store(monkeypatch: pytest.MonkeyPatch) -> InMemoryDocumentStore:
    """One in-memory store shared by every command in a test."""
    store = InMemoryDocumentStore()
    monkeypatch.setattr("modelreg.cli.utils.create_store", lambda settings: store)
    return store
