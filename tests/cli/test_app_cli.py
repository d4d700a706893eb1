"""
Tests for the root CLI, ``modelreg index`` and ``modelreg serve``.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

from modelreg import __version__
from modelreg.cli.app import app
from modelreg.core.errors import StoreError


def test_version(runner):
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"modelreg {__version__}"


class TestIndexEnsure:
    def test_creates_then_reports_existing(self, runner, cli_store):
        first = runner.invoke(app, ["index", "ensure"])
        assert first.exit_code == 0, first.output
        assert "Created index .zentity-models" in first.output
        assert cli_store.mappings(".zentity-models")["dynamic"] == "strict"

        second = runner.invoke(app, ["index", "ensure"])
        assert second.exit_code == 0
        assert "already exists" in second.output

    def test_creation_failure(self, runner, monkeypatch):
        store = AsyncMock()
        store.index_exists.return_value = False
        store.create_index.side_effect = StoreError("cluster_block_exception", status=403)
        monkeypatch.setattr("modelreg.cli.utils.create_store", lambda settings: store)

        result = runner.invoke(app, ["index", "ensure"])
        assert result.exit_code == 1
        assert "Failed to create index" in result.output
        store.close.assert_awaited_once()


class TestServe:
    def test_runs_uvicorn_factory(self, runner, monkeypatch):
        run = MagicMock()
        monkeypatch.setattr("modelreg.cli.serve.uvicorn.run", run)
        result = runner.invoke(app, ["serve", "--host", "127.0.0.1", "--port", "9000"])
        assert result.exit_code == 0, result.output
        args, kwargs = run.call_args
        assert args == ("modelreg.api:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9000

    def test_defaults_from_settings(self, runner, monkeypatch):
        run = MagicMock()
        monkeypatch.setattr("modelreg.cli.serve.uvicorn.run", run)
        monkeypatch.setenv("MODELREG_PORT", "8123")
        result = runner.invoke(app, ["serve"])
        assert result.exit_code == 0, result.output
        assert run.call_args.kwargs["port"] == 8123
