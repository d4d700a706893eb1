"""
Tests for ``modelreg models`` commands.
"""

from __future__ import annotations

import json

from modelreg.cli.app import app
from modelreg.core.schema import MODELS_INDEX


class TestCreate:
    def test_from_stdin(self, runner, cli_store, model_body):
        result = runner.invoke(app, ["models", "create", "person"], input=model_body)
        assert result.exit_code == 0, result.output
        assert '"result":"created"' in result.output

    def test_from_file(self, runner, cli_store, model_body, tmp_path):
        path = tmp_path / "person.json"
        path.write_text(model_body, encoding="utf-8")
        result = runner.invoke(app, ["models", "create", "person", "--file", str(path)])
        assert result.exit_code == 0, result.output
        assert '"_id":"person"' in result.output

    def test_missing_file(self, runner, cli_store, tmp_path):
        result = runner.invoke(app, ["models", "create", "person", "-f", str(tmp_path / "nope.json")])
        assert result.exit_code != 0

    def test_conflict(self, runner, cli_store, model_body):
        runner.invoke(app, ["models", "create", "person"], input=model_body)
        result = runner.invoke(app, ["models", "create", "person"], input=model_body)
        assert result.exit_code == 1
        assert "version_conflict_engine_exception" in result.output

    def test_empty_body(self, runner, cli_store):
        result = runner.invoke(app, ["models", "create", "person"], input="")
        assert result.exit_code == 1
        assert "Request body is missing." in result.output

    def test_invalid_model_not_stored(self, runner, cli_store):
        result = runner.invoke(app, ["models", "create", "person"], input='{"attributes": {}}')
        assert result.exit_code == 1
        assert "Invalid entity model" in result.output
        assert MODELS_INDEX not in cli_store._indices


class TestReadUpdateDelete:
    def test_get_pretty(self, runner, cli_store, model_body):
        runner.invoke(app, ["models", "create", "person"], input=model_body)
        result = runner.invoke(app, ["models", "get", "person", "--pretty"])
        assert result.exit_code == 0
        assert '"found": true' in result.output

    def test_get_missing(self, runner, cli_store):
        result = runner.invoke(app, ["models", "get", "nobody"])
        assert result.exit_code == 0
        assert '"found":false' in result.output

    def test_list(self, runner, cli_store, model_body):
        runner.invoke(app, ["models", "create", "person"], input=model_body)
        runner.invoke(app, ["models", "create", "company"], input=model_body)
        result = runner.invoke(app, ["models", "list"])
        assert result.exit_code == 0
        assert '"_id":"person"' in result.output
        assert '"_id":"company"' in result.output

    def test_update_then_delete(self, runner, cli_store, model_dict):
        body = json.dumps(model_dict)
        assert '"result":"created"' in runner.invoke(app, ["models", "update", "person"], input=body).output
        assert '"result":"updated"' in runner.invoke(app, ["models", "update", "person"], input=body).output

        result = runner.invoke(app, ["models", "delete", "person"])
        assert result.exit_code == 0
        assert '"result":"deleted"' in result.output
