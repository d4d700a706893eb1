"""
Tests for the registry error taxonomy.
"""

from __future__ import annotations

import pytest

from modelreg.core.errors import (
    BadInputError,
    DocumentExistsError,
    ErrorCategory,
    InfrastructureError,
    LocationExistsError,
    LocationNotFoundError,
    MethodNotImplementedError,
    ModelValidationError,
    RegistryError,
    StoreError,
    StoreUnavailableError,
)


class TestRegistryError:
    def test_defaults(self):
        err = RegistryError("boom")
        assert err.message == "boom"
        assert str(err) == "boom"
        assert err.category == ErrorCategory.INTERNAL
        assert err.retryable is False

    def test_with_context_sets_known_fields_and_metadata(self):
        err = RegistryError("boom").with_context(operation="create", index=".zentity-models", attempt=2)
        assert err.context.operation == "create"
        assert err.context.index == ".zentity-models"
        assert err.context.metadata == {"attempt": 2}

    def test_cause_is_chained(self):
        root = ValueError("root")
        err = RegistryError("wrapped", cause=root)
        assert err.__cause__ is root
        assert err.to_dict()["cause"] == "root"

    def test_to_dict(self):
        err = InfrastructureError("no index").with_context(index=".zentity-models")
        d = err.to_dict()
        assert d["error_type"] == "InfrastructureError"
        assert d["category"] == "INFRASTRUCTURE"
        assert d["context"] == {"index": ".zentity-models"}

    def test_every_category_has_an_error_class(self):
        classes = (
            RegistryError,
            BadInputError,
            MethodNotImplementedError,
            InfrastructureError,
            StoreError,
            StoreUnavailableError,
        )
        assert {cls.default_category for cls in classes} == set(ErrorCategory)

    def test_repr(self):
        assert repr(BadInputError("x")) == "BadInputError('x', category=VALIDATION)"


class TestRequestErrors:
    def test_validation_error_is_bad_input(self):
        err = ModelValidationError("bad", field="attributes")
        assert isinstance(err, BadInputError)
        assert err.to_dict()["field"] == "attributes"

    def test_method_not_implemented_default_message(self):
        err = MethodNotImplementedError("PATCH", "/models/person")
        assert err.message == "Method and endpoint not implemented."
        assert err.method == "PATCH"
        assert err.path == "/models/person"
        assert err.category == ErrorCategory.REQUEST


class TestStoreErrors:
    @pytest.mark.parametrize(
        ("cls", "status", "error_type"),
        [
            (StoreError, 500, "store_exception"),
            (LocationNotFoundError, 404, "index_not_found_exception"),
            (LocationExistsError, 400, "resource_already_exists_exception"),
            (DocumentExistsError, 409, "version_conflict_engine_exception"),
            (StoreUnavailableError, 503, "store_unavailable_exception"),
        ],
    )
    def test_default_status_and_body(self, cls, status, error_type):
        err = cls("reason here")
        assert err.status == status
        assert err.body["status"] == status
        assert err.body["error"]["type"] == error_type
        assert err.body["error"]["reason"] == "reason here"
        assert err.body["error"]["root_cause"] == [{"type": error_type, "reason": "reason here"}]

    def test_explicit_status_and_body_kept(self):
        body = {"error": {"type": "x"}, "status": 418}
        err = StoreError("teapot", status=418, body=body)
        assert err.status == 418
        assert err.body is body
        assert err.to_dict()["status"] == 418

    def test_unavailable_is_retryable_network(self):
        err = StoreUnavailableError("down")
        assert err.retryable is True
        assert err.category == ErrorCategory.NETWORK

    def test_store_errors_are_not_bad_input(self):
        assert not issubclass(StoreError, BadInputError)
        assert not issubclass(InfrastructureError, StoreError)
