"""
Entity model grammar and validator.

An entity model is a JSON object with exactly four sections::

    {
      "attributes": {"<name>": {"type": "string", "score": 0.5}},
      "resolvers":  {"<name>": {"attributes": ["<attribute>", ...], "weight": 0}},
      "matchers":   {"<name>": {"clause": {...}, "quality": 0.9}},
      "indices":    {"<index>": {"fields": {"<field>": {"attribute": "<attribute>",
                                                        "matcher": "<matcher>"}}}}
    }

:func:`validate_entity_model` is the single validate-or-fail step every write
passes through before anything reaches the store. It accepts the raw body
text and either returns the parsed :class:`EntityModel` or raises
:class:`~modelreg.core.errors.ModelValidationError` with a human-readable
reason.

The registry never looks at the parsed object; it persists the raw body
exactly as submitted. Callers that want a different grammar can pass any
callable with the same shape as ``validator=`` to the request adapter.

Tags:
    validation, pydantic, entity-model, grammar, modelreg

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from modelreg.core.errors import ModelValidationError
from modelreg.core.schema import MODEL_SECTIONS

AttributeType = Literal["string", "number", "boolean", "date"]

Validator = Callable[[str], Any]
"""Validator contract: accept the raw body or raise ``ModelValidationError``."""


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ── Sections ─────────────────────────────────────────────────────────────


class Attribute(_StrictModel):
    """A named attribute of the entity."""

    type: AttributeType = "string"
    score: float | None = Field(default=None, ge=0.0, le=1.0)
    params: dict[str, Any] = Field(default_factory=dict)


class Resolver(_StrictModel):
    """A combination of attributes that resolves an entity."""

    attributes: list[str] = Field(min_length=1)
    weight: int = 0

    @field_validator("attributes")
    @classmethod
    def _names_not_blank(cls, v: list[str]) -> list[str]:
        if any(not name.strip() for name in v):
            raise ValueError("attribute names must be non-empty strings")
        return v


class Matcher(_StrictModel):
    """A query clause template used to match attribute values."""

    clause: dict[str, Any]
    quality: float | None = Field(default=None, ge=0.0, le=1.0)
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("clause")
    @classmethod
    def _clause_not_empty(cls, v: dict[str, Any]) -> dict[str, Any]:
        if not v:
            raise ValueError("clause must be a non-empty object")
        return v


class IndexField(_StrictModel):
    """Maps one index field to an attribute and, optionally, a matcher."""

    attribute: str = Field(min_length=1)
    matcher: str | None = None
    quality: float | None = Field(default=None, ge=0.0, le=1.0)


class Index(_StrictModel):
    """Fields of one index that hold attribute values."""

    fields: dict[str, IndexField]


# ── Model ────────────────────────────────────────────────────────────────


class EntityModel(_StrictModel):
    """A complete, validated entity model."""

    attributes: dict[str, Attribute]
    resolvers: dict[str, Resolver]
    matchers: dict[str, Matcher]
    indices: dict[str, Index]

    @field_validator(*MODEL_SECTIONS)
    @classmethod
    def _keys_not_blank(cls, v: dict[str, Any]) -> dict[str, Any]:
        if any(not name.strip() for name in v):
            raise ValueError("names must be non-empty strings")
        return v

    @model_validator(mode="after")
    def _check_references(self) -> EntityModel:
        declared = set(self.attributes)
        for name, resolver in self.resolvers.items():
            for attr in resolver.attributes:
                if attr not in declared:
                    raise ValueError(
                        f"resolver '{name}' references undeclared attribute '{attr}'"
                    )
        for index_name, index in self.indices.items():
            for field_name, fld in index.fields.items():
                if fld.attribute not in declared:
                    raise ValueError(
                        f"field '{field_name}' of index '{index_name}' references "
                        f"undeclared attribute '{fld.attribute}'"
                    )
                if fld.matcher is not None and fld.matcher not in self.matchers:
                    raise ValueError(
                        f"field '{field_name}' of index '{index_name}' references "
                        f"undeclared matcher '{fld.matcher}'"
                    )
        return self


# ── Validation entry point ───────────────────────────────────────────────


def _describe(error: dict[str, Any]) -> str:
    """Render one pydantic error as ``path: reason``."""
    if error["type"] == "value_error" and "error" in error.get("ctx", {}):
        reason = str(error["ctx"]["error"])
    else:
        reason = error["msg"]
    loc = ".".join(str(part) for part in error["loc"])
    return f"{loc}: {reason}" if loc else reason


def validate_entity_model(raw: str | bytes) -> EntityModel:
    """Parse and validate a raw entity model body.

    Raises:
        ModelValidationError: the body is not JSON, not an object, has
            missing/unexpected sections, or fails a semantic rule.
    """
    try:
        return EntityModel.model_validate_json(raw)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        reasons = "; ".join(_describe(e) for e in errors)
        first_loc = errors[0]["loc"] if errors else ()
        raise ModelValidationError(
            f"Invalid entity model: {reasons}",
            field=".".join(str(part) for part in first_loc) or None,
            cause=exc,
        ) from exc


__all__ = [
    "AttributeType",
    "Attribute",
    "Resolver",
    "Matcher",
    "IndexField",
    "Index",
    "EntityModel",
    "Validator",
    "validate_entity_model",
]
