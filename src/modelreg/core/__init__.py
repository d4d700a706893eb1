"""
Core primitives: storage layout, entity model grammar, error taxonomy,
settings, logging and health checks.
"""

from modelreg.core.errors import (
    BadInputError,
    DocumentExistsError,
    ErrorCategory,
    ErrorContext,
    InfrastructureError,
    LocationExistsError,
    LocationNotFoundError,
    MethodNotImplementedError,
    ModelValidationError,
    RegistryError,
    StoreError,
    StoreUnavailableError,
)
from modelreg.core.model import EntityModel, validate_entity_model
from modelreg.core.schema import INDEX_MAPPING, MODEL_SECTIONS, MODELS_INDEX, index_body

__all__ = [
    "BadInputError",
    "DocumentExistsError",
    "ErrorCategory",
    "ErrorContext",
    "InfrastructureError",
    "LocationExistsError",
    "LocationNotFoundError",
    "MethodNotImplementedError",
    "ModelValidationError",
    "RegistryError",
    "StoreError",
    "StoreUnavailableError",
    "EntityModel",
    "validate_entity_model",
    "INDEX_MAPPING",
    "MODEL_SECTIONS",
    "MODELS_INDEX",
    "index_body",
]
