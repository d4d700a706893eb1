"""
Registry operations layer.

All business logic lives here; the API and CLI only parse input and render
output.

- :class:`LocationManager`: lazily creates the models index
- :class:`ModelRegistry`: list/get/create/update/delete entity models
"""

from modelreg.ops.lifecycle import LocationManager
from modelreg.ops.registry import ModelRegistry

__all__ = ["LocationManager", "ModelRegistry"]
