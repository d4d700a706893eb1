"""
REST API for the entity model registry.

Exposes :func:`create_app`, the FastAPI application factory used by
``modelreg serve`` and by uvicorn's ``--factory`` mode::

    uvicorn modelreg.api:create_app --factory
"""

from modelreg.api.app import create_app

__all__ = ["create_app"]
