"""
FastAPI dependency injection: settings singleton and the app's adapter.

Usage in routers::

    from modelreg.api.deps import Adapter

    @router.get("/models")
    async def list_models(adapter: Adapter):
        ...

The store, registry and adapter are built once by
:func:`modelreg.api.app.create_app` and kept on ``app.state``; dependencies
only look them up.

Tags:
    modelreg, api, dependency-injection

Doc-Types:
    api-reference
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from modelreg.api.adapter import RequestAdapter
from modelreg.api.settings import RegistryAPISettings

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> RegistryAPISettings:
    """Cached settings: loaded once per process."""
    return RegistryAPISettings()


# ── App-scoped objects ───────────────────────────────────────────────────


def get_adapter(request: Request) -> RequestAdapter:
    return request.app.state.adapter


# ── Convenience type aliases ─────────────────────────────────────────────

Adapter = Annotated[RequestAdapter, Depends(get_adapter)]
