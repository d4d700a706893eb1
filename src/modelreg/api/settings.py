"""
API-specific settings.

Extends :class:`~modelreg.core.settings.RegistrySettings` with the knobs
that govern the HTTP transport (bind address, URL prefix, CORS).

All values can be overridden via ``MODELREG_``-prefixed environment
variables (``MODELREG_PORT``, ``MODELREG_API_PREFIX``, ...).
"""

from __future__ import annotations

from pydantic import Field

from modelreg import __version__
from modelreg.core.settings import RegistrySettings


class RegistryAPISettings(RegistrySettings):
    """Settings for the registry REST API.

    Order of precedence (highest → lowest):
        1. Environment variables (``MODELREG_API_PREFIX``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="", description="URL prefix for the models endpoints")
    api_title: str = Field(default="Entity Model Registry", description="OpenAPI title")
    api_version: str = Field(default=__version__, description="OpenAPI version string")

    # ── CORS ─────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
