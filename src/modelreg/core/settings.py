"""Registry settings shared by the API and the CLI.

Values come from (highest → lowest precedence):
    1. Environment variables prefixed ``MODELREG_`` (``MODELREG_STORE_URL`` …)
    2. A ``.env`` file in the working directory
    3. The defaults below

Unknown variables are ignored so a shared ``.env`` never breaks startup.

Examples:
    >>> from modelreg.core.settings import RegistrySettings
    >>> RegistrySettings(store_backend="memory").list_size
    10000

Tags:
    settings, configuration, pydantic-settings, environment, modelreg

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from modelreg.core.schema import DEFAULT_REPLICAS, DEFAULT_SHARDS


class RegistrySettings(BaseSettings):
    """Store connection, index topology, and logging settings.

    Fields
    ──────
    store_backend    : ``http`` (Elasticsearch REST) or ``memory`` (in-process)
    store_url        : Base URL of the store
    store_timeout_s  : Upper bound on every store round trip
    index_shards     : Primary shards for the models index
    index_replicas   : Replicas for the models index
    list_size        : Upper bound on models returned by a list
    """

    model_config = SettingsConfigDict(
        env_prefix="MODELREG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Store ────────────────────────────────────────────────────
    store_backend: Literal["http", "memory"] = "http"
    store_url: str = Field(default="http://localhost:9200", description="Document store base URL")
    store_username: str | None = Field(default=None, description="Basic-auth user")
    store_password: SecretStr | None = Field(default=None, description="Basic-auth password")
    store_timeout_s: float = Field(default=30.0, gt=0, description="Per-request timeout (seconds)")
    store_verify_tls: bool = Field(default=True, description="Verify the store's TLS certificate")

    # ── Models index ─────────────────────────────────────────────
    index_shards: int = Field(default=DEFAULT_SHARDS, ge=1)
    index_replicas: int = Field(default=DEFAULT_REPLICAS, ge=0)
    list_size: int = Field(default=10000, ge=1, description="Max models returned by list")

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    log_format: Literal["json", "console"] | None = None
