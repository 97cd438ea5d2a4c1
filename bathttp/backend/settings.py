"""Backend configuration loaded from BATHTTP_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "BATHTTP"
"""Per-application subdirectory appended to the OS data root."""


class BathttpSettings(BaseSettings):
    """BATHTTP backend settings.

    All fields are read from environment variables with the ``BATHTTP_``
    prefix.  For example, ``BATHTTP_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="BATHTTP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Data storage ----------------------------------------------------------
    app_dir_name: str = APP_DIR_NAME

    data_dir: str | None = None
    """Explicit data directory injected at startup.

    When unset, the OS-conventional application directory is resolved (and
    created) from ``app_dir_name``.
    """

    # -- HTTP client -----------------------------------------------------------
    max_redirects: int = 10
    """Redirect hops followed by the shared client before giving up."""

    # -- Server ----------------------------------------------------------------
    host: str = "127.0.0.1"
    port: int = 8765


@lru_cache(maxsize=1)
def get_settings() -> BathttpSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests to force a re-read after
    overriding env vars.
    """
    return BathttpSettings()
