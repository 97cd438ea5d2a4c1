"""Resolution of the per-application data directory.

Uses ``click.get_app_dir`` for the OS convention (``%APPDATA%`` on Windows,
``~/Library/Application Support`` on macOS, ``$XDG_CONFIG_HOME`` on other
POSIX systems) and creates the directory if it is missing.
"""

from __future__ import annotations

from pathlib import Path

import click
from loguru import logger

from bathttp.backend.errors import DirectoryCreateError, DirectoryUnavailableError
from bathttp.backend.settings import APP_DIR_NAME, BathttpSettings


def resolve_data_dir(app_name: str = APP_DIR_NAME) -> Path:
    """Return the application data directory, creating it (and parents) if absent.

    Raises ``DirectoryUnavailableError`` if the OS cannot report a data root,
    ``DirectoryCreateError`` if the directory cannot be created.
    """
    root = Path(click.get_app_dir(app_name, roaming=True))
    # Without a home directory click falls back to an unexpanded "~".
    if not root.is_absolute():
        msg = f"No application data root available (resolved '{root}')"
        raise DirectoryUnavailableError(msg)

    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create data directory {root}: {exc}"
        raise DirectoryCreateError(msg) from exc

    logger.debug("Data directory: {}", root)
    return root


def data_dir_from_settings(settings: BathttpSettings) -> Path:
    """Use the injected ``data_dir`` when configured, else resolve the OS default."""
    if not settings.data_dir:
        return resolve_data_dir(settings.app_dir_name)

    path = Path(settings.data_dir).expanduser()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create data directory {path}: {exc}"
        raise DirectoryCreateError(msg) from exc
    return path
