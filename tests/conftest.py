"""Shared test fixtures: isolated settings and data directory.

Every test starts from a fresh settings cache with ``BATHTTP_DATA_DIR``
pointing at a per-test temporary directory, so nothing ever touches the real
OS application directory.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from bathttp.backend.settings import get_settings


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Per-test application data directory (not created up front)."""
    return tmp_path / "appdata"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, data_dir: Path) -> Iterator[None]:
    """Point settings at the test data dir and invalidate the settings cache."""
    for key in ("BATHTTP_LOG_LEVEL", "BATHTTP_APP_DIR_NAME", "BATHTTP_MAX_REDIRECTS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("BATHTTP_DATA_DIR", str(data_dir))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
