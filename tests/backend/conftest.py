"""Shared fixtures for backend tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from bathttp.backend.app import app
from bathttp.backend.executor import RequestExecutor
from bathttp.backend.managers.workspaces import WorkspaceSyncManager
from bathttp.backend.store.local import LocalPersistenceStore


def upstream_handler(request: httpx.Request) -> httpx.Response:
    """Fake remote server used behind the executor in API tests."""
    return httpx.Response(201, headers={"X-Test": "1"}, content=b"ok")


@pytest.fixture
def store(data_dir: Path) -> LocalPersistenceStore:
    return LocalPersistenceStore(data_dir)


@pytest.fixture
def manager(store: LocalPersistenceStore) -> WorkspaceSyncManager:
    return WorkspaceSyncManager(store)


@pytest.fixture
async def client(store: LocalPersistenceStore, manager: WorkspaceSyncManager) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with a temp store and a mocked upstream.

    The app lifespan does NOT run under ``ASGITransport``, so state fields are
    pre-set here.
    """
    upstream = httpx.AsyncClient(transport=httpx.MockTransport(upstream_handler), follow_redirects=True)

    app.state.store = store
    app.state.workspace_manager = manager
    app.state.executor = RequestExecutor(upstream)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await upstream.aclose()
    app.state.store = None
    app.state.workspace_manager = None
    app.state.executor = None
