"""FastAPI dependency injection for the store, the workspace manager and the executor.

Usage in route handlers::

    @router.get("/load")
    async def load(store: Store) -> RequestsData:
        ...

All three objects are built once in the app lifespan and kept on
``app.state``.  Dependencies raise HTTP 503 if startup did not provide them.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status

from bathttp.backend.executor import RequestExecutor
from bathttp.backend.managers.workspaces import WorkspaceSyncManager
from bathttp.backend.store.base import PersistenceStore


def _from_state(request: Request, name: str) -> Any:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Backend not initialised ({name} missing).",
        )
    return value


def get_store(request: Request) -> PersistenceStore:
    return _from_state(request, "store")


def get_workspace_manager(request: Request) -> WorkspaceSyncManager:
    return _from_state(request, "workspace_manager")


def get_executor(request: Request) -> RequestExecutor:
    return _from_state(request, "executor")


# -- Annotated type aliases for concise route signatures ---------------------

Store = Annotated[PersistenceStore, Depends(get_store)]
"""Annotated dependency: the app's persistence store."""

Workspaces = Annotated[WorkspaceSyncManager, Depends(get_workspace_manager)]
"""Annotated dependency: the workspace sync manager."""

Executor = Annotated[RequestExecutor, Depends(get_executor)]
"""Annotated dependency: executor bound to the shared HTTP client."""
