"""Workspace endpoints (RPC-style).

All write operations use POST; reads use GET.  Domain errors raised by the
store and the manager are turned into JSON responses by the app-level handler.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from bathttp.backend.deps import Store, Workspaces
from bathttp.backend.models.api import (
    WorkspaceCreate,
    WorkspaceCreateWithPath,
    WorkspaceExists,
    WorkspacePath,
    WorkspaceSync,
)
from bathttp.backend.models.workspace import Workspace, WorkspaceData, WorkspaceFile

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.get("/load", response_model=WorkspaceData)
async def load_workspaces(store: Store) -> WorkspaceData:
    """Load the registry, creating the default workspace on first use."""
    return await store.load_workspaces()


@router.post("/save", status_code=status.HTTP_204_NO_CONTENT)
async def save_workspaces(body: WorkspaceData, store: Store) -> None:
    await store.save_workspaces(body)


@router.post("/create", response_model=Workspace, status_code=status.HTTP_201_CREATED)
async def create_workspace(body: WorkspaceCreate, workspaces: Workspaces) -> Workspace:
    """Create a workspace header.  Nothing is persisted."""
    return workspaces.create_workspace(body.name)


@router.post("/create-with-path", response_model=Workspace, status_code=status.HTTP_201_CREATED)
async def create_workspace_with_path(body: WorkspaceCreateWithPath, workspaces: Workspaces) -> Workspace:
    """Create a workspace bound to a sync directory, or import the one already there."""
    return await workspaces.create_workspace_with_path(body.name, body.sync_path)


@router.post("/import", response_model=Workspace)
async def import_workspace_from_path(body: WorkspacePath, workspaces: Workspaces) -> Workspace:
    return await workspaces.import_workspace_from_path(body.path)


@router.post("/read-file", response_model=WorkspaceFile)
async def read_workspace_file(body: WorkspacePath, workspaces: Workspaces) -> WorkspaceFile:
    """Return the full snapshot (requests and selection) stored at a sync directory."""
    return await workspaces.read_workspace_file(body.path)


@router.post("/sync", status_code=status.HTTP_204_NO_CONTENT)
async def sync_workspace_to_path(body: WorkspaceSync, workspaces: Workspaces) -> None:
    await workspaces.sync_workspace_to_path(body.workspace, body.requests, body.selected_request_id, body.path)


@router.get("/exists", response_model=WorkspaceExists)
async def check_workspace_exists_at_path(path: str, workspaces: Workspaces) -> WorkspaceExists:
    return WorkspaceExists(exists=await workspaces.check_workspace_exists_at_path(path))


@router.post("/{workspace_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workspace(workspace_id: str, workspaces: Workspaces) -> None:
    """Delete a workspace from the registry.  The default workspace is protected."""
    await workspaces.delete_workspace(workspace_id)
