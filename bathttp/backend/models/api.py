"""Request / response bodies of the workspace commands.

Domain models (``Workspace``, ``WorkspaceData``, ``RequestsData``, ...) are
used directly where a command takes or returns one; these thin schemas only
wrap the argument lists that have no domain counterpart.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from bathttp.backend.models.requests import SavedRequest
from bathttp.backend.models.workspace import Workspace


class WorkspaceCreate(BaseModel):
    name: str


class WorkspaceCreateWithPath(BaseModel):
    name: str
    sync_path: str | None = Field(default=None, description="Import wins if a workspace.json already exists here.")


class WorkspacePath(BaseModel):
    path: str


class WorkspaceSync(BaseModel):
    workspace: Workspace
    requests: list[SavedRequest] = Field(default_factory=list)
    selected_request_id: int | None = None
    path: str


class WorkspaceExists(BaseModel):
    exists: bool
