"""Workspace data models.

A workspace is a named collection scope for saved requests.  The registry of
all workspaces (``workspaces.json``) lives in the app data directory; a
workspace with a ``sync_path`` additionally has a portable ``workspace.json``
snapshot at that path, refreshed only by explicit syncs.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from bathttp.backend.models.requests import SavedRequest, utc_timestamp

DEFAULT_WORKSPACE_ID = "default"
DEFAULT_WORKSPACE_NAME = "Default Workspace"

WORKSPACE_FILE_NAME = "workspace.json"
WORKSPACE_FILE_VERSION = "1.0.0"


class Workspace(BaseModel):
    """Registry entry (header only, no requests)."""

    id: str
    name: str
    created_at: str = Field(default_factory=utc_timestamp)
    sync_path: str | None = None

    @classmethod
    def default(cls) -> Workspace:
        return cls(id=DEFAULT_WORKSPACE_ID, name=DEFAULT_WORKSPACE_NAME)


class WorkspaceData(BaseModel):
    """Contents of ``workspaces.json``.

    ``current_workspace_id`` and every key of the per-workspace maps must name
    an entry of ``workspaces``.
    """

    workspaces: list[Workspace]
    current_workspace_id: str = DEFAULT_WORKSPACE_ID
    requests_by_workspace: dict[str, list[SavedRequest]] = Field(default_factory=dict)
    selected_request_id_by_workspace: dict[str, int | None] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_workspace_refs(self) -> WorkspaceData:
        known = {ws.id for ws in self.workspaces}
        if self.current_workspace_id not in known:
            msg = f"current_workspace_id '{self.current_workspace_id}' is not a known workspace"
            raise ValueError(msg)
        unknown = (set(self.requests_by_workspace) | set(self.selected_request_id_by_workspace)) - known
        if unknown:
            msg = f"Per-workspace entries reference unknown workspaces: {sorted(unknown)}"
            raise ValueError(msg)
        return self

    @classmethod
    def fresh(cls) -> WorkspaceData:
        """Registry holding only the default workspace."""
        return cls(workspaces=[Workspace.default()])

    def get_workspace(self, workspace_id: str) -> Workspace | None:
        return next((ws for ws in self.workspaces if ws.id == workspace_id), None)


class WorkspaceFile(BaseModel):
    """Portable ``workspace.json`` snapshot written at a sync path.

    Carries no workspace id: every importer assigns its own.
    """

    name: str
    requests: list[SavedRequest] = Field(default_factory=list)
    selected_request_id: int | None = None
    created_at: str
    version: str = WORKSPACE_FILE_VERSION
