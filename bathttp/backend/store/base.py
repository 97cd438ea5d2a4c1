"""Persistence store interface for the app's private JSON documents.

Two documents live in the app data directory:

    {data_dir}/requests.json     -- RequestsData
    {data_dir}/workspaces.json   -- WorkspaceData

Every save overwrites the whole document; there is no merge with what was on
disk before.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from bathttp.backend.models.requests import RequestsData
from bathttp.backend.models.workspace import WorkspaceData


@runtime_checkable
class PersistenceStore(Protocol):
    async def load_requests(self) -> RequestsData:
        """Load saved requests.  Empty data (and no file created) if absent."""
        ...

    async def save_requests(self, data: RequestsData) -> None:
        """Overwrite the saved requests document."""
        ...

    async def load_workspaces(self) -> WorkspaceData:
        """Load the workspace registry.

        If absent, a registry holding only the default workspace is created,
        persisted immediately and returned.
        """
        ...

    async def save_workspaces(self, data: WorkspaceData) -> None:
        """Overwrite the workspace registry document."""
        ...

    async def update_workspaces(self, mutate: Callable[[WorkspaceData], bool]) -> WorkspaceData:
        """Load, edit in place and save the registry as one step.

        No other registry write can land in between.  ``mutate`` returns
        ``False`` to skip the save.
        """
        ...
