"""Workspace lifecycle and filesystem sync.

Creates workspaces, mirrors them to a user-chosen sync directory as a
portable ``workspace.json`` snapshot, imports such snapshots, and deletes
workspaces from the registry.

A workspace header and its snapshot are only brought back in step by an
explicit ``sync_workspace_to_path`` call; they may diverge in between.
"""

from __future__ import annotations

import uuid
from functools import partial
from pathlib import Path

import anyio
from anyio import to_thread
from loguru import logger

from bathttp.backend.errors import CannotDeleteDefaultError, DeserializationError, WorkspaceNotFoundError
from bathttp.backend.models.requests import SavedRequest
from bathttp.backend.models.workspace import (
    DEFAULT_WORKSPACE_ID,
    WORKSPACE_FILE_NAME,
    WORKSPACE_FILE_VERSION,
    Workspace,
    WorkspaceData,
    WorkspaceFile,
)
from bathttp.backend.store.base import PersistenceStore
from bathttp.backend.store.files import is_file
from bathttp.backend.store.local import read_document, write_document

_SUPPORTED_MAJOR = int(WORKSPACE_FILE_VERSION.split(".", 1)[0])


def workspace_file_path(path: str | Path) -> Path:
    """Location of the snapshot inside a sync directory."""
    return Path(path) / WORKSPACE_FILE_NAME


def create_workspace(name: str) -> Workspace:
    """New workspace header with a fresh id.  Not persisted."""
    return Workspace(id=str(uuid.uuid4()), name=name)


class WorkspaceSyncManager:
    """Workspace operations that touch sync directories or the registry.

    Snapshot writes to the same path are serialized through a per-path lock.
    """

    def __init__(self, store: PersistenceStore) -> None:
        self._store = store
        self._locks: dict[Path, anyio.Lock] = {}

    def _lock(self, path: Path) -> anyio.Lock:
        try:
            key = path.resolve()
        except (OSError, ValueError):
            key = path.absolute()
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = anyio.Lock()
        return lock

    # -- Create / import -------------------------------------------------------

    def create_workspace(self, name: str) -> Workspace:
        return create_workspace(name)

    async def create_workspace_with_path(self, name: str, path: str | None = None) -> Workspace:
        """Create a workspace, optionally bound to a sync directory.

        If ``path`` already holds a ``workspace.json`` the snapshot is imported
        instead and ``name`` is ignored.  Otherwise the new workspace is synced
        there right away with an empty request list.
        """
        if path and await self.check_workspace_exists_at_path(path):
            logger.info("workspace.json found at {} -- importing instead of creating", path)
            return await self.import_workspace_from_path(path)

        workspace = create_workspace(name)
        if path:
            workspace.sync_path = path
            await self.sync_workspace_to_path(workspace, [], None, path)
        logger.info("Created workspace {} ({})", workspace.name, workspace.id)
        return workspace

    async def read_workspace_file(self, path: str | Path) -> WorkspaceFile:
        """Load the full snapshot at ``path``.

        Raises ``WorkspaceNotFoundError`` if there is none, ``DeserializationError``
        if it is malformed or written by a newer major version.
        """
        file_path = workspace_file_path(path)
        snapshot = None
        if await to_thread.run_sync(partial(is_file, file_path)):
            snapshot = await read_document(file_path, WorkspaceFile)
        if snapshot is None:
            msg = f"No {WORKSPACE_FILE_NAME} in {path}"
            raise WorkspaceNotFoundError(msg)

        major = snapshot.version.split(".", 1)[0]
        if not major.isdigit() or int(major) > _SUPPORTED_MAJOR:
            msg = f"Unsupported workspace file version '{snapshot.version}' at {file_path}"
            raise DeserializationError(msg)
        return snapshot

    async def import_workspace_from_path(self, path: str) -> Workspace:
        """Build a workspace header from the snapshot at ``path``.

        The header gets a new id (snapshots carry none); ``name`` and
        ``created_at`` are kept verbatim.  The snapshot's requests are not
        returned -- use ``read_workspace_file`` for those.
        """
        snapshot = await self.read_workspace_file(path)
        workspace = Workspace(
            id=str(uuid.uuid4()),
            name=snapshot.name,
            created_at=snapshot.created_at,
            sync_path=path,
        )
        logger.info("Imported workspace {} from {} as {}", workspace.name, path, workspace.id)
        return workspace

    # -- Sync ------------------------------------------------------------------

    async def sync_workspace_to_path(
        self,
        workspace: Workspace,
        requests: list[SavedRequest],
        selected_request_id: int | None,
        path: str | Path,
    ) -> None:
        """Overwrite the snapshot at ``path`` with the given collection."""
        snapshot = WorkspaceFile(
            name=workspace.name,
            requests=requests,
            selected_request_id=selected_request_id,
            created_at=workspace.created_at,
            version=WORKSPACE_FILE_VERSION,
        )
        file_path = workspace_file_path(path)
        async with self._lock(file_path):
            await write_document(file_path, snapshot)
        logger.debug("Synced workspace {} to {} ({} requests)", workspace.id, file_path, len(requests))

    async def check_workspace_exists_at_path(self, path: str | Path) -> bool:
        return await to_thread.run_sync(partial(is_file, workspace_file_path(path)))

    # -- Delete ----------------------------------------------------------------

    async def delete_workspace(self, workspace_id: str) -> None:
        """Remove a workspace and its per-workspace entries from the registry.

        If it was the current workspace, the default one becomes current.
        Unknown ids are a no-op.  A snapshot at the workspace's sync path is
        left alone.  Raises ``CannotDeleteDefaultError`` for ``"default"``.
        """
        if workspace_id == DEFAULT_WORKSPACE_ID:
            msg = "The default workspace cannot be deleted"
            raise CannotDeleteDefaultError(msg)

        found = False

        def remove(data: WorkspaceData) -> bool:
            nonlocal found
            found = data.get_workspace(workspace_id) is not None
            if not found:
                return False
            data.workspaces = [ws for ws in data.workspaces if ws.id != workspace_id]
            data.requests_by_workspace.pop(workspace_id, None)
            data.selected_request_id_by_workspace.pop(workspace_id, None)
            if data.current_workspace_id == workspace_id:
                if data.get_workspace(DEFAULT_WORKSPACE_ID) is None:
                    data.workspaces.insert(0, Workspace.default())
                data.current_workspace_id = DEFAULT_WORKSPACE_ID
            return True

        await self._store.update_workspaces(remove)
        if found:
            logger.info("Deleted workspace {}", workspace_id)
        else:
            logger.debug("Delete of unknown workspace {} ignored", workspace_id)
