"""Unit tests for WorkspaceSyncManager.

Sync directories are subdirectories of ``tmp_path``.
"""

from __future__ import annotations

import json
from pathlib import Path

import anyio
import pytest

from bathttp.backend.errors import CannotDeleteDefaultError, DeserializationError, WorkspaceNotFoundError, WriteError
from bathttp.backend.managers.workspaces import WorkspaceSyncManager, create_workspace
from bathttp.backend.models.requests import SavedRequest
from bathttp.backend.models.workspace import Workspace, WorkspaceData
from bathttp.backend.store.local import LocalPersistenceStore


def _write_snapshot(directory: Path, **overrides: object) -> Path:
    payload = {
        "name": "Team API",
        "requests": [{"id": 1, "name": "List users", "method": "GET", "url": "https://api.test/users"}],
        "selected_request_id": 1,
        "created_at": "2023-11-05T08:30:00.000Z",
        "version": "1.0.0",
    }
    payload.update(overrides)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "workspace.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _read_snapshot(directory: Path) -> dict:
    return json.loads((directory / "workspace.json").read_text(encoding="utf-8"))


# -- Create ----------------------------------------------------------------------


def test_create_workspace_is_pure(manager: WorkspaceSyncManager, data_dir: Path) -> None:
    first = manager.create_workspace("Alpha")
    second = create_workspace("Alpha")

    assert first.name == "Alpha"
    assert first.sync_path is None
    assert first.created_at
    assert first.id != second.id
    assert not data_dir.exists()


async def test_create_with_path_none(manager: WorkspaceSyncManager) -> None:
    workspace = await manager.create_workspace_with_path("Local only")

    assert workspace.name == "Local only"
    assert workspace.sync_path is None


async def test_create_with_new_path_syncs_empty_snapshot(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    sync_dir = tmp_path / "shared" / "project"
    workspace = await manager.create_workspace_with_path("Project", str(sync_dir))

    assert workspace.sync_path == str(sync_dir)
    snapshot = _read_snapshot(sync_dir)
    assert snapshot == {
        "name": "Project",
        "requests": [],
        "selected_request_id": None,
        "created_at": workspace.created_at,
        "version": "1.0.0",
    }


async def test_create_with_existing_path_imports(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    sync_dir = tmp_path / "team"
    _write_snapshot(sync_dir)

    created = await manager.create_workspace_with_path("Ignored name", str(sync_dir))
    imported = await manager.import_workspace_from_path(str(sync_dir))

    assert created.name == "Team API"
    assert created.created_at == "2023-11-05T08:30:00.000Z"
    assert created.sync_path == str(sync_dir)
    assert created.model_dump(exclude={"id"}) == imported.model_dump(exclude={"id"})
    assert created.id != imported.id


async def test_create_with_existing_path_leaves_snapshot_untouched(
    manager: WorkspaceSyncManager, tmp_path: Path
) -> None:
    sync_dir = tmp_path / "team"
    before = _write_snapshot(sync_dir).read_text(encoding="utf-8")

    await manager.create_workspace_with_path("Other", str(sync_dir))

    assert (sync_dir / "workspace.json").read_text(encoding="utf-8") == before


# -- Import ----------------------------------------------------------------------


async def test_import_missing(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    with pytest.raises(WorkspaceNotFoundError):
        await manager.import_workspace_from_path(str(tmp_path / "empty"))


async def test_import_from_regular_file_is_not_found(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("not a directory", encoding="utf-8")

    assert await manager.check_workspace_exists_at_path(str(notes)) is False
    with pytest.raises(WorkspaceNotFoundError):
        await manager.import_workspace_from_path(str(notes))
    with pytest.raises(WorkspaceNotFoundError):
        await manager.read_workspace_file(str(notes))


async def test_import_null_byte_path_is_not_found(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    path = f"{tmp_path}/a\x00b"

    assert await manager.check_workspace_exists_at_path(path) is False
    with pytest.raises(WorkspaceNotFoundError):
        await manager.import_workspace_from_path(path)


async def test_import_malformed(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    sync_dir = tmp_path / "broken"
    sync_dir.mkdir()
    (sync_dir / "workspace.json").write_text('{"name": ', encoding="utf-8")

    with pytest.raises(DeserializationError):
        await manager.import_workspace_from_path(str(sync_dir))


async def test_import_newer_major_version_rejected(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    sync_dir = tmp_path / "future"
    _write_snapshot(sync_dir, version="2.0.0")

    with pytest.raises(DeserializationError):
        await manager.import_workspace_from_path(str(sync_dir))


async def test_import_minor_version_accepted(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    sync_dir = tmp_path / "minor"
    _write_snapshot(sync_dir, version="1.3.0")

    workspace = await manager.import_workspace_from_path(str(sync_dir))
    assert workspace.name == "Team API"


async def test_import_assigns_new_id_each_time(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    sync_dir = tmp_path / "team"
    _write_snapshot(sync_dir)

    a = await manager.import_workspace_from_path(str(sync_dir))
    b = await manager.import_workspace_from_path(str(sync_dir))
    assert a.id != b.id


async def test_read_workspace_file_returns_payload(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    sync_dir = tmp_path / "team"
    _write_snapshot(sync_dir)

    snapshot = await manager.read_workspace_file(str(sync_dir))
    assert snapshot.selected_request_id == 1
    assert [r.name for r in snapshot.requests] == ["List users"]


# -- Sync ------------------------------------------------------------------------


async def test_sync_writes_snapshot(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    workspace = Workspace(id="ws-1", name="Payments", created_at="2024-03-03T03:03:03Z")
    requests = [SavedRequest(id=10, name="Charge", method="POST"), SavedRequest(id=11, name="Refund")]
    sync_dir = tmp_path / "nested" / "dir"

    await manager.sync_workspace_to_path(workspace, requests, 11, str(sync_dir))

    snapshot = _read_snapshot(sync_dir)
    assert snapshot["version"] == "1.0.0"
    assert snapshot["name"] == "Payments"
    assert snapshot["created_at"] == "2024-03-03T03:03:03Z"
    assert snapshot["selected_request_id"] == 11
    assert [SavedRequest.model_validate(r) for r in snapshot["requests"]] == requests
    assert "id" not in snapshot


async def test_sync_overwrites_previous_snapshot(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    workspace = Workspace(id="ws-1", name="Payments")
    sync_dir = tmp_path / "sync"

    await manager.sync_workspace_to_path(workspace, [SavedRequest(id=1), SavedRequest(id=2)], 2, sync_dir)
    await manager.sync_workspace_to_path(workspace, [], None, sync_dir)

    snapshot = _read_snapshot(sync_dir)
    assert snapshot["requests"] == []
    assert snapshot["selected_request_id"] is None


async def test_sync_null_byte_path_is_write_error(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    with pytest.raises(WriteError):
        await manager.sync_workspace_to_path(Workspace(id="x", name="X"), [], None, f"{tmp_path}/a\x00b")

    with pytest.raises(WriteError):
        await manager.create_workspace_with_path("X", f"{tmp_path}/a\x00b")


async def test_check_exists(manager: WorkspaceSyncManager, tmp_path: Path) -> None:
    sync_dir = tmp_path / "check"

    assert await manager.check_workspace_exists_at_path(str(sync_dir)) is False
    assert await manager.check_workspace_exists_at_path(str(tmp_path / "a" / "b" / "c")) is False

    await manager.sync_workspace_to_path(Workspace(id="x", name="X"), [], None, str(sync_dir))
    assert await manager.check_workspace_exists_at_path(str(sync_dir)) is True


# -- Delete ----------------------------------------------------------------------


async def test_delete_default_refused(manager: WorkspaceSyncManager) -> None:
    with pytest.raises(CannotDeleteDefaultError) as exc_info:
        await manager.delete_workspace("default")
    assert exc_info.value.to_payload()["error"] == "CannotDeleteDefault"


async def test_delete_purges_registry(
    manager: WorkspaceSyncManager, store: LocalPersistenceStore, tmp_path: Path
) -> None:
    sync_dir = tmp_path / "shared"
    doomed = await manager.create_workspace_with_path("Doomed", str(sync_dir))
    kept = manager.create_workspace("Kept")

    await store.save_workspaces(
        WorkspaceData(
            workspaces=[Workspace.default(), doomed, kept],
            current_workspace_id=doomed.id,
            requests_by_workspace={doomed.id: [SavedRequest(id=1)], kept.id: [SavedRequest(id=2)]},
            selected_request_id_by_workspace={doomed.id: 1, kept.id: 2},
        )
    )

    await manager.delete_workspace(doomed.id)

    data = await store.load_workspaces()
    assert [ws.id for ws in data.workspaces] == ["default", kept.id]
    assert data.current_workspace_id == "default"
    assert doomed.id not in data.requests_by_workspace
    assert doomed.id not in data.selected_request_id_by_workspace
    assert [r.id for r in data.requests_by_workspace[kept.id]] == [2]
    # The external snapshot belongs to the user and survives.
    assert (sync_dir / "workspace.json").exists()


async def test_delete_keeps_current_when_other(manager: WorkspaceSyncManager, store: LocalPersistenceStore) -> None:
    a = manager.create_workspace("A")
    b = manager.create_workspace("B")
    await store.save_workspaces(WorkspaceData(workspaces=[Workspace.default(), a, b], current_workspace_id=a.id))

    await manager.delete_workspace(b.id)

    data = await store.load_workspaces()
    assert data.current_workspace_id == a.id
    assert [ws.id for ws in data.workspaces] == ["default", a.id]


async def test_delete_unknown_is_noop(manager: WorkspaceSyncManager, store: LocalPersistenceStore) -> None:
    before = await store.load_workspaces()

    await manager.delete_workspace("does-not-exist")

    assert await store.load_workspaces() == before


async def test_delete_does_not_drop_concurrent_registry_update(
    manager: WorkspaceSyncManager, store: LocalPersistenceStore
) -> None:
    doomed = manager.create_workspace("Doomed")
    await store.save_workspaces(WorkspaceData(workspaces=[Workspace.default(), doomed]))
    added = manager.create_workspace("Added")

    def add(data: WorkspaceData) -> bool:
        data.workspaces.append(added)
        return True

    async with anyio.create_task_group() as tg:
        tg.start_soon(manager.delete_workspace, doomed.id)
        tg.start_soon(store.update_workspaces, add)

    data = await store.load_workspaces()
    assert [ws.id for ws in data.workspaces] == ["default", added.id]
