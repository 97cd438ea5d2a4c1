"""Local filesystem persistence store.

Stores the app's JSON documents directly under the data directory::

    {data_dir}/requests.json
    {data_dir}/workspaces.json

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.  Writes are
atomic (temp file + rename) and writers of the same document are serialized
through a per-document lock, so concurrent saves cannot interleave -- the last
one to acquire the lock wins.  ``update_workspaces`` holds the registry lock
across its read and write.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import TypeVar

import anyio
from anyio import to_thread
from loguru import logger
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from bathttp.backend.errors import DeserializationError, ReadError, SerializationError, WriteError
from bathttp.backend.models.requests import RequestsData
from bathttp.backend.models.workspace import WorkspaceData
from bathttp.backend.store.files import atomic_write, read_file

REQUESTS_FILE = "requests.json"
WORKSPACES_FILE = "workspaces.json"

ModelT = TypeVar("ModelT", bound=BaseModel)


class LocalPersistenceStore:
    """Local filesystem implementation of the PersistenceStore protocol."""

    def __init__(self, data_dir: str | Path) -> None:
        self._base = Path(data_dir)
        self._locks: dict[Path, anyio.Lock] = {}

    @property
    def requests_path(self) -> Path:
        return self._base / REQUESTS_FILE

    @property
    def workspaces_path(self) -> Path:
        return self._base / WORKSPACES_FILE

    def _lock(self, path: Path) -> anyio.Lock:
        lock = self._locks.get(path)
        if lock is None:
            lock = self._locks[path] = anyio.Lock()
        return lock

    # -- Requests --------------------------------------------------------------

    async def load_requests(self) -> RequestsData:
        data = await read_document(self.requests_path, RequestsData)
        return data if data is not None else RequestsData()

    async def save_requests(self, data: RequestsData) -> None:
        async with self._lock(self.requests_path):
            await write_document(self.requests_path, data)

    # -- Workspaces ------------------------------------------------------------

    async def load_workspaces(self) -> WorkspaceData:
        data = await read_document(self.workspaces_path, WorkspaceData)
        if data is not None:
            return data
        async with self._lock(self.workspaces_path):
            return await self._load_or_create_workspaces()

    async def save_workspaces(self, data: WorkspaceData) -> None:
        async with self._lock(self.workspaces_path):
            await write_document(self.workspaces_path, data)

    async def update_workspaces(self, mutate: Callable[[WorkspaceData], bool]) -> WorkspaceData:
        async with self._lock(self.workspaces_path):
            data = await self._load_or_create_workspaces()
            if mutate(data):
                await write_document(self.workspaces_path, data)
        return data

    async def _load_or_create_workspaces(self) -> WorkspaceData:
        # Caller holds the registry lock.
        data = await read_document(self.workspaces_path, WorkspaceData)
        if data is None:
            data = WorkspaceData.fresh()
            await write_document(self.workspaces_path, data)
            logger.info("Created default workspace registry at {}", self.workspaces_path)
        return data


# -- Document helpers ----------------------------------------------------------


async def read_document(path: Path, model: type[ModelT]) -> ModelT | None:
    """Read and validate a JSON document.  ``None`` if the file does not exist.

    Raises ``ReadError`` on I/O failure, ``DeserializationError`` on malformed
    content.
    """
    try:
        raw = await to_thread.run_sync(partial(read_file, path))
    except UnicodeDecodeError as exc:
        msg = f"{path} is not valid UTF-8: {exc}"
        raise DeserializationError(msg) from exc
    except (OSError, ValueError) as exc:
        msg = f"Cannot read {path}: {exc}"
        raise ReadError(msg) from exc

    if raw is None:
        return None

    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        msg = f"Malformed {path.name} at {path}: {exc}"
        raise DeserializationError(msg) from exc


async def write_document(path: Path, document: BaseModel) -> None:
    """Serialize a model as pretty-printed JSON and atomically overwrite ``path``.

    Raises ``SerializationError`` or ``WriteError``; on failure the previous
    file content is left untouched.
    """
    try:
        data = document.model_dump_json(indent=2)
    except PydanticSerializationError as exc:
        msg = f"Cannot serialize {type(document).__name__}: {exc}"
        raise SerializationError(msg) from exc

    try:
        await to_thread.run_sync(partial(atomic_write, path, data))
    except (OSError, ValueError) as exc:
        msg = f"Cannot write {path}: {exc}"
        raise WriteError(msg) from exc
    logger.debug("Wrote {} ({} bytes)", path, len(data))
