"""Data models for the BATHTTP backend."""

from bathttp.backend.models.api import (
    WorkspaceCreate,
    WorkspaceCreateWithPath,
    WorkspaceExists,
    WorkspacePath,
    WorkspaceSync,
)
from bathttp.backend.models.enums import HttpMethod
from bathttp.backend.models.http import HttpRequest, HttpResponse
from bathttp.backend.models.requests import RequestsData, SavedRequest
from bathttp.backend.models.workspace import (
    DEFAULT_WORKSPACE_ID,
    WORKSPACE_FILE_NAME,
    WORKSPACE_FILE_VERSION,
    Workspace,
    WorkspaceData,
    WorkspaceFile,
)

__all__ = [
    "DEFAULT_WORKSPACE_ID",
    "WORKSPACE_FILE_NAME",
    "WORKSPACE_FILE_VERSION",
    # Enums
    "HttpMethod",
    # HTTP
    "HttpRequest",
    "HttpResponse",
    # Requests
    "RequestsData",
    "SavedRequest",
    # Workspaces
    "Workspace",
    # API schemas
    "WorkspaceCreate",
    "WorkspaceCreateWithPath",
    "WorkspaceData",
    "WorkspaceExists",
    "WorkspaceFile",
    "WorkspacePath",
    "WorkspaceSync",
]
