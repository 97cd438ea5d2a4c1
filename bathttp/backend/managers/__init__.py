"""Workspace management for the BATHTTP backend.

Managers raise domain exceptions from ``bathttp.backend.errors``, never HTTP
exceptions -- that translation is the app's responsibility.
"""

from bathttp.backend.managers.workspaces import WorkspaceSyncManager, create_workspace

__all__ = ["WorkspaceSyncManager", "create_workspace"]
