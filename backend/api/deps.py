"""Common dependencies for API routers."""
from __future__ import annotations

from backend.services.workspace_storage import WorkspaceStorageService

# ---- Service providers ----

def get_workspace_storage() -> WorkspaceStorageService:
    return WorkspaceStorageService.get_instance()
