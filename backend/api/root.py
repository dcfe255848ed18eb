from fastapi import APIRouter, Depends

from backend.api.deps import get_workspace_storage
from backend.services.workspace_storage import WorkspaceStorageService

router = APIRouter()


@router.get("/")
async def root():
    return {"message": "Workspace storage backend is running"}


@router.get("/health")
async def health(svc: WorkspaceStorageService = Depends(get_workspace_storage)):
    return {"status": "ok", "storage_configured": svc.configured}
