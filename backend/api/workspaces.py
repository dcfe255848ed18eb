import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.api.deps import get_workspace_storage
from backend.models.workspace import (
    WorkspaceFilesResponse,
    WorkspaceFolderRequest,
    WorkspaceFolderResponse,
)
from backend.services.workspace_storage import WorkspaceStorageService, workspace_folder_path

logger = logging.getLogger("backend")

router = APIRouter(prefix="/workspaces", tags=["workspaces"])

# The storage service cannot tell "missing" from "unreachable", so every
# failure sentinel is reported as a gateway error rather than a 404.


@router.post("/storage/initialize")
async def initialize_storage(svc: WorkspaceStorageService = Depends(get_workspace_storage)):
    return {"success": await svc.initialize_main_container()}


@router.post("/folders", response_model=WorkspaceFolderResponse, status_code=201)
async def create_folder(
    req: WorkspaceFolderRequest,
    svc: WorkspaceStorageService = Depends(get_workspace_storage),
):
    path = await svc.create_workspace_folder(req.id, req.name)
    if path is None:
        logger.warning("Folder creation failed for workspace %s", req.id)
        raise HTTPException(status_code=502, detail="Failed to create workspace folder")
    return WorkspaceFolderResponse(path=path, folder=svc.get_workspace_folder_name(req.id, req.name))


@router.get("/{workspace_id}/folder")
async def folder_status(
    workspace_id: str,
    name: str = Query(..., min_length=1),
    svc: WorkspaceStorageService = Depends(get_workspace_storage),
):
    folder = svc.get_workspace_folder_name(workspace_id, name)
    return {
        "folder": folder,
        "path": workspace_folder_path(workspace_id, name),
        "exists": await svc.folder_exists(workspace_id, name),
    }


@router.delete("/{workspace_id}/folder")
async def delete_folder(
    workspace_id: str,
    name: str = Query(..., min_length=1),
    svc: WorkspaceStorageService = Depends(get_workspace_storage),
):
    if not await svc.delete_workspace_folder(workspace_id, name):
        logger.warning("Folder deletion failed for workspace %s", workspace_id)
        raise HTTPException(status_code=502, detail="Failed to delete workspace folder")
    return {"success": True}


@router.get("/{workspace_id}/files", response_model=WorkspaceFilesResponse)
async def list_files(
    workspace_id: str,
    name: str = Query(..., min_length=1),
    svc: WorkspaceStorageService = Depends(get_workspace_storage),
):
    files = await svc.list_workspace_blobs(workspace_id, name)
    return WorkspaceFilesResponse(folder=svc.get_workspace_folder_name(workspace_id, name), files=files)


@router.get("/{workspace_id}/files/url")
async def file_url(
    workspace_id: str,
    name: str = Query(..., min_length=1),
    file: str = Query(..., min_length=1),
    svc: WorkspaceStorageService = Depends(get_workspace_storage),
):
    return {"url": svc.get_blob_url(workspace_id, name, file)}
