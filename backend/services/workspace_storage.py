"""Per-workspace folders emulated inside a single blob container.

Blob storage has a flat namespace, so a workspace "folder" is just a key
prefix made observable by a placeholder blob:

  <container>/workspace/.placeholder
  <container>/workspace/<sanitized-name>-<id[:7]>/.placeholder
  <container>/workspace/<sanitized-name>-<id[:7]>/<file>

Every remote operation is best-effort: failures are logged and reported
through a sentinel (False / None / []), never raised to the caller.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

from backend.core.settings import settings
from backend.services.azure import create_blob_service_client

logger = logging.getLogger("backend")

WORKSPACE_PARENT_FOLDER = "workspace/"
PLACEHOLDER_NAME = ".placeholder"
PLACEHOLDER_CONTENT_TYPE = "text/plain"
SHORT_ID_LENGTH = 7

_DISALLOWED_CHARS = re.compile(r"[^a-zA-Z0-9-]")


# ---------- Folder naming ---------- #

def sanitize_workspace_name(name: str) -> str:
    return _DISALLOWED_CHARS.sub("-", name).lower()


def workspace_folder_name(workspace_id: str, workspace_name: str) -> str:
    """`<sanitized-name>-<first 7 chars of id>`; also used as the search index name."""
    return f"{sanitize_workspace_name(workspace_name)}-{workspace_id[:SHORT_ID_LENGTH]}"


def workspace_folder_path(workspace_id: str, workspace_name: str) -> str:
    return f"{WORKSPACE_PARENT_FOLDER}{workspace_folder_name(workspace_id, workspace_name)}/"


# ---------- Service ---------- #

class WorkspaceStorageService:
    _instance: Optional["WorkspaceStorageService"] = None

    def __init__(
        self,
        client: Optional[BlobServiceClient] = None,
        container_name: Optional[str] = None,
    ) -> None:
        self.client = client
        self.container_name = container_name or settings.azure_storage_container_name

    @classmethod
    def get_instance(cls) -> "WorkspaceStorageService":
        if cls._instance is None:
            client = create_blob_service_client(settings.azure_storage_connection_string)
            cls._instance = cls(client=client)
        return cls._instance

    @property
    def configured(self) -> bool:
        return self.client is not None

    def _container(self) -> ContainerClient:
        return self.client.get_container_client(self.container_name)

    async def _upload_placeholder(self, container: ContainerClient, blob_name: str, content: str) -> None:
        await container.get_blob_client(blob_name).upload_blob(
            content.encode("utf-8"),
            overwrite=True,
            content_settings=ContentSettings(content_type=PLACEHOLDER_CONTENT_TYPE),
        )

    # ---------- Container lifecycle ---------- #

    async def ensure_container(self) -> bool:
        if not self.configured:
            logger.warning("Blob service client not initialized")
            return False
        try:
            await self._container().create_container()
            logger.info("Created container: %s", self.container_name)
        except ResourceExistsError:
            pass
        except Exception:
            logger.exception("Failed to create container %s", self.container_name)
            return False
        return True

    async def ensure_parent_placeholder(self) -> bool:
        if not self.configured:
            logger.warning("Blob service client not initialized")
            return False
        try:
            await self._upload_placeholder(
                self._container(),
                f"{WORKSPACE_PARENT_FOLDER}{PLACEHOLDER_NAME}",
                "Workspace parent folder placeholder",
            )
            return True
        except Exception:
            logger.exception("Failed to create workspace parent folder placeholder")
            return False

    async def initialize_main_container(self) -> bool:
        """Ensure the main container and the workspace parent folder exist."""
        if not self.configured:
            logger.warning("Blob service client not initialized")
            return False
        if not await self.ensure_container():
            return False
        if not await self.ensure_parent_placeholder():
            return False
        try:
            exists = await self._container().exists()
        except Exception:
            logger.exception("Failed to initialize main workspace container")
            return False
        if exists:
            logger.info("Main workspace container verified: %s", self.container_name)
            return True
        logger.warning("Failed to verify main workspace container: %s", self.container_name)
        return False

    # ---------- Folder CRUD ---------- #

    async def create_workspace_folder(self, workspace_id: str, workspace_name: str) -> Optional[str]:
        """Create the placeholder blob for a workspace.

        Returns the folder path (`workspace/<name>-<id7>/`) or None on failure.
        """
        if not self.configured:
            logger.warning("Blob service client not initialized, skipping folder creation")
            return None
        folder_path = workspace_folder_path(workspace_id, workspace_name)
        logger.info("Creating workspace folder: %s for workspace: %s", folder_path, workspace_name)
        try:
            await self._upload_placeholder(
                self._container(),
                f"{folder_path}{PLACEHOLDER_NAME}",
                "Workspace folder placeholder",
            )
        except Exception:
            logger.exception(
                "Failed to create workspace folder for workspace %s (%s)", workspace_name, workspace_id
            )
            return None
        logger.info("Successfully created workspace folder: %s", folder_path)
        return folder_path

    async def delete_workspace_folder(self, workspace_id: str, workspace_name: str) -> bool:
        """Delete every blob under the workspace folder, placeholder included.

        Deletes run one at a time; the first failure stops the loop and
        earlier deletions are not rolled back.
        """
        if not self.configured:
            logger.warning("Blob service client not initialized, skipping folder deletion")
            return False
        folder_path = workspace_folder_path(workspace_id, workspace_name)
        logger.info("Deleting workspace folder: %s", folder_path)
        try:
            container = self._container()
            blobs_to_delete: List[str] = []
            async for blob in container.list_blobs():
                if blob.name.startswith(folder_path):
                    blobs_to_delete.append(blob.name)

            for blob_name in blobs_to_delete:
                try:
                    await container.get_blob_client(blob_name).delete_blob()
                except ResourceNotFoundError:
                    continue
        except Exception:
            logger.exception(
                "Failed to delete workspace folder for workspace %s (%s)", workspace_name, workspace_id
            )
            return False
        logger.info("Successfully deleted workspace folder and contents: %s", folder_path)
        return True

    async def folder_exists(self, workspace_id: str, workspace_name: str) -> bool:
        if not self.configured:
            logger.warning("Blob service client not initialized")
            return False
        folder_path = workspace_folder_path(workspace_id, workspace_name)
        try:
            async for blob in self._container().list_blobs():
                if blob.name.startswith(folder_path):
                    return True
        except Exception:
            logger.exception(
                "Failed to check if folder exists for workspace %s (%s)", workspace_name, workspace_id
            )
            return False
        return False

    async def list_workspace_blobs(self, workspace_id: str, workspace_name: str) -> List[str]:
        """Names of the files in a workspace folder, relative to the folder, placeholders excluded."""
        if not self.configured:
            logger.warning("Blob service client not initialized")
            return []
        folder_path = workspace_folder_path(workspace_id, workspace_name)
        blob_names: List[str] = []
        try:
            async for blob in self._container().list_blobs():
                if blob.name.startswith(folder_path) and not blob.name.endswith(PLACEHOLDER_NAME):
                    blob_names.append(blob.name[len(folder_path):])
        except Exception:
            logger.exception("Failed to list blobs for workspace %s (%s)", workspace_name, workspace_id)
            return []
        return blob_names

    # ---------- Naming helpers ---------- #

    def get_blob_url(self, workspace_id: str, workspace_name: str, file_name: str) -> str:
        account_name = self.client.account_name if self.client is not None else ""
        folder_path = workspace_folder_path(workspace_id, workspace_name)
        return f"{account_name}/{self.container_name}/{folder_path}{file_name}"

    def get_workspace_folder_name(self, workspace_id: str, workspace_name: str) -> str:
        return workspace_folder_name(workspace_id, workspace_name)

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
