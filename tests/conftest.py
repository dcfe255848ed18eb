"""
Pytest fixtures: in-memory stand-ins for the async Azure blob clients.

Only the SDK surface the storage service touches is modelled:
get_container_client / create_container / exists / list_blobs /
get_blob_client / upload_blob / delete_blob.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Set

import pytest
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError, ServiceRequestError

from backend.services.workspace_storage import WorkspaceStorageService

# =============================================================================
# Fake blob SDK
# =============================================================================


@dataclass
class StoredBlob:
    data: bytes
    content_type: Optional[str]


@dataclass
class BlobItem:
    name: str


class FakeBlobClient:
    def __init__(self, container: "FakeContainerClient", name: str):
        self._container = container
        self.blob_name = name

    async def upload_blob(self, data, overwrite=False, content_settings=None):
        self._container.check("upload", self.blob_name)
        if not overwrite and self.blob_name in self._container.blobs:
            raise ResourceExistsError("The specified blob already exists.")
        content_type = content_settings.content_type if content_settings else None
        self._container.blobs[self.blob_name] = StoredBlob(bytes(data), content_type)

    async def delete_blob(self):
        self._container.check("delete", self.blob_name)
        self._container.delete_calls.append(self.blob_name)
        if self.blob_name not in self._container.blobs:
            raise ResourceNotFoundError("The specified blob does not exist.")
        del self._container.blobs[self.blob_name]


class FakeContainerClient:
    def __init__(self, name: str):
        self.container_name = name
        self.created = False
        self.blobs: Dict[str, StoredBlob] = {}
        self.failures: Set[str] = set()
        self.delete_calls = []
        self.list_calls = 0

    def check(self, op: str, blob_name: Optional[str] = None) -> None:
        if op in self.failures or (blob_name and f"{op}:{blob_name}" in self.failures):
            raise ServiceRequestError(f"simulated {op} failure")

    def add(self, name: str, data: bytes = b"data", content_type: str = "application/octet-stream"):
        self.blobs[name] = StoredBlob(data, content_type)

    async def create_container(self):
        self.check("create")
        if self.created:
            raise ResourceExistsError("The specified container already exists.")
        self.created = True

    async def exists(self):
        self.check("exists")
        return self.created

    def get_blob_client(self, blob):
        return FakeBlobClient(self, blob)

    def list_blobs(self):
        self.list_calls += 1
        return self._iter_blobs()

    async def _iter_blobs(self):
        self.check("list")
        for name in sorted(self.blobs):
            yield BlobItem(name)


class FakeBlobServiceClient:
    account_name = "teststorage"

    def __init__(self):
        self.containers: Dict[str, FakeContainerClient] = {}
        self.closed = False

    def get_container_client(self, container):
        return self.containers.setdefault(container, FakeContainerClient(container))

    async def close(self):
        self.closed = True


# =============================================================================
# Fixtures
# =============================================================================

CONTAINER = "test-files"


@pytest.fixture
def blob_service() -> FakeBlobServiceClient:
    return FakeBlobServiceClient()


@pytest.fixture
def container(blob_service: FakeBlobServiceClient) -> FakeContainerClient:
    return blob_service.get_container_client(CONTAINER)


@pytest.fixture
def storage(blob_service: FakeBlobServiceClient) -> WorkspaceStorageService:
    return WorkspaceStorageService(client=blob_service, container_name=CONTAINER)


@pytest.fixture
def unconfigured_storage() -> WorkspaceStorageService:
    return WorkspaceStorageService(client=None, container_name=CONTAINER)


@pytest.fixture(autouse=True)
def reset_singleton():
    """Each test starts without a cached service instance."""
    WorkspaceStorageService._instance = None
    yield
    WorkspaceStorageService._instance = None
