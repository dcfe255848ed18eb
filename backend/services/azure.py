"""Construction of the shared Azure Blob Storage client."""
from __future__ import annotations

import logging
from typing import Optional

from azure.storage.blob.aio import BlobServiceClient

logger = logging.getLogger("backend")


def create_blob_service_client(connection_string: Optional[str]) -> Optional[BlobServiceClient]:
    """Build an async blob service client, or return None when storage is not configured."""
    if not connection_string:
        logger.warning("AZURE_STORAGE_CONNECTION_STRING not set; blob storage disabled")
        return None
    try:
        client = BlobServiceClient.from_connection_string(connection_string)
    except ValueError:
        logger.exception("Invalid Azure storage connection string; blob storage disabled")
        return None
    logger.info("Blob service client created for account %s", client.account_name)
    return client
