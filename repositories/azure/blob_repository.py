"""Azure Blob Storage Repository - Containers and blobs for test results and configuration."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional

from azure.storage.blob import BlobServiceClient, ContentSettings
from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError

from core.exceptions import BlobStorageError
from repositories.interfaces.blob_repository import IBlobRepository

logger = logging.getLogger(__name__)


def _content_settings_for(blob_name: str) -> ContentSettings:
    content_type, _ = mimetypes.guess_type(blob_name)
    return ContentSettings(content_type=content_type or "application/octet-stream")


class AzureBlobRepository(IBlobRepository):
    """Repository for Azure Blob Storage operations."""

    def __init__(self, blob_service_client: BlobServiceClient) -> None:
        """Initialize Azure Blob Storage repository.

        Args:
            blob_service_client: Authenticated service client for the storage account
        """
        self.blob_service_client = blob_service_client

    @classmethod
    def from_connection_string(cls, connection_string: str) -> "AzureBlobRepository":
        try:
            return cls(BlobServiceClient.from_connection_string(connection_string))
        except (AzureError, ValueError) as e:
            logger.error(f"Failed to initialize Azure Blob Storage: {e}")
            raise BlobStorageError(f"Blob storage initialization failed: {e}") from e

    @classmethod
    def from_account_key(cls, account_url: str, account_key: str) -> "AzureBlobRepository":
        try:
            return cls(BlobServiceClient(account_url=account_url, credential=account_key))
        except (AzureError, ValueError) as e:
            logger.error(f"Failed to initialize Azure Blob Storage: {e}")
            raise BlobStorageError(f"Blob storage initialization failed: {e}") from e

    def container_exists(self, container: str) -> bool:
        try:
            return self.blob_service_client.get_container_client(container).exists()
        except AzureError as e:
            logger.error(f"Failed to check container existence | container={container} | error={e}")
            raise BlobStorageError(f"Failed to check container '{container}': {e}") from e

    def create_container(self, container: str, public_access: Optional[str] = None) -> None:
        """Create a container, tolerating a concurrent creation."""
        try:
            self.blob_service_client.create_container(container, public_access=public_access)
            logger.info(f"Created container | container={container} | public_access={public_access}")
        except ResourceExistsError:
            logger.info(f"Container already exists: {container}")
        except AzureError as e:
            logger.error(f"Failed to create container | container={container} | error={e}")
            raise BlobStorageError(f"Failed to create container '{container}': {e}") from e

    def blob_exists(self, container: str, blob_name: str) -> bool:
        try:
            blob_client = self.blob_service_client.get_blob_client(container=container, blob=blob_name)
            return blob_client.exists()
        except AzureError as e:
            logger.error(f"Failed to check blob existence | blob={container}/{blob_name} | error={e}")
            raise BlobStorageError(f"Failed to check blob '{container}/{blob_name}': {e}") from e

    def upload_file(self, container: str, blob_name: str, file_path: Path) -> str:
        """Upload a local file to Azure Blob Storage.

        Args:
            container: Target container
            blob_name: Blob name inside the container
            file_path: Local file to upload

        Returns:
            Blob URL

        Raises:
            BlobStorageError: If upload fails
        """
        try:
            blob_client = self.blob_service_client.get_blob_client(container=container, blob=blob_name)
            with open(file_path, "rb") as data:
                blob_client.upload_blob(
                    data,
                    overwrite=True,
                    content_settings=_content_settings_for(blob_name),
                )
            logger.info(f"Uploaded file to Azure Blob | blob={container}/{blob_name} | file={file_path}")
            return blob_client.url
        except AzureError as e:
            logger.error(f"Failed to upload {file_path} to {container}/{blob_name}: {e}")
            raise BlobStorageError(f"Failed to upload '{container}/{blob_name}': {e}") from e

    def upload_text(self, container: str, blob_name: str, text: str) -> str:
        try:
            blob_client = self.blob_service_client.get_blob_client(container=container, blob=blob_name)
            blob_client.upload_blob(
                text.encode("utf-8"),
                overwrite=True,
                content_settings=_content_settings_for(blob_name),
            )
            logger.info(f"Uploaded text to Azure Blob | blob={container}/{blob_name}")
            return blob_client.url
        except AzureError as e:
            logger.error(f"Failed to upload text to {container}/{blob_name}: {e}")
            raise BlobStorageError(f"Failed to upload '{container}/{blob_name}': {e}") from e

    def download_text(self, container: str, blob_name: str) -> Optional[str]:
        """Download a blob as UTF-8 text.

        Returns:
            Blob content or None if not found
        """
        try:
            blob_client = self.blob_service_client.get_blob_client(container=container, blob=blob_name)
            return blob_client.download_blob().readall().decode("utf-8")
        except ResourceNotFoundError:
            return None
        except AzureError as e:
            logger.error(f"Failed to download {container}/{blob_name}: {e}")
            raise BlobStorageError(f"Failed to download '{container}/{blob_name}': {e}") from e
