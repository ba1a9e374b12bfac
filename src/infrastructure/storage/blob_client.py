"""Azure Blob Storage client."""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Optional

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.identity.aio import DefaultAzureCredential
from azure.storage.blob.aio import BlobServiceClient

from src.config.settings import Settings
from src.services.errors import DocumentNotFoundError, StorageConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class BlobDownload:
    """An opened blob download, ready to be streamed."""

    container_name: str
    blob_name: str
    size: int | None
    chunks: AsyncIterator[bytes]


class BlobStorageClient:
    """Azure Blob Storage client for reading stored documents."""

    def __init__(self, settings: Settings):
        """Initialize blob storage client.

        Args:
            settings: Application settings containing Azure Storage configuration
        """
        self.settings = settings
        self.credential: Optional[DefaultAzureCredential] = None
        self._client: Optional[BlobServiceClient] = None

    def _get_client(self) -> BlobServiceClient:
        """
        Get or create BlobServiceClient instance.

        Returns:
            BlobServiceClient instance

        Raises:
            StorageConfigurationError: If neither connection string nor account URL is configured
        """
        if self._client is not None:
            return self._client

        # Prefer connection string if available
        if self.settings.blob_connection_string:
            logger.debug("Using connection string for blob storage")
            self._client = BlobServiceClient.from_connection_string(
                self.settings.blob_connection_string
            )
            return self._client

        # Use account URL with credential
        if self.settings.azure_storage_account_url:
            logger.debug(
                "Using account URL with credential: %s", self.settings.azure_storage_account_url
            )
            self.credential = DefaultAzureCredential()
            self._client = BlobServiceClient(
                account_url=self.settings.azure_storage_account_url,
                credential=self.credential,
            )
            return self._client

        logger.error("BlobConnectionString is not configured.")
        raise StorageConfigurationError(
            "Set either 'blob_connection_string' or 'azure_storage_account_url' in settings."
        )

    async def blob_exists(self, container_name: str, blob_name: str) -> bool:
        """
        Check if a blob exists.

        Args:
            container_name: Container name
            blob_name: Blob name

        Returns:
            True if blob exists, False otherwise

        Raises:
            StorageConfigurationError: If storage configuration is missing
            AzureError: If the storage service fails for any other reason
        """
        blob_client = self._get_client().get_blob_client(container=container_name, blob=blob_name)
        try:
            return await blob_client.exists()
        except AzureError as e:
            logger.error("Error checking blob existence: %s", e, exc_info=True)
            raise

    async def open_blob_stream(self, container_name: str, blob_name: str) -> BlobDownload:
        """
        Start downloading a blob and return its chunk stream.

        The download request is issued here so that a missing blob is
        reported before any response bytes are sent.

        Args:
            container_name: Container name
            blob_name: Blob name

        Returns:
            BlobDownload with the blob size and an async chunk iterator

        Raises:
            DocumentNotFoundError: If the blob does not exist
            StorageConfigurationError: If storage configuration is missing
            AzureError: If the download fails for any other reason
        """
        blob_client = self._get_client().get_blob_client(container=container_name, blob=blob_name)
        try:
            downloader = await blob_client.download_blob()
        except ResourceNotFoundError as e:
            logger.warning("Blob '%s' vanished from container '%s'", blob_name, container_name)
            raise DocumentNotFoundError(f"{container_name}/{blob_name}") from e
        except AzureError as e:
            logger.error("Azure Storage download error: %s", e, exc_info=True)
            raise

        logger.debug(
            "Streaming blob '%s' from container '%s' (%s bytes)",
            blob_name,
            container_name,
            downloader.size,
        )
        return BlobDownload(
            container_name=container_name,
            blob_name=blob_name,
            size=downloader.size,
            chunks=downloader.chunks(),
        )

    async def close(self) -> None:
        """Close the blob storage client."""
        if self._client:
            await self._client.close()
            self._client = None
        if self.credential:
            await self.credential.close()
            self.credential = None


_shared_storage: BlobStorageClient | None = None


def get_shared_storage(settings: Settings) -> BlobStorageClient:
    """Get or create the process-wide BlobStorageClient."""
    global _shared_storage
    if _shared_storage is None:
        _shared_storage = BlobStorageClient(settings)
    return _shared_storage


async def close_shared_storage() -> None:
    """Close the shared storage client, if one was created."""
    global _shared_storage
    if _shared_storage is not None:
        await _shared_storage.close()
        _shared_storage = None
