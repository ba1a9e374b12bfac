"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.config.settings import Settings
from src.infrastructure.storage.blob_client import BlobDownload, BlobStorageClient


@pytest.fixture
def settings():
    """Provide settings fixture isolated from any local .env file."""
    return Settings(
        _env_file=None,
        turnstile_secret="test-secret",
        blob_connection_string="UseDevelopmentStorage=true",
    )


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


def _make_download(*parts: bytes, blob_name: str = "[CV]Mariano-Rodriguez.pdf") -> BlobDownload:
    return BlobDownload(
        container_name="resume",
        blob_name=blob_name,
        size=sum(len(p) for p in parts),
        chunks=_chunks(*parts),
    )


@pytest.fixture
def make_download():
    """Factory for BlobDownload objects that yield the given chunks."""
    return _make_download


@pytest.fixture
def storage():
    """Blob storage double holding a two-chunk PDF."""
    mock = MagicMock(spec=BlobStorageClient)
    mock.blob_exists = AsyncMock(return_value=True)
    mock.open_blob_stream = AsyncMock(return_value=_make_download(b"%PDF-1.7\n", b"%%EOF"))
    return mock
