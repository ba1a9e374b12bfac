"""FastAPI dependencies."""

from fastapi import Depends

from src.config.settings import Settings, get_settings
from src.infrastructure.storage.blob_client import BlobStorageClient, get_shared_storage
from src.services.verification.verifier import CaptchaVerifier, get_shared_verifier


def get_captcha_verifier(
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> CaptchaVerifier:
    """Get the shared Turnstile verifier as a FastAPI dependency."""
    return get_shared_verifier(settings)


def get_blob_storage(
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> BlobStorageClient:
    """Get the shared blob storage client as a FastAPI dependency."""
    return get_shared_storage(settings)
