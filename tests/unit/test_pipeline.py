"""Tests for the CV pipeline."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.orchestrator.pipeline import CvPipeline
from src.services.errors import (
    DocumentNotFoundError,
    MissingTokenError,
    VerificationRejectedError,
    VerificationUnavailableError,
)
from src.services.verification.models import VerificationResult


def _verifier(result=None, error=None):
    mock = MagicMock()
    mock.verify = AsyncMock(return_value=result, side_effect=error)
    return mock


@pytest.mark.asyncio
async def test_process_success(settings, storage):
    verifier = _verifier(VerificationResult(success=True))
    download = await CvPipeline(settings, verifier, storage).process(b'{"token":"abc"}', "10.0.0.1")

    verifier.verify.assert_awaited_once_with("abc", "10.0.0.1")
    storage.blob_exists.assert_awaited_once_with("resume", "[CV]Mariano-Rodriguez.pdf")
    storage.open_blob_stream.assert_awaited_once_with("resume", "[CV]Mariano-Rodriguez.pdf")
    assert [chunk async for chunk in download.chunks] == [b"%PDF-1.7\n", b"%%EOF"]


@pytest.mark.asyncio
async def test_process_uses_configured_blob(settings, storage):
    settings.cv_container = "docs"
    settings.cv_blob_name = "cv-2026.pdf"
    verifier = _verifier(VerificationResult(success=True))
    await CvPipeline(settings, verifier, storage).process(b'{"Token":"abc"}')
    storage.blob_exists.assert_awaited_once_with("docs", "cv-2026.pdf")


@pytest.mark.asyncio
async def test_parse_failure_skips_verification(settings, storage):
    verifier = _verifier(VerificationResult(success=True))
    with pytest.raises(MissingTokenError):
        await CvPipeline(settings, verifier, storage).process(b'{"token":""}')
    verifier.verify.assert_not_awaited()
    storage.blob_exists.assert_not_awaited()


@pytest.mark.asyncio
async def test_rejection_skips_storage(settings, storage):
    verifier = _verifier(VerificationResult(success=False, error_codes=["invalid-input-response"]))
    with pytest.raises(VerificationRejectedError) as exc_info:
        await CvPipeline(settings, verifier, storage).process(b'{"token":"abc"}')
    assert exc_info.value.status_code == 403
    assert exc_info.value.error_codes == ["invalid-input-response"]
    storage.blob_exists.assert_not_awaited()


@pytest.mark.asyncio
async def test_verifier_errors_propagate(settings, storage):
    verifier = _verifier(error=VerificationUnavailableError("HTTP 503"))
    with pytest.raises(VerificationUnavailableError):
        await CvPipeline(settings, verifier, storage).process(b'{"token":"abc"}')
    storage.blob_exists.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_blob(settings, storage):
    storage.blob_exists.return_value = False
    verifier = _verifier(VerificationResult(success=True))
    with pytest.raises(DocumentNotFoundError):
        await CvPipeline(settings, verifier, storage).process(b'{"token":"abc"}')
    storage.open_blob_stream.assert_not_awaited()


@pytest.mark.asyncio
async def test_unexpected_errors_propagate(settings, storage):
    storage.blob_exists.side_effect = RuntimeError("socket closed")
    verifier = _verifier(VerificationResult(success=True))
    with pytest.raises(RuntimeError):
        await CvPipeline(settings, verifier, storage).process(b'{"token":"abc"}')
