"""CV download endpoint."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from src.api.dependencies import get_blob_storage, get_captcha_verifier
from src.api.models import CvRequest
from src.api.response import build_error_response, build_pdf_response, build_text_response
from src.config.constants import PDF_MEDIA_TYPE, TEXT_MEDIA_TYPE
from src.config.message import ERROR_MESSAGES
from src.config.settings import Settings, get_settings
from src.infrastructure.storage.blob_client import BlobStorageClient
from src.orchestrator.pipeline import CvPipeline
from src.services.errors import CvGateError
from src.services.verification.verifier import CaptchaVerifier

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/cv",
    response_class=Response,
    responses={
        200: {"description": "The CV document", "content": {PDF_MEDIA_TYPE: {}}},
        400: {"description": "Missing body, invalid JSON or missing token", "content": {TEXT_MEDIA_TYPE: {}}},
        403: {"description": "Captcha verification failed", "content": {TEXT_MEDIA_TYPE: {}}},
        404: {"description": "CV not found", "content": {TEXT_MEDIA_TYPE: {}}},
        500: {"description": "Server misconfiguration or internal error", "content": {TEXT_MEDIA_TYPE: {}}},
        502: {"description": "Captcha verification unavailable", "content": {TEXT_MEDIA_TYPE: {}}},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": CvRequest.model_json_schema()}},
        }
    },
)
async def get_cv(
    request: Request,
    settings: Settings = Depends(get_settings),  # noqa: B008
    verifier: CaptchaVerifier = Depends(get_captcha_verifier),  # noqa: B008
    storage: BlobStorageClient = Depends(get_blob_storage),  # noqa: B008
) -> Response:
    """Verify a Turnstile token and stream the CV PDF."""
    try:
        body = await request.body()
        remote_ip = request.client.host if request.client else None
        download = await CvPipeline(settings, verifier, storage).process(body, remote_ip)
        return build_pdf_response(download)
    except CvGateError as e:
        return build_error_response(e)
    except Exception as e:
        logger.error("GetCv failed: %s", e, exc_info=True)
        return build_text_response(500, ERROR_MESSAGES["unknown_error"])
