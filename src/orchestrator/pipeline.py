"""CV download pipeline: parse, verify, fetch."""

import logging

from src.config.constants import PipelineStep
from src.config.settings import Settings
from src.infrastructure.logging.logger import StructuredLogger
from src.infrastructure.storage.blob_client import BlobDownload, BlobStorageClient
from src.orchestrator.step_timer import timed_step
from src.services.errors import DocumentNotFoundError, VerificationRejectedError
from src.services.request.parser import parse_verification_request
from src.services.verification.verifier import CaptchaVerifier

logger = logging.getLogger(__name__)


class CvPipeline:
    """Gates the CV blob behind a captcha check.

    Steps run strictly in order and the first failure ends the request.
    The storage service is never contacted unless verification succeeded.
    """

    def __init__(
        self,
        settings: Settings,
        verifier: CaptchaVerifier,
        storage: BlobStorageClient,
    ):
        self.settings = settings
        self.verifier = verifier
        self.storage = storage
        self.step_logger = StructuredLogger(__name__)

    async def process(self, body: bytes | None, remote_ip: str | None = None) -> BlobDownload:
        """
        Run the pipeline for one request.

        Args:
            body: Raw request body
            remote_ip: Caller address, forwarded to the verifier

        Returns:
            BlobDownload for the configured CV blob

        Raises:
            CvGateError: Any expected failure, carrying its HTTP status
        """
        async with timed_step(PipelineStep.PARSE, self.step_logger):
            request = parse_verification_request(body)

        async with timed_step(PipelineStep.VERIFY, self.step_logger) as step:
            result = await self.verifier.verify(request.token, remote_ip)
            step.set_state(success=result.success)
            if not result.success:
                logger.info("Turnstile failed. Codes: %s", result.describe_codes())
                raise VerificationRejectedError(result.error_codes)

        container_name = self.settings.cv_container
        blob_name = self.settings.cv_blob_name

        async with timed_step(PipelineStep.FETCH, self.step_logger) as step:
            step.set_state(container=container_name, blob=blob_name)
            if not await self.storage.blob_exists(container_name, blob_name):
                logger.warning("CV blob not found: %s/%s", container_name, blob_name)
                raise DocumentNotFoundError(f"{container_name}/{blob_name}")
            download = await self.storage.open_blob_stream(container_name, blob_name)
            step.set_state(size=download.size)

        return download
