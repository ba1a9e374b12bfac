"""
Constants, enums, and static values.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)

TURNSTILE_VERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"

DEFAULT_CV_CONTAINER = "resume"
DEFAULT_CV_BLOB_NAME = "[CV]Mariano-Rodriguez.pdf"

# Request body keys accepted for the Turnstile token, in lookup order
TOKEN_KEYS: tuple[str, ...] = ("token", "Token")

# Reply keys that may carry Turnstile error codes, in lookup order
ERROR_CODE_KEYS: tuple[str, ...] = ("error-codes", "error_codes")

PDF_MEDIA_TYPE = "application/pdf"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"
CV_CACHE_CONTROL = "private, max-age=0, no-cache"


class PipelineStep(str, Enum):
    """CV pipeline execution steps."""

    PARSE = "parse"
    VERIFY = "verify"
    FETCH = "fetch"


class PipelineStepDescription(str, Enum):
    """CV pipeline execution step descriptions."""

    PARSE = "Extract the Turnstile token from the request body"
    VERIFY = "Confirm the token with Cloudflare Turnstile"
    FETCH = "Locate the CV blob and open its download stream"


def log_pipeline_step(step: PipelineStep) -> None:
    """Log the start of a pipeline step with its description."""
    logger.debug("Step %s: %s", step.value, PipelineStepDescription[step.name].value)
