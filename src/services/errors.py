"""Typed failures of the CV pipeline.

Each error carries the HTTP status and the caller-safe message the API
returns for it. Internal details belong in the logs, never in ``message``.
"""

from src.config.message import ERROR_MESSAGES


class CvGateError(Exception):
    """Base class for failures that map to a plain-text HTTP response."""

    status_code: int = 500
    message_key: str = "unknown_error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self.message_key]


class MissingBodyError(CvGateError):
    status_code = 400
    message_key = "missing_body"


class InvalidJsonError(CvGateError):
    status_code = 400
    message_key = "invalid_json"


class MissingTokenError(CvGateError):
    status_code = 400
    message_key = "missing_token"


class MisconfigurationError(CvGateError):
    """A required secret or connection setting is missing."""

    status_code = 500
    message_key = "misconfiguration"


class StorageConfigurationError(MisconfigurationError):
    """Neither a storage connection string nor an account URL is configured."""


class VerificationUnavailableError(CvGateError):
    """Turnstile answered with a non-2xx status or could not be reached."""

    status_code = 502
    message_key = "verification_unavailable"


class VerificationMalformedError(CvGateError):
    """Turnstile answered with a body that is not a JSON object."""

    status_code = 502
    message_key = "verification_failed"


class VerificationRejectedError(CvGateError):
    status_code = 403
    message_key = "verification_failed"

    def __init__(self, error_codes: list[str] | None = None):
        super().__init__(", ".join(error_codes) if error_codes else None)
        self.error_codes = error_codes


class DocumentNotFoundError(CvGateError):
    status_code = 404
    message_key = "cv_not_found"
