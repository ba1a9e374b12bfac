"""Request body parser for the CV endpoint."""

import json
import logging
from dataclasses import dataclass

from src.config.constants import TOKEN_KEYS
from src.services.errors import InvalidJsonError, MissingBodyError, MissingTokenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationRequest:
    """Inbound request carrying the Turnstile token."""

    token: str


def parse_verification_request(body: bytes | None) -> VerificationRequest:
    """
    Extract the Turnstile token from a raw JSON request body.

    The token is read from ``token`` and, failing that, from ``Token``.
    Keys are matched case-sensitively.

    Args:
        body: Raw request bytes

    Returns:
        VerificationRequest holding a non-blank token

    Raises:
        MissingBodyError: Body is absent, empty or whitespace only
        InvalidJsonError: Body is not a JSON object
        MissingTokenError: No non-blank string token under an accepted key
    """
    if not body or not body.strip():
        raise MissingBodyError()

    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug("Rejecting request body: %s", e)
        raise InvalidJsonError(str(e)) from e

    if not isinstance(payload, dict):
        raise InvalidJsonError(f"expected a JSON object, got {type(payload).__name__}")

    token = None
    for key in TOKEN_KEYS:
        if key in payload:
            token = payload[key]
            break

    if not isinstance(token, str) or not token.strip():
        raise MissingTokenError()

    return VerificationRequest(token=token)
