"""Cloudflare Turnstile token verifier."""

import asyncio
import json
import logging
from typing import Protocol

import httpx

from src.config.settings import Settings
from src.services.errors import (
    MisconfigurationError,
    VerificationMalformedError,
    VerificationUnavailableError,
)
from src.services.verification.models import VerificationResult

logger = logging.getLogger(__name__)


class CaptchaVerifier(Protocol):
    """Anything the CV pipeline can ask to confirm a captcha token."""

    async def verify(self, token: str, remote_ip: str | None = None) -> VerificationResult: ...


class TurnstileVerifier:
    """Verifies Turnstile tokens against the siteverify endpoint."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        """Initialize the verifier.

        Args:
            settings: Application settings holding the Turnstile secret and URL
            transport: Optional httpx transport, used by tests to fake the API
        """
        self.settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the shared AsyncClient."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.turnstile_timeout,
                transport=self._transport,
            )
        return self._client

    async def verify(self, token: str, remote_ip: str | None = None) -> VerificationResult:
        """
        Confirm a token with Turnstile. One request, no retries.

        Args:
            token: Token issued by the client-side widget
            remote_ip: Caller address, sent only when turnstile_send_remote_ip is on

        Returns:
            VerificationResult with the success flag and any error codes

        Raises:
            MisconfigurationError: turnstile_secret is not configured
            VerificationUnavailableError: Transport error or non-2xx status
            VerificationMalformedError: Reply is not a JSON object
        """
        secret = self.settings.turnstile_secret
        if not secret or not secret.strip():
            logger.error("TURNSTILE_SECRET is not configured.")
            raise MisconfigurationError("turnstile_secret is empty")

        form = {"secret": secret, "response": token}
        if self.settings.turnstile_send_remote_ip and remote_ip:
            form["remoteip"] = remote_ip

        try:
            response = await asyncio.wait_for(
                self._get_client().post(self.settings.turnstile_verify_url, data=form),
                timeout=self.settings.turnstile_timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning("Turnstile verify timed out after %ss.", self.settings.turnstile_timeout)
            raise VerificationUnavailableError("timeout") from e
        except httpx.HTTPError as e:
            logger.warning("Turnstile verify request error: %s", e)
            raise VerificationUnavailableError(str(e)) from e

        if not response.is_success:
            logger.warning("Turnstile verify HTTP %s.", response.status_code)
            raise VerificationUnavailableError(f"HTTP {response.status_code}")

        try:
            reply = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Turnstile verify returned invalid JSON.")
            raise VerificationMalformedError(str(e)) from e

        if not isinstance(reply, dict):
            logger.warning("Turnstile verify returned a non-object reply.")
            raise VerificationMalformedError(f"unexpected reply type {type(reply).__name__}")

        return VerificationResult.from_reply(reply)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None


_shared_verifier: TurnstileVerifier | None = None


def get_shared_verifier(settings: Settings) -> TurnstileVerifier:
    """
    Get or create the process-wide TurnstileVerifier.
    """
    global _shared_verifier
    if _shared_verifier is None:
        _shared_verifier = TurnstileVerifier(settings)
    return _shared_verifier


async def close_shared_verifier() -> None:
    """Close the shared verifier, if one was created."""
    global _shared_verifier
    if _shared_verifier is not None:
        await _shared_verifier.close()
        _shared_verifier = None
