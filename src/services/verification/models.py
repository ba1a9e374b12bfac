"""Verification service models."""

from dataclasses import dataclass
from typing import Any

from src.config.constants import ERROR_CODE_KEYS


@dataclass
class VerificationResult:
    """Outcome reported by Turnstile siteverify."""

    success: bool
    error_codes: list[str] | None = None

    @classmethod
    def from_reply(cls, reply: dict[str, Any]) -> "VerificationResult":
        """Build a result from a decoded siteverify reply.

        Only a literal JSON ``true`` counts as success. Error codes are taken
        from the first key in ERROR_CODE_KEYS that holds an array; blank and
        non-string entries are dropped.
        """
        error_codes = None
        for key in ERROR_CODE_KEYS:
            value = reply.get(key)
            if isinstance(value, list):
                error_codes = [code for code in value if isinstance(code, str) and code]
                break
        return cls(success=reply.get("success") is True, error_codes=error_codes)

    def describe_codes(self) -> str:
        return ",".join(self.error_codes) if self.error_codes else "(none)"
