"""
User-facing messages for the CV endpoint.
"""

# =============================================================================
# Error Messages
# =============================================================================
ERROR_MESSAGES: dict[str, str] = {
    "missing_body": "Missing request body.",
    "invalid_json": "Invalid JSON body.",
    "missing_token": "Missing Turnstile token.",
    "misconfiguration": "Server misconfiguration.",
    "verification_unavailable": "Captcha verification unavailable.",
    "verification_failed": "Captcha verification failed.",
    "cv_not_found": "CV not found.",
    "unknown_error": "Internal server error.",
}
