"""Optional logging of outgoing API calls, enabled with COMMUTE_LOG_REQUESTS=true."""

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"


def should_log_requests() -> bool:
    """Whether COMMUTE_LOG_REQUESTS is set to true."""
    return os.getenv("COMMUTE_LOG_REQUESTS", "").lower() == "true"


def redact_secret(url: str, secret: str | None) -> str:
    """Mask a secret embedded in a URL.

    Seoul open data APIs carry the key as a path segment, so header-based
    redaction is not enough.
    """
    if not secret:
        return url
    return url.replace(secret, REDACTED)


def log_api_request(method: str, url: str, secret: str | None = None) -> None:
    """Log an outgoing request if request logging is enabled.

    Args:
        method: HTTP method.
        url: Full request URL.
        secret: API key to mask in the logged URL.
    """
    if not should_log_requests():
        return
    logger.info(f"API Request: {method} {redact_secret(url, secret)}")


def log_api_response(url: str, status: int, body: Any = None, secret: str | None = None) -> None:
    """Log the status, and a truncated body, of a response if request logging is enabled."""
    if not should_log_requests():
        return

    message = f"API Response: {status} for {redact_secret(url, secret)}"
    if body is not None:
        text = str(body)
        message += f"\n{text[:500]}{'...' if len(text) > 500 else ''}"
    logger.info(message)
