"""Utility for logging outbound API requests when NTD_LOG_REQUESTS is enabled."""

import json
import logging
import os

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key"}


def should_log_requests() -> bool:
    """Check if request logging is enabled via NTD_LOG_REQUESTS environment variable."""
    return os.getenv("NTD_LOG_REQUESTS", "").lower() == "true"


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Replace credential headers with a placeholder."""
    return {
        k: "***REDACTED***" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()
    }


def log_api_request(method: str, url: str, headers: dict[str, str] | None = None) -> None:
    """Log an outbound request if NTD_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        headers: Request headers; credentials are redacted.
    """
    if not should_log_requests():
        return

    log_parts = [f"{method} {url}"]
    if headers:
        log_parts.append(f"Headers: {json.dumps(redact_headers(headers), indent=2)}")

    logger.info("API Request:\n" + "\n".join(log_parts))
