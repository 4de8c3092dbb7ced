"""
HTTP failure classification.

Turns a non-success aggregator response into a ``RemoteApiError`` with an
actionable category and the diagnostic headers the service attaches.
"""

import logging
import math
from enum import Enum
from typing import Dict, Mapping, Optional

from .exceptions import RemoteApiError

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"

DIAGNOSTIC_HEADERS = ("x-api-type", "x-request-id", "x-rate-limit-remaining")


class ErrorCategory(str, Enum):
    MALFORMED_INPUT = "malformed_input"
    BAD_CREDENTIAL = "bad_credential"
    ACCESS_DENIED = "access_denied"
    UNKNOWN_ROUTE = "unknown_route"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_FAILURE = "upstream_failure"
    HTTP_ERROR = "http_error"


# status -> (category, reason phrase, hint)
_STATUS_TABLE: Dict[int, tuple] = {
    400: (ErrorCategory.MALFORMED_INPUT, "Bad Request", "Check your input parameters."),
    401: (ErrorCategory.BAD_CREDENTIAL, "Unauthorized", "Check your API key and permissions."),
    403: (ErrorCategory.ACCESS_DENIED, "Forbidden", "API access denied or rate limited."),
    404: (ErrorCategory.UNKNOWN_ROUTE, "Not Found", "Endpoint or resource not found."),
    500: (ErrorCategory.UPSTREAM_FAILURE, "Internal Server Error", "Aggregator server error."),
    502: (ErrorCategory.UPSTREAM_FAILURE, "Bad Gateway", "Upstream server error."),
    503: (ErrorCategory.UPSTREAM_FAILURE, "Service Unavailable", "Aggregator temporarily unavailable."),
}


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    # aiohttp headers are case-insensitive already; plain dicts are not
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def extract_diagnostics(headers: Mapping[str, str]) -> Dict[str, str]:
    """Collect the diagnostic headers that are present. Missing ones are skipped."""
    found: Dict[str, str] = {}
    for name in DIAGNOSTIC_HEADERS:
        value = _header(headers, name)
        if value is not None:
            found[name] = value
    return found


def parse_retry_after(raw: Optional[str]) -> Optional[float]:
    """Seconds from a ``retry-after`` header, or None when absent or not numeric."""
    if raw is None:
        return None
    try:
        seconds = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


def classify_response(
    status: int,
    headers: Mapping[str, str],
    body: str,
    endpoint: Optional[str] = None,
) -> RemoteApiError:
    """
    Map a failed response to a ``RemoteApiError``.

    Args:
        status: HTTP status code
        headers: Response headers
        body: Raw response body
        endpoint: Path that was called, for log context

    Returns:
        The classified error (the caller raises it)
    """
    diagnostics = extract_diagnostics(headers)
    retry_after_raw: Optional[str] = None
    retry_after: Optional[float] = None

    if status == 429:
        category = ErrorCategory.RATE_LIMITED
        retry_after_raw = _header(headers, "retry-after")
        retry_after = parse_retry_after(retry_after_raw)
        shown = retry_after_raw.strip() if retry_after_raw is not None else UNKNOWN
        details = f"Rate Limited (429): {body}. Retry after {shown} seconds."
    elif status in _STATUS_TABLE:
        category, reason, hint = _STATUS_TABLE[status]
        details = f"{reason} ({status}): {body}. {hint}"
    else:
        category = ErrorCategory.HTTP_ERROR
        details = f"HTTP {status}: {body}"

    for name, value in diagnostics.items():
        logger.error(f"{name}: {value}")
    logger.error(f"Jupiter API error on {endpoint or '?'}: {details}")

    return RemoteApiError(
        details,
        error_code=f"API_{status}",
        context={"endpoint": endpoint, **diagnostics} if endpoint else dict(diagnostics),
        is_recoverable=category in (ErrorCategory.RATE_LIMITED, ErrorCategory.UPSTREAM_FAILURE),
        retry_after=retry_after,
        category=category.value,
        status_code=status,
        body=body,
        headers=diagnostics,
        retry_after_raw=retry_after_raw,
        endpoint=endpoint,
    )


__all__ = [
    "ErrorCategory",
    "DIAGNOSTIC_HEADERS",
    "UNKNOWN",
    "classify_response",
    "extract_diagnostics",
    "parse_retry_after",
]
