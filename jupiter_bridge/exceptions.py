"""
Exception hierarchy for the Jupiter bridge.

Every failure an operation can produce is one of the classes below. Each
exception carries:
- a stable error code for logging and alert routing
- a human-readable message
- an optional context dictionary with debugging information
- an is_recoverable flag telling the caller whether a retry can help
- retry_after for rate-limited responses (only when the server sent one)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================

@dataclass
class BridgeError(Exception):
    """
    Base exception for all Jupiter bridge errors.

    Attributes:
        message: Human-readable error description
        error_code: Unique identifier for the error type (e.g., "CFG_001")
        context: Optional dictionary with debugging information
        is_recoverable: Whether the operation can be retried
        retry_after: Seconds to wait before retry (rate limits only)
        timestamp: When the error occurred
    """
    message: str
    error_code: str = "GEN_000"
    context: dict[str, Any] = field(default_factory=dict)
    is_recoverable: bool = False
    retry_after: Optional[float] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the error message with code and context."""
        base = f"[{self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base += f" | Context: {context_str}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "is_recoverable": self.is_recoverable,
            "retry_after": self.retry_after,
            "timestamp": self.timestamp.isoformat(),
            "exception_type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        return self.format_message()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"error_code={self.error_code!r}, "
            f"message={self.message!r}, "
            f"is_recoverable={self.is_recoverable})"
        )


# =============================================================================
# CONFIGURATION & VALIDATION
# =============================================================================

@dataclass
class ConfigurationError(BridgeError):
    """Invalid transport profile or settings. Raised at construction time."""
    error_code: str = "CFG_001"
    is_recoverable: bool = False


@dataclass
class ValidationError(BridgeError):
    """A request argument is outside its allowed range."""
    error_code: str = "VAL_001"
    is_recoverable: bool = False
    field_name: Optional[str] = None


# =============================================================================
# REMOTE API EXCEPTIONS
# =============================================================================

@dataclass
class RemoteApiError(BridgeError):
    """
    The aggregator answered with a non-success status.

    Built by ``errors.classify_response``; ``category`` is one of the
    ``ErrorCategory`` values and ``headers`` holds the diagnostic headers
    that were present on the response.
    """
    error_code: str = "API_000"
    category: str = "http_error"
    status_code: Optional[int] = None
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    retry_after_raw: Optional[str] = None
    endpoint: Optional[str] = None

    @property
    def retry_after_display(self) -> str:
        """The server's retry-after value, or "unknown" when it sent none."""
        if self.retry_after_raw is None:
            return "unknown"
        return self.retry_after_raw.strip()


@dataclass
class TransportError(BridgeError):
    """Connection failure or timeout before a response arrived."""
    error_code: str = "NET_001"
    is_recoverable: bool = True
    endpoint: Optional[str] = None


# =============================================================================
# DATA EXCEPTIONS
# =============================================================================

@dataclass
class DecodeError(BridgeError):
    """Response payload does not match the expected schema."""
    error_code: str = "DATA_001"
    is_recoverable: bool = False
    payload: Any = None


@dataclass
class MalformedAmount(BridgeError):
    """A wire value could not be parsed as the expected number."""
    error_code: str = "DATA_002"
    is_recoverable: bool = False
    field_name: Optional[str] = None
    raw_value: Optional[str] = None


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, BridgeError):
        return error.is_recoverable
    return False


def get_retry_delay(error: Exception, default: float = 1.0) -> float:
    """Get the recommended retry delay for an error."""
    if isinstance(error, BridgeError) and error.retry_after is not None:
        return error.retry_after
    return default


__all__ = [
    "BridgeError",
    "ConfigurationError",
    "ValidationError",
    "RemoteApiError",
    "TransportError",
    "DecodeError",
    "MalformedAmount",
    "is_retryable",
    "get_retry_delay",
]
