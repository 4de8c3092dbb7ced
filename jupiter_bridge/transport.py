"""
Transport profiles for the Jupiter aggregator.

A profile fixes everything that is constant across requests from one client:
the base URL, the tier marker, the header set and the request timeout. All
tier-specific behavior lives here; endpoint operations only ever read
``profile.headers``.

Example:
    profile = TransportProfile.pro(api_key="...")
    async with JupiterClient(profile) as jupiter:
        health = await jupiter.get_health()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

import aiohttp

from . import __version__
from .exceptions import ConfigurationError
from .validators import MAX_FEE_BPS

# ============================================================================
# CONSTANTS
# ============================================================================

PUBLIC_API_BASE = "https://quote-api.jup.ag/v6"
PRO_API_BASE = "https://api.jup.ag/v6"
LITE_API_BASE = "https://lite-api.jup.ag/v6"
ULTRA_API_BASE = "https://ultra-api.jup.ag/v6"

REQUEST_TIMEOUT_SECONDS = 30
USER_AGENT = f"jupiter-bridge/{__version__}"

HEADER_AUTHORIZATION = "Authorization"
HEADER_API_TYPE = "X-API-Type"
HEADER_INTEGRATOR_FEE = "X-Integrator-Fee"
HEADER_INTEGRATOR_ACCOUNT = "X-Integrator-Account"
HEADER_YELLOWSTONE_ENDPOINT = "X-Yellowstone-Endpoint"
HEADER_YELLOWSTONE_TOKEN = "X-Yellowstone-Token"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"


class ApiTier(str, Enum):
    """Aggregator access tier. The value is sent as the X-API-Type header."""
    PUBLIC = "public"
    PRO = "pro"
    LITE = "lite"
    SELF_HOSTED = "self-hosted"
    ULTRA = "ultra"


DEFAULT_BASE_URLS: Dict[ApiTier, str] = {
    ApiTier.PUBLIC: PUBLIC_API_BASE,
    ApiTier.PRO: PRO_API_BASE,
    ApiTier.LITE: LITE_API_BASE,
    ApiTier.ULTRA: ULTRA_API_BASE,
}

_CREDENTIAL_TIERS = frozenset({ApiTier.PRO, ApiTier.ULTRA})


# ============================================================================
# OPTIONAL CONFIG BLOCKS
# ============================================================================

@dataclass(frozen=True)
class IntegratorFee:
    """Integrator fee forwarded to the aggregator on every request."""
    fee_bps: int
    fee_account: str

    def __post_init__(self) -> None:
        if isinstance(self.fee_bps, bool) or not isinstance(self.fee_bps, int):
            raise ConfigurationError("Integrator fee bps must be an integer")
        if not 0 <= self.fee_bps <= MAX_FEE_BPS:
            raise ConfigurationError(
                f"Integrator fee bps {self.fee_bps} outside 0..{MAX_FEE_BPS}"
            )
        if not self.fee_account:
            raise ConfigurationError("Integrator fee account is required")


@dataclass(frozen=True)
class YellowstoneConfig:
    """Low-latency gRPC feed used by self-hosted aggregator deployments."""
    grpc_endpoint: str
    x_token: str = field(repr=False)


# ============================================================================
# HEADER CONSTRUCTION
# ============================================================================

def _header_value(name: str, value: Any) -> str:
    """Validate a header value; values are never echoed into the error."""
    if not isinstance(value, str) or not value:
        raise ConfigurationError(
            f"Header {name} requires a non-empty string value",
            context={"header": name},
        )
    if not value.isascii() or any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value):
        raise ConfigurationError(
            f"Header {name} contains non-ASCII or control characters",
            context={"header": name},
        )
    return value


def build_headers(
    tier: ApiTier,
    api_key: Optional[str] = None,
    integrator_fee: Optional[IntegratorFee] = None,
    yellowstone: Optional[YellowstoneConfig] = None,
) -> Dict[str, str]:
    """
    Build the fixed header set for a profile.

    Args:
        tier: Access tier, always sent as X-API-Type
        api_key: Bearer credential; Authorization is sent iff present
        integrator_fee: Adds X-Integrator-Fee / X-Integrator-Account
        yellowstone: Adds X-Yellowstone-Endpoint / X-Yellowstone-Token

    Returns:
        Header name to value mapping

    Raises:
        ConfigurationError: If any value cannot be sent as a header
    """
    headers: Dict[str, str] = {}

    if api_key is not None:
        headers[HEADER_AUTHORIZATION] = f"Bearer {_header_value(HEADER_AUTHORIZATION, api_key)}"

    headers[HEADER_API_TYPE] = tier.value

    if integrator_fee is not None:
        headers[HEADER_INTEGRATOR_FEE] = str(integrator_fee.fee_bps)
        headers[HEADER_INTEGRATOR_ACCOUNT] = _header_value(
            HEADER_INTEGRATOR_ACCOUNT, integrator_fee.fee_account
        )

    if yellowstone is not None:
        headers[HEADER_YELLOWSTONE_ENDPOINT] = _header_value(
            HEADER_YELLOWSTONE_ENDPOINT, yellowstone.grpc_endpoint
        )
        headers[HEADER_YELLOWSTONE_TOKEN] = _header_value(
            HEADER_YELLOWSTONE_TOKEN, yellowstone.x_token
        )

    headers[HEADER_CONTENT_TYPE] = "application/json"
    headers[HEADER_USER_AGENT] = USER_AGENT
    return headers


# ============================================================================
# TRANSPORT PROFILE
# ============================================================================

@dataclass(frozen=True)
class TransportProfile:
    """
    Immutable client configuration for one aggregator deployment.

    Construction validates the tier requirements and builds the header set,
    so a profile that exists is always usable.
    """
    base_url: str
    tier: ApiTier = ApiTier.PUBLIC
    api_key: Optional[str] = field(default=None, repr=False)
    integrator_fee: Optional[IntegratorFee] = None
    yellowstone: Optional[YellowstoneConfig] = None
    headers: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            tier = ApiTier(self.tier)
        except ValueError:
            raise ConfigurationError(f"Unknown API tier: {self.tier!r}") from None
        object.__setattr__(self, "tier", tier)

        parsed = urlparse(self.base_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"Base URL must be an http(s) URL: {self.base_url!r}")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        if tier in _CREDENTIAL_TIERS and self.api_key is None:
            raise ConfigurationError(f"The {tier.value} tier requires an API key")
        if tier is ApiTier.SELF_HOSTED and self.yellowstone is None:
            raise ConfigurationError("The self-hosted tier requires a Yellowstone feed config")

        headers = build_headers(tier, self.api_key, self.integrator_fee, self.yellowstone)
        object.__setattr__(self, "headers", MappingProxyType(headers))

    # ------------------------------------------------------------------------
    # Shortcuts
    # ------------------------------------------------------------------------

    @classmethod
    def public(cls) -> "TransportProfile":
        return cls(base_url=PUBLIC_API_BASE, tier=ApiTier.PUBLIC)

    @classmethod
    def pro(cls, api_key: str) -> "TransportProfile":
        return cls(base_url=PRO_API_BASE, tier=ApiTier.PRO, api_key=api_key)

    @classmethod
    def lite(cls) -> "TransportProfile":
        return cls(base_url=LITE_API_BASE, tier=ApiTier.LITE)

    @classmethod
    def self_hosted(
        cls,
        base_url: str,
        yellowstone: YellowstoneConfig,
        integrator_fee: Optional[IntegratorFee] = None,
    ) -> "TransportProfile":
        return cls(
            base_url=base_url,
            tier=ApiTier.SELF_HOSTED,
            integrator_fee=integrator_fee,
            yellowstone=yellowstone,
        )

    @classmethod
    def ultra(cls, api_key: str) -> "TransportProfile":
        return cls(base_url=ULTRA_API_BASE, tier=ApiTier.ULTRA, api_key=api_key)

    # ------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def client_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=REQUEST_TIMEOUT_SECONDS)

    def describe(self) -> Dict[str, Any]:
        """Log-safe summary; secrets are masked."""
        return {
            "base_url": self.base_url,
            "tier": self.tier.value,
            "api_key": "***" if self.api_key else None,
            "integrator_fee_bps": self.integrator_fee.fee_bps if self.integrator_fee else None,
            "yellowstone_endpoint": self.yellowstone.grpc_endpoint if self.yellowstone else None,
            "headers": sorted(self.headers),
        }


__all__ = [
    "ApiTier",
    "IntegratorFee",
    "YellowstoneConfig",
    "TransportProfile",
    "build_headers",
    "DEFAULT_BASE_URLS",
    "PUBLIC_API_BASE",
    "PRO_API_BASE",
    "LITE_API_BASE",
    "ULTRA_API_BASE",
    "REQUEST_TIMEOUT_SECONDS",
    "USER_AGENT",
]
