"""
Jupiter aggregator client and swap orchestrator.

Usage:
    from jupiter_bridge import JupiterClient, SwapOrchestrator, TransportProfile

    async with JupiterClient(TransportProfile.public()) as jupiter:
        outcome = await SwapOrchestrator(jupiter).execute_swap(intent)
"""

__version__ = "1.0.0"

from .client import JupiterClient
from .errors import ErrorCategory, classify_response
from .exceptions import (
    BridgeError,
    ConfigurationError,
    DecodeError,
    MalformedAmount,
    RemoteApiError,
    TransportError,
    ValidationError,
)
from .models import SwapIntent, SwapOutcome
from .orchestrator import SwapOrchestrator
from .schemas import (
    FeatureQuoteRequest,
    FeatureQuoteResponse,
    OptimizationQuoteRequest,
    OptimizationQuoteResponse,
    QuoteRequest,
    QuoteResponse,
    SwapBuildRequest,
    SwapBuildResponse,
)
from .transport import ApiTier, IntegratorFee, TransportProfile, YellowstoneConfig

__all__ = [
    "__version__",
    "JupiterClient",
    "SwapOrchestrator",
    "TransportProfile",
    "ApiTier",
    "IntegratorFee",
    "YellowstoneConfig",
    "QuoteRequest",
    "QuoteResponse",
    "OptimizationQuoteRequest",
    "OptimizationQuoteResponse",
    "FeatureQuoteRequest",
    "FeatureQuoteResponse",
    "SwapBuildRequest",
    "SwapBuildResponse",
    "SwapIntent",
    "SwapOutcome",
    "ErrorCategory",
    "classify_response",
    "BridgeError",
    "ConfigurationError",
    "ValidationError",
    "RemoteApiError",
    "TransportError",
    "DecodeError",
    "MalformedAmount",
]
