"""
Jupiter aggregator async client.

One method per remote endpoint. Each call is a single round trip: there is
no caching, no retry and no rate limiting here, and failures are raised as
typed ``BridgeError`` subclasses for the caller to handle.
"""

import asyncio
import json
import logging
import time
from typing import Any, Callable, Dict, Optional, Sequence, TypeVar

import aiohttp

from .errors import classify_response
from .exceptions import BridgeError, DecodeError, TransportError, ValidationError
from .schemas import (
    ApiInfo,
    FeatureQuoteRequest,
    FeatureQuoteResponse,
    HealthStatus,
    OptimizationQuoteRequest,
    OptimizationQuoteResponse,
    QuoteRequest,
    QuoteResponse,
    SwapBuildRequest,
    SwapBuildResponse,
    TokenInfo,
    TokenPrice,
    expect_object,
)
from .transport import REQUEST_TIMEOUT_SECONDS, TransportProfile

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ============================================================================
# ENDPOINTS
# ============================================================================

QUOTE_PATH = "quote"
SWAP_PATH = "swap"
TOKENS_PATH = "tokens"
PRICE_PATH = "price"
METIS_QUOTE_PATH = "metis/quote"
ULTRA_QUOTE_PATH = "ultra/quote"
HEALTH_PATH = "health"
INFO_PATH = "info"


class JupiterClient:
    """
    Async client for the Jupiter quote/swap API.

    The client is read-only after construction apart from its lazily created
    HTTP session, so one instance can be shared by many tasks.

    Example:
        async with JupiterClient(TransportProfile.public()) as jupiter:
            quote = await jupiter.get_quote(QuoteRequest(
                input_mint=SOL_MINT,
                output_mint=USDC_MINT,
                amount=1_000_000_000,
                slippage_bps=50,
            ))
            print(f"Expected output: {quote.out_amount / 1e6} USDC")
    """

    def __init__(self, profile: TransportProfile, strict_routes: bool = True):
        """
        Initialize Jupiter client.

        Args:
            profile: Transport profile (base URL, headers, tier)
            strict_routes: Reject quotes whose hop percentages do not sum to 100
        """
        self.profile = profile
        self.strict_routes = strict_routes

        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock = asyncio.Lock()
        self._closed = False

    async def __aenter__(self) -> "JupiterClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists."""
        async with self._session_lock:
            if self._session is None or self._session.closed:
                self._session = aiohttp.ClientSession(
                    headers=dict(self.profile.headers),
                    timeout=self.profile.client_timeout(),
                )
                self._closed = False
                logger.debug(f"Opened session for {self.profile.describe()}")
            return self._session

    async def close(self) -> None:
        """Close the client and release the HTTP session."""
        if self._closed:
            return

        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
            # Wait for graceful close
            await asyncio.sleep(0.25)

        logger.info("JupiterClient closed")

    # ========================================================================
    # TRANSPORT
    # ========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make one HTTP request and return the parsed JSON body.

        Raises:
            RemoteApiError: On a non-2xx status
            TransportError: On connection failure or timeout
            DecodeError: If the body is not JSON
        """
        session = await self._ensure_session()
        url = self.profile.url(path)
        start_time = time.monotonic()

        logger.debug(f"Request {method} {url} params={params}")

        try:
            async with session.request(method, url, params=params, json=json_data) as response:
                raw = await response.read()
                latency = (time.monotonic() - start_time) * 1000

                if not 200 <= response.status < 300:
                    raise classify_response(
                        response.status, response.headers, raw.decode("utf-8", errors="replace"),
                        endpoint=path,
                    )

        except aiohttp.ClientError as e:
            raise TransportError(f"Connection error calling {path}: {e}", endpoint=path) from e

        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request to {path} timed out after {REQUEST_TIMEOUT_SECONDS}s", endpoint=path
            ) from e

        logger.debug(f"{method} {path} completed in {latency:.1f}ms")

        # UnicodeDecodeError is a ValueError
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as e:
            body = raw.decode("utf-8", errors="replace")
            logger.error(f"Non-JSON response from {path}: {body[:2000]}")
            raise DecodeError(f"Response from {path} is not valid JSON", payload=body) from e

    def _decode(self, path: str, payload: Any, decoder: Callable[[Any], T]) -> T:
        try:
            return decoder(payload)
        except BridgeError as e:
            logger.error(f"Could not decode {path} response: {e} | payload={payload!r}")
            raise

    # ========================================================================
    # QUOTE OPERATIONS
    # ========================================================================

    async def get_quote(self, request: QuoteRequest) -> QuoteResponse:
        """
        Get a swap quote.

        Args:
            request: Mints, amount, slippage and routing constraints

        Returns:
            QuoteResponse with parsed amounts and the route plan

        Raises:
            RemoteApiError, TransportError, DecodeError, MalformedAmount
        """
        logger.debug(f"Getting quote for {request.input_mint} -> {request.output_mint}")

        data = await self._request("GET", QUOTE_PATH, params=request.to_params())
        quote = self._decode(
            QUOTE_PATH, data, lambda d: QuoteResponse.from_dict(d, strict_routes=self.strict_routes)
        )

        logger.debug(
            f"Quote received: {quote.input_mint} -> {quote.output_mint} "
            f"({quote.out_amount} out, {quote.num_hops} hops)"
        )
        return quote

    async def get_optimization_quote(self, request: OptimizationQuoteRequest) -> OptimizationQuoteResponse:
        """Get a Metis (optimization-enhanced) quote."""
        logger.debug(f"Getting Metis quote for {request.input_mint} -> {request.output_mint}")

        data = await self._request("POST", METIS_QUOTE_PATH, json_data=request.to_dict())
        quote = self._decode(
            METIS_QUOTE_PATH,
            data,
            lambda d: OptimizationQuoteResponse.from_dict(d, strict_routes=self.strict_routes),
        )

        logger.debug(f"Metis quote received: {quote.out_amount} out, {quote.num_hops} hops")
        return quote

    async def get_feature_quote(self, request: FeatureQuoteRequest) -> FeatureQuoteResponse:
        """Get an Ultra (feature-enhanced) quote."""
        logger.debug(f"Getting Ultra quote for {request.input_mint} -> {request.output_mint}")

        data = await self._request("POST", ULTRA_QUOTE_PATH, json_data=request.to_dict())
        quote = self._decode(
            ULTRA_QUOTE_PATH,
            data,
            lambda d: FeatureQuoteResponse.from_dict(d, strict_routes=self.strict_routes),
        )

        logger.debug(f"Ultra quote received: {quote.out_amount} out, {quote.num_hops} hops")
        return quote

    # ========================================================================
    # SWAP OPERATIONS
    # ========================================================================

    async def get_swap_transaction(self, request: SwapBuildRequest) -> SwapBuildResponse:
        """
        Get a serialized, unsigned swap transaction for a quote.

        Args:
            request: Quote (embedded whole), signer and execution policy

        Returns:
            SwapBuildResponse with the opaque transaction payload
        """
        logger.debug(f"Getting swap transaction for {request.user_public_key}")

        data = await self._request("POST", SWAP_PATH, json_data=request.to_dict())
        swap = self._decode(SWAP_PATH, data, SwapBuildResponse.from_dict)

        logger.debug(
            f"Swap transaction received, valid until block {swap.last_valid_block_height}"
        )
        return swap

    # ========================================================================
    # TOKEN & PRICE OPERATIONS
    # ========================================================================

    async def get_tokens(self) -> Dict[str, TokenInfo]:
        """
        Get the tradable token list keyed by mint.

        Accepts either an object keyed by mint or a plain list of tokens.
        """
        logger.debug("Fetching token list")

        data = await self._request("GET", TOKENS_PATH)
        tokens = self._decode(TOKENS_PATH, data, _decode_token_map)

        logger.debug(f"Fetched {len(tokens)} tokens")
        return tokens

    async def get_prices(self, ids: Sequence[str]) -> Dict[str, TokenPrice]:
        """
        Get prices for several mints in one request.

        Args:
            ids: Non-empty list of mint addresses

        Returns:
            Dict mapping mint to TokenPrice; mints the service has no price
            for are left out
        """
        if isinstance(ids, str) or not ids:
            raise ValidationError("At least one price id is required", field_name="ids")
        if not all(isinstance(mint, str) and mint for mint in ids):
            raise ValidationError("Price ids must be non-empty strings", field_name="ids")

        logger.debug(f"Getting prices for {len(ids)} tokens")

        data = await self._request("GET", PRICE_PATH, params={"ids": ",".join(ids)})
        prices = self._decode(PRICE_PATH, data, _decode_price_map)

        logger.debug(f"Fetched prices for {len(prices)} tokens")
        return prices

    # ========================================================================
    # STATUS OPERATIONS
    # ========================================================================

    async def get_health(self) -> HealthStatus:
        logger.debug("Checking Jupiter API health status")

        data = await self._request("GET", HEALTH_PATH)
        health = self._decode(HEALTH_PATH, data, HealthStatus.from_dict)

        logger.debug(f"Health status: {health.status.value}")
        return health

    async def get_api_info(self) -> ApiInfo:
        logger.debug("Getting Jupiter API information")

        data = await self._request("GET", INFO_PATH)
        info = self._decode(INFO_PATH, data, ApiInfo.from_dict)

        logger.debug(f"API info: version {info.version}, tier {self.profile.tier.value}")
        return info


# ============================================================================
# PAYLOAD HELPERS
# ============================================================================

def _decode_token_map(payload: Any) -> Dict[str, TokenInfo]:
    if isinstance(payload, list):
        tokens = [TokenInfo.from_dict(item) for item in payload]
        return {token.address: token for token in tokens}
    payload = expect_object(payload, "tokens")
    return {mint: TokenInfo.from_dict(item) for mint, item in payload.items()}


def _decode_price_map(payload: Any) -> Dict[str, TokenPrice]:
    payload = expect_object(payload, "price")
    entries = payload.get("data") if isinstance(payload.get("data"), dict) else payload

    prices: Dict[str, TokenPrice] = {}
    for mint, entry in entries.items():
        if entry is None:
            logger.debug(f"No price available for {mint}")
            continue
        prices[mint] = TokenPrice.from_dict(mint, entry)
    return prices


__all__ = ["JupiterClient"]
