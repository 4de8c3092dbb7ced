"""
Wire schemas for the Jupiter aggregator API.

Request types serialize to camelCase query parameters or JSON bodies. Response
types decode strictly: a missing required field or a field of the wrong JSON
type raises ``DecodeError``, and string-encoded token amounts that do not
parse raise ``MalformedAmount``.

The three quote tiers share one decoder. ``OptimizationQuoteResponse`` (Metis)
and ``FeatureQuoteResponse`` (Ultra) extend ``QuoteResponse`` with a single
optional capability block each.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type

from .exceptions import DecodeError, ValidationError
from .validators import (
    MAX_ACCOUNTS_CAP,
    MAX_FEE_BPS,
    MAX_U64,
    parse_amount,
    parse_decimal,
    validate_range,
    validate_slippage_bps,
)

_NUMBER: Tuple[Type, ...] = (int, float)


# ============================================================================
# DECODING HELPERS
# ============================================================================

def expect_object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(
            f"{where} must be a JSON object, got {type(value).__name__}",
            payload=value,
        )
    return value


def _field(
    data: Dict[str, Any],
    key: str,
    kinds: Tuple[Type, ...],
    where: str,
    required: bool = True,
) -> Any:
    value = data.get(key)
    if value is None:
        if required:
            raise DecodeError(f"{where}: missing required field '{key}'", payload=data)
        return None
    # bool is a subclass of int; keep them apart
    if isinstance(value, bool) and bool not in kinds:
        value_ok = False
    else:
        value_ok = isinstance(value, kinds)
    if not value_ok:
        expected = "/".join(k.__name__ for k in kinds)
        raise DecodeError(
            f"{where}.{key}: expected {expected}, got {type(value).__name__}",
            payload=data,
        )
    return value


def _string_list(data: Dict[str, Any], key: str, where: str, required: bool = False) -> List[str]:
    values = _field(data, key, (list,), where, required=required) or []
    if not all(isinstance(v, str) for v in values):
        raise DecodeError(f"{where}.{key}: expected a list of strings", payload=data)
    return list(values)


def _drop_none(body: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in body.items() if v is not None}


# ============================================================================
# ENUMS
# ============================================================================

class SwapMode(str, Enum):
    """Swap mode for quotes."""
    EXACT_IN = "ExactIn"
    EXACT_OUT = "ExactOut"


class HealthState(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    MAINTENANCE = "maintenance"


# ============================================================================
# ROUTE PLAN
# ============================================================================

@dataclass(frozen=True)
class SwapInfo:
    """One venue hop inside a route."""
    amm_key: str
    label: str
    input_mint: str
    output_mint: str
    in_amount: int
    out_amount: int
    fee_amount: int
    fee_mint: str

    @classmethod
    def from_dict(cls, data: Any, where: str = "swapInfo") -> "SwapInfo":
        data = expect_object(data, where)
        return cls(
            amm_key=_field(data, "ammKey", (str,), where),
            label=_field(data, "label", (str,), where),
            input_mint=_field(data, "inputMint", (str,), where),
            output_mint=_field(data, "outputMint", (str,), where),
            in_amount=parse_amount(_field(data, "inAmount", (str,), where), f"{where}.inAmount"),
            out_amount=parse_amount(_field(data, "outAmount", (str,), where), f"{where}.outAmount"),
            fee_amount=parse_amount(_field(data, "feeAmount", (str,), where), f"{where}.feeAmount"),
            fee_mint=_field(data, "feeMint", (str,), where),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ammKey": self.amm_key,
            "label": self.label,
            "inputMint": self.input_mint,
            "outputMint": self.output_mint,
            "inAmount": str(self.in_amount),
            "outAmount": str(self.out_amount),
            "feeAmount": str(self.fee_amount),
            "feeMint": self.fee_mint,
        }


@dataclass(frozen=True)
class RoutePlan:
    """Single route plan entry: a hop and its share of the input."""
    swap_info: SwapInfo
    percent: int

    @property
    def amm_key(self) -> str:
        return self.swap_info.amm_key

    @property
    def label(self) -> str:
        return self.swap_info.label

    @classmethod
    def from_dict(cls, data: Any, where: str = "routePlan") -> "RoutePlan":
        data = expect_object(data, where)
        percent = _field(data, "percent", (int,), where)
        if not 0 <= percent <= 100:
            raise DecodeError(f"{where}.percent out of range: {percent}", payload=data)
        return cls(
            swap_info=SwapInfo.from_dict(data.get("swapInfo"), f"{where}.swapInfo"),
            percent=percent,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"swapInfo": self.swap_info.to_dict(), "percent": self.percent}


def decode_route_plan(value: Any, strict: bool = True) -> List[RoutePlan]:
    """
    Decode and check a route plan.

    Args:
        value: The ``routePlan`` JSON array
        strict: Require hop percentages to sum to exactly 100

    Raises:
        DecodeError: If the plan is empty, malformed, or (strict) unbalanced
    """
    if not isinstance(value, list):
        raise DecodeError("routePlan must be a JSON array", payload=value)
    if not value:
        raise DecodeError("routePlan is empty; a quote needs at least one hop", payload=value)

    hops = [RoutePlan.from_dict(item, f"routePlan[{i}]") for i, item in enumerate(value)]

    if strict:
        total = sum(hop.percent for hop in hops)
        if total != 100:
            raise DecodeError(
                f"routePlan percentages sum to {total}, expected 100",
                payload=value,
                context={"hops": len(hops)},
            )
    return hops


@dataclass(frozen=True)
class PlatformFee:
    amount: int
    fee_bps: int

    @classmethod
    def from_dict(cls, data: Any) -> "PlatformFee":
        data = expect_object(data, "platformFee")
        return cls(
            amount=parse_amount(_field(data, "amount", (str,), "platformFee"), "platformFee.amount"),
            fee_bps=_field(data, "feeBps", (int,), "platformFee"),
        )


# ============================================================================
# CAPABILITY BLOCKS
# ============================================================================

@dataclass
class OptimizationConfig:
    """Metis route optimization settings."""
    enabled: bool = True
    optimization_level: int = 3
    max_iterations: int = 100
    convergence_threshold: float = 0.001

    def validate(self) -> "OptimizationConfig":
        validate_range(self.optimization_level, "optimization_level", 1, 5)
        if self.max_iterations < 0:
            raise ValidationError("max_iterations must be >= 0", field_name="max_iterations")
        return self

    @classmethod
    def from_dict(cls, data: Any) -> "OptimizationConfig":
        where = "metisOptimization"
        data = expect_object(data, where)
        return cls(
            enabled=_field(data, "enabled", (bool,), where),
            optimization_level=_field(data, "optimizationLevel", (int,), where),
            max_iterations=_field(data, "maxIterations", (int,), where),
            convergence_threshold=float(_field(data, "convergenceThreshold", _NUMBER, where)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "optimizationLevel": self.optimization_level,
            "maxIterations": self.max_iterations,
            "convergenceThreshold": self.convergence_threshold,
        }


@dataclass
class CrossAppState:
    app_id: str
    state_data: Any = None
    sync_required: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "CrossAppState":
        where = "crossAppState"
        data = expect_object(data, where)
        return cls(
            app_id=_field(data, "appId", (str,), where),
            state_data=data.get("stateData"),
            sync_required=_field(data, "syncRequired", (bool,), where),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "appId": self.app_id,
            "stateData": self.state_data,
            "syncRequired": self.sync_required,
        }


@dataclass
class FeatureFlags:
    """Ultra feature toggles."""
    enabled: bool = True
    advanced_routing: bool = False
    mev_protection: bool = False
    gas_optimization: bool = False
    price_impact_optimization: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "FeatureFlags":
        where = "ultraFeatures"
        data = expect_object(data, where)
        return cls(
            enabled=_field(data, "enabled", (bool,), where),
            advanced_routing=_field(data, "advancedRouting", (bool,), where),
            mev_protection=_field(data, "mevProtection", (bool,), where),
            gas_optimization=_field(data, "gasOptimization", (bool,), where),
            price_impact_optimization=_field(data, "priceImpactOptimization", (bool,), where),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "advancedRouting": self.advanced_routing,
            "mevProtection": self.mev_protection,
            "gasOptimization": self.gas_optimization,
            "priceImpactOptimization": self.price_impact_optimization,
        }


@dataclass
class SlippageProtection:
    enabled: bool = True
    max_slippage_bps: int = 100
    price_impact_threshold: float = 1.0
    dynamic_slippage: bool = False

    def validate(self) -> "SlippageProtection":
        validate_slippage_bps(self.max_slippage_bps, field_name="max_slippage_bps")
        return self

    @classmethod
    def from_dict(cls, data: Any) -> "SlippageProtection":
        where = "slippageProtection"
        data = expect_object(data, where)
        return cls(
            enabled=_field(data, "enabled", (bool,), where),
            max_slippage_bps=_field(data, "maxSlippageBps", (int,), where),
            price_impact_threshold=float(_field(data, "priceImpactThreshold", _NUMBER, where)),
            dynamic_slippage=_field(data, "dynamicSlippage", (bool,), where),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "maxSlippageBps": self.max_slippage_bps,
            "priceImpactThreshold": self.price_impact_threshold,
            "dynamicSlippage": self.dynamic_slippage,
        }


# ============================================================================
# QUOTE REQUESTS
# ============================================================================

@dataclass
class QuoteRequest:
    """Parameters for ``GET /quote`` (and the base of the tier POST bodies)."""
    input_mint: str
    output_mint: str
    amount: int
    slippage_bps: int = 50
    swap_mode: Optional[SwapMode] = None
    dexes: Optional[List[str]] = None
    exclude_dexes: Optional[List[str]] = None
    platform_fee_bps: Optional[int] = None
    max_accounts: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.input_mint or not self.output_mint:
            raise ValidationError("input_mint and output_mint are required", field_name="mint")
        if self.amount is None:
            raise ValidationError("amount is required", field_name="amount")
        validate_range(self.amount, "amount", 0, MAX_U64)
        validate_slippage_bps(self.slippage_bps)
        validate_range(self.platform_fee_bps, "platform_fee_bps", 0, MAX_FEE_BPS)
        validate_range(self.max_accounts, "max_accounts", 0, MAX_ACCOUNTS_CAP)
        if self.swap_mode is not None:
            try:
                self.swap_mode = SwapMode(self.swap_mode)
            except ValueError:
                raise ValidationError(
                    f"Unknown swap mode: {self.swap_mode!r}", field_name="swap_mode"
                ) from None

    def to_params(self) -> Dict[str, str]:
        """Query parameters; every value is a string."""
        params: Dict[str, str] = {
            "inputMint": self.input_mint,
            "outputMint": self.output_mint,
            "amount": str(self.amount),
            "slippageBps": str(self.slippage_bps),
        }
        if self.swap_mode is not None:
            params["swapMode"] = self.swap_mode.value
        if self.dexes:
            params["dexes"] = ",".join(self.dexes)
        if self.exclude_dexes:
            params["excludeDexes"] = ",".join(self.exclude_dexes)
        if self.platform_fee_bps is not None:
            params["platformFeeBps"] = str(self.platform_fee_bps)
        if self.max_accounts is not None:
            params["maxAccounts"] = str(self.max_accounts)
        return params

    def to_dict(self) -> Dict[str, Any]:
        """JSON body form used by the tier endpoints."""
        return _drop_none({
            "inputMint": self.input_mint,
            "outputMint": self.output_mint,
            "amount": str(self.amount),
            "slippageBps": self.slippage_bps,
            "swapMode": self.swap_mode.value if self.swap_mode is not None else None,
            "dexes": list(self.dexes) if self.dexes else None,
            "excludeDexes": list(self.exclude_dexes) if self.exclude_dexes else None,
            "platformFeeBps": self.platform_fee_bps,
            "maxAccounts": self.max_accounts,
        })


@dataclass
class OptimizationQuoteRequest(QuoteRequest):
    """Body for ``POST /metis/quote``."""
    optimization: Optional[OptimizationConfig] = None
    cross_app_state: Optional[CrossAppState] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.optimization is not None:
            self.optimization.validate()

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.optimization is not None:
            body["metisOptimization"] = self.optimization.to_dict()
        if self.cross_app_state is not None:
            body["crossAppState"] = self.cross_app_state.to_dict()
        return body


@dataclass
class FeatureQuoteRequest(QuoteRequest):
    """Body for ``POST /ultra/quote``."""
    features: Optional[FeatureFlags] = None
    slippage_protection: Optional[SlippageProtection] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.slippage_protection is not None:
            self.slippage_protection.validate()

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.features is not None:
            body["ultraFeatures"] = self.features.to_dict()
        if self.slippage_protection is not None:
            body["slippageProtection"] = self.slippage_protection.to_dict()
        return body


# ============================================================================
# QUOTE RESPONSES
# ============================================================================

@dataclass
class QuoteResponse:
    """
    Decoded quote with parsed amounts.

    ``raw`` keeps the exact payload the aggregator returned. The swap endpoint
    is stateless and must be given that payload back unmodified, so
    ``to_wire()`` returns it as-is.
    """
    input_mint: str
    in_amount: int
    output_mint: str
    out_amount: int
    other_amount_threshold: int
    swap_mode: str
    slippage_bps: int
    price_impact_pct: Decimal
    route_plan: List[RoutePlan]
    context_slot: int
    time_taken: float
    platform_fee: Optional[PlatformFee] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def price(self) -> float:
        """Effective price (output per input)."""
        if self.in_amount == 0:
            return 0.0
        return self.out_amount / self.in_amount

    @property
    def minimum_received(self) -> int:
        return self.other_amount_threshold

    @property
    def num_hops(self) -> int:
        return len(self.route_plan)

    @property
    def dexes_used(self) -> List[str]:
        return sorted(set(hop.label for hop in self.route_plan))

    @classmethod
    def from_dict(cls, data: Any, strict_routes: bool = True) -> "QuoteResponse":
        data = expect_object(data, "quote")
        return cls(
            **cls._base_fields(data, strict_routes),
            **cls._extension_fields(data),
        )

    @classmethod
    def _base_fields(cls, data: Dict[str, Any], strict_routes: bool) -> Dict[str, Any]:
        where = "quote"
        platform_fee = data.get("platformFee")
        return {
            "input_mint": _field(data, "inputMint", (str,), where),
            "in_amount": parse_amount(_field(data, "inAmount", (str,), where), "inAmount"),
            "output_mint": _field(data, "outputMint", (str,), where),
            "out_amount": parse_amount(_field(data, "outAmount", (str,), where), "outAmount"),
            "other_amount_threshold": parse_amount(
                _field(data, "otherAmountThreshold", (str,), where), "otherAmountThreshold"
            ),
            "swap_mode": _field(data, "swapMode", (str,), where),
            "slippage_bps": _field(data, "slippageBps", (int,), where),
            "price_impact_pct": parse_decimal(
                _field(data, "priceImpactPct", (str,), where), "priceImpactPct"
            ),
            "route_plan": decode_route_plan(data.get("routePlan"), strict=strict_routes),
            "context_slot": _field(data, "contextSlot", (int,), where),
            "time_taken": float(_field(data, "timeTaken", _NUMBER, where)),
            "platform_fee": PlatformFee.from_dict(platform_fee) if platform_fee is not None else None,
            "raw": data,
        }

    @classmethod
    def _extension_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        return {}

    def to_wire(self) -> Dict[str, Any]:
        """The quote as the swap endpoint expects it."""
        if self.raw:
            return self.raw
        body: Dict[str, Any] = {
            "inputMint": self.input_mint,
            "inAmount": str(self.in_amount),
            "outputMint": self.output_mint,
            "outAmount": str(self.out_amount),
            "otherAmountThreshold": str(self.other_amount_threshold),
            "swapMode": self.swap_mode,
            "slippageBps": self.slippage_bps,
            "priceImpactPct": str(self.price_impact_pct),
            "routePlan": [hop.to_dict() for hop in self.route_plan],
            "contextSlot": self.context_slot,
            "timeTaken": self.time_taken,
        }
        if self.platform_fee is not None:
            body["platformFee"] = {
                "amount": str(self.platform_fee.amount),
                "feeBps": self.platform_fee.fee_bps,
            }
        return body


@dataclass
class OptimizationQuoteResponse(QuoteResponse):
    """Metis quote: a standard quote plus the applied optimization block."""
    optimization: Optional[OptimizationConfig] = None
    cross_app_state: Optional[CrossAppState] = None

    @classmethod
    def _extension_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        optimization = data.get("metisOptimization")
        cross_app_state = data.get("crossAppState")
        return {
            "optimization": (
                OptimizationConfig.from_dict(optimization) if optimization is not None else None
            ),
            "cross_app_state": (
                CrossAppState.from_dict(cross_app_state) if cross_app_state is not None else None
            ),
        }


@dataclass
class FeatureQuoteResponse(QuoteResponse):
    """Ultra quote: a standard quote plus feature and slippage-protection blocks."""
    features: Optional[FeatureFlags] = None
    slippage_protection: Optional[SlippageProtection] = None

    @classmethod
    def _extension_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        features = data.get("ultraFeatures")
        protection = data.get("slippageProtection")
        return {
            "features": FeatureFlags.from_dict(features) if features is not None else None,
            "slippage_protection": (
                SlippageProtection.from_dict(protection) if protection is not None else None
            ),
        }


# ============================================================================
# SWAP TRANSACTION
# ============================================================================

@dataclass
class SwapBuildRequest:
    """
    Body for ``POST /swap``.

    The quote is embedded whole. Optional policy flags left as ``None`` are
    omitted so the aggregator applies its own defaults.
    """
    quote: QuoteResponse
    user_public_key: str
    dynamic_compute_unit_limit: Optional[bool] = None
    prioritization_fee_lamports: Optional[int] = None
    as_legacy_transaction: Optional[bool] = None
    use_shared_accounts: Optional[bool] = None
    fee_account: Optional[str] = None
    tracking_account: Optional[str] = None
    compute_unit_price_micro_lamports: Optional[int] = None
    as_versioned_transaction: Optional[bool] = None

    def __post_init__(self) -> None:
        if not self.user_public_key:
            raise ValidationError("user_public_key is required", field_name="user_public_key")
        validate_range(self.prioritization_fee_lamports, "prioritization_fee_lamports", 0, MAX_U64)
        validate_range(
            self.compute_unit_price_micro_lamports, "compute_unit_price_micro_lamports", 0, MAX_U64
        )

    def to_dict(self) -> Dict[str, Any]:
        body = {"quoteResponse": self.quote.to_wire(), "userPublicKey": self.user_public_key}
        body.update(_drop_none({
            "dynamicComputeUnitLimit": self.dynamic_compute_unit_limit,
            "prioritizationFeeLamports": self.prioritization_fee_lamports,
            "asLegacyTransaction": self.as_legacy_transaction,
            "useSharedAccounts": self.use_shared_accounts,
            "feeAccount": self.fee_account,
            "trackingAccount": self.tracking_account,
            "computeUnitPriceMicroLamports": self.compute_unit_price_micro_lamports,
            "asVersionedTransaction": self.as_versioned_transaction,
        }))
        return body


@dataclass
class SwapBuildResponse:
    """Unsigned swap transaction. ``swap_transaction`` is base64 and never decoded here."""
    swap_transaction: str
    last_valid_block_height: int
    prioritization_fee_lamports: int
    compute_unit_limit: int
    prioritization_fee_lamports_per_cu: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "SwapBuildResponse":
        where = "swap"
        data = expect_object(data, where)
        return cls(
            swap_transaction=_field(data, "swapTransaction", (str,), where),
            last_valid_block_height=_field(data, "lastValidBlockHeight", (int,), where),
            prioritization_fee_lamports=_field(data, "prioritizationFeeLamports", (int,), where),
            compute_unit_limit=_field(data, "computeUnitLimit", (int,), where),
            prioritization_fee_lamports_per_cu=_field(
                data, "prioritizationFeeLamportsPerCu", (int,), where, required=False
            ),
        )


# ============================================================================
# TOKENS & PRICES
# ============================================================================

@dataclass
class TokenInfo:
    """Information about a token."""
    address: str
    symbol: str
    name: str
    decimals: int
    chain_id: Optional[int] = None
    logo_uri: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    extensions: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "TokenInfo":
        where = "token"
        data = expect_object(data, where)
        return cls(
            address=_field(data, "address", (str,), where),
            symbol=_field(data, "symbol", (str,), where),
            name=_field(data, "name", (str,), where),
            decimals=_field(data, "decimals", (int,), where),
            chain_id=_field(data, "chainId", (int,), where, required=False),
            logo_uri=_field(data, "logoURI", (str,), where, required=False),
            tags=_string_list(data, "tags", where),
            extensions=_field(data, "extensions", (dict,), where, required=False),
        )


@dataclass
class TokenPrice:
    """Token price snapshot entry."""
    id: str
    price: Decimal
    mint_symbol: Optional[str] = None
    vs_token: Optional[str] = None
    vs_token_symbol: Optional[str] = None

    @classmethod
    def from_dict(cls, mint: str, data: Any) -> "TokenPrice":
        where = f"price[{mint}]"
        data = expect_object(data, where)
        return cls(
            id=_field(data, "id", (str,), where, required=False) or mint,
            price=parse_decimal(_field(data, "price", (str, int, float), where), f"{where}.price"),
            mint_symbol=_field(data, "mintSymbol", (str,), where, required=False),
            vs_token=_field(data, "vsToken", (str,), where, required=False),
            vs_token_symbol=_field(data, "vsTokenSymbol", (str,), where, required=False),
        )


# ============================================================================
# HEALTH & INFO
# ============================================================================

@dataclass
class RateLimitStatus:
    remaining: int
    reset_time: int
    limit: int

    @classmethod
    def from_dict(cls, data: Any) -> "RateLimitStatus":
        where = "rateLimitStatus"
        data = expect_object(data, where)
        return cls(
            remaining=_field(data, "remaining", (int,), where),
            reset_time=_field(data, "resetTime", (int,), where),
            limit=_field(data, "limit", (int,), where),
        )


@dataclass
class HealthStatus:
    status: HealthState
    timestamp: int
    version: str
    uptime: int
    last_error: Optional[str] = None
    rate_limit_status: Optional[RateLimitStatus] = None

    @property
    def is_healthy(self) -> bool:
        return self.status is HealthState.HEALTHY

    @classmethod
    def from_dict(cls, data: Any) -> "HealthStatus":
        where = "health"
        data = expect_object(data, where)
        raw_status = _field(data, "status", (str,), where)
        try:
            status = HealthState(raw_status.lower())
        except ValueError:
            raise DecodeError(f"health.status: unknown value {raw_status!r}", payload=data) from None
        rate_limit = data.get("rateLimitStatus")
        return cls(
            status=status,
            timestamp=_field(data, "timestamp", (int,), where),
            version=_field(data, "version", (str,), where),
            uptime=_field(data, "uptime", (int,), where),
            last_error=_field(data, "lastError", (str,), where, required=False),
            rate_limit_status=RateLimitStatus.from_dict(rate_limit) if rate_limit is not None else None,
        )


@dataclass
class RateLimitInfo:
    requests_per_minute: int
    requests_per_hour: int
    requests_per_day: int

    @classmethod
    def from_dict(cls, data: Any) -> "RateLimitInfo":
        where = "rateLimits"
        data = expect_object(data, where)
        return cls(
            requests_per_minute=_field(data, "requestsPerMinute", (int,), where),
            requests_per_hour=_field(data, "requestsPerHour", (int,), where),
            requests_per_day=_field(data, "requestsPerDay", (int,), where),
        )


@dataclass
class EndpointInfo:
    name: str
    path: str
    method: str
    rate_limit: int

    @classmethod
    def from_dict(cls, data: Any, where: str = "endpoints") -> "EndpointInfo":
        data = expect_object(data, where)
        return cls(
            name=_field(data, "name", (str,), where),
            path=_field(data, "path", (str,), where),
            method=_field(data, "method", (str,), where),
            rate_limit=_field(data, "rateLimit", (int,), where),
        )


@dataclass
class ApiInfo:
    version: str
    api_type: str
    supported_features: List[str]
    rate_limits: RateLimitInfo
    endpoints: List[EndpointInfo]

    @classmethod
    def from_dict(cls, data: Any) -> "ApiInfo":
        where = "info"
        data = expect_object(data, where)
        endpoints = _field(data, "endpoints", (list,), where)
        return cls(
            version=_field(data, "version", (str,), where),
            api_type=_field(data, "apiType", (str,), where),
            supported_features=_string_list(data, "supportedFeatures", where, required=True),
            rate_limits=RateLimitInfo.from_dict(data.get("rateLimits")),
            endpoints=[
                EndpointInfo.from_dict(item, f"endpoints[{i}]") for i, item in enumerate(endpoints)
            ],
        )


__all__ = [
    "SwapMode",
    "HealthState",
    "SwapInfo",
    "RoutePlan",
    "PlatformFee",
    "decode_route_plan",
    "expect_object",
    "OptimizationConfig",
    "CrossAppState",
    "FeatureFlags",
    "SlippageProtection",
    "QuoteRequest",
    "OptimizationQuoteRequest",
    "FeatureQuoteRequest",
    "QuoteResponse",
    "OptimizationQuoteResponse",
    "FeatureQuoteResponse",
    "SwapBuildRequest",
    "SwapBuildResponse",
    "TokenInfo",
    "TokenPrice",
    "RateLimitStatus",
    "HealthStatus",
    "RateLimitInfo",
    "EndpointInfo",
    "ApiInfo",
]
