import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

from .exceptions import MalformedAmount, ValidationError

LAMPORTS_PER_SOL = 1_000_000_000
MAX_U64 = 2**64 - 1

MIN_SLIPPAGE_BPS = 0
MAX_SLIPPAGE_BPS = 10000
MAX_FEE_BPS = 65535
MAX_ACCOUNTS_CAP = 255

_UNSIGNED_INT_RE = re.compile(r"^[0-9]+$")


def parse_amount(value: Any, field_name: str = "amount", max_value: int = MAX_U64) -> int:
    """Parse a decimal-string token amount into an int.

    Only plain unsigned digit strings are accepted; ``"12x3"``, ``"-5"``,
    ``"1e6"`` and ``"1.5"`` all raise ``MalformedAmount``.
    """
    if not isinstance(value, str):
        raise MalformedAmount(
            f"{field_name} must be a decimal string, got {type(value).__name__}",
            field_name=field_name, raw_value=repr(value)[:64]
        )
    candidate = value.strip()
    if not _UNSIGNED_INT_RE.match(candidate):
        raise MalformedAmount(
            f"{field_name} is not an unsigned integer: {value!r}",
            field_name=field_name, raw_value=value[:64]
        )
    amount = int(candidate)
    if amount > max_value:
        raise MalformedAmount(
            f"{field_name} overflows {max_value}: {value}",
            field_name=field_name, raw_value=value[:64]
        )
    return amount


def parse_decimal(value: Any, field_name: str = "value") -> Decimal:
    """Parse a string-encoded decimal such as ``priceImpactPct``."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise MalformedAmount(
            f"{field_name} must be a decimal, got {type(value).__name__}",
            field_name=field_name, raw_value=repr(value)[:64]
        )
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        raise MalformedAmount(
            f"{field_name} is not a decimal: {value!r}",
            field_name=field_name, raw_value=str(value)[:64]
        ) from None
    if not parsed.is_finite():
        raise MalformedAmount(
            f"{field_name} is not finite: {value!r}",
            field_name=field_name, raw_value=str(value)[:64]
        )
    return parsed


def validate_slippage_bps(slippage_bps: Any, field_name: str = "slippage_bps") -> int:
    if isinstance(slippage_bps, bool) or not isinstance(slippage_bps, int):
        raise ValidationError(
            f"Slippage must be an integer number of bps, got {type(slippage_bps).__name__}",
            field_name=field_name
        )
    if not MIN_SLIPPAGE_BPS <= slippage_bps <= MAX_SLIPPAGE_BPS:
        raise ValidationError(
            f"Slippage {slippage_bps} bps outside {MIN_SLIPPAGE_BPS}..{MAX_SLIPPAGE_BPS}",
            field_name=field_name
        )
    return slippage_bps


def validate_range(value: Optional[int], field_name: str, low: int, high: int) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValidationError(f"{field_name} must be an integer in {low}..{high}, got {value!r}",
                              field_name=field_name)
    return value


def percent_to_bps(percent: float) -> int:
    """Convert a slippage percentage to basis points, rounding half up (0.5% -> 50)."""
    try:
        scaled = Decimal(str(percent)) * 100
    except InvalidOperation:
        scaled = None
    if scaled is None or not scaled.is_finite():
        raise ValidationError(f"Slippage percent is not a number: {percent!r}",
                              field_name="slippage_percent")
    try:
        bps = scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"Slippage percent out of range: {percent!r}",
                              field_name="slippage_percent") from None
    return validate_slippage_bps(int(bps), field_name="slippage_percent")


def bps_to_percent(bps: int) -> float:
    return bps / 100


def lamports_to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


__all__ = [
    "LAMPORTS_PER_SOL",
    "MAX_U64",
    "MAX_SLIPPAGE_BPS",
    "MAX_FEE_BPS",
    "MAX_ACCOUNTS_CAP",
    "parse_amount",
    "parse_decimal",
    "validate_slippage_bps",
    "validate_range",
    "percent_to_bps",
    "bps_to_percent",
    "lamports_to_sol",
]
