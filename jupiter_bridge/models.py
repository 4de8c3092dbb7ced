"""
Swap intent and outcome exchanged with the trading engine.

These are the orchestrator's own types: slippage is a percentage here (the
wire uses bps) and fees are reported in SOL.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from .schemas import QuoteResponse


@dataclass(frozen=True)
class SwapIntent:
    """
    A request to swap, as produced by the arbitrage engine.

    Attributes:
        input_mint: Mint being sold
        output_mint: Mint being bought
        amount: Input amount in base units
        user_public_key: Signer's public key
        slippage_percent: Tolerated slippage in percent (0.5 = 0.5%)
        priority_fee_lamports: Prioritization fee in lamports
        allowed_dexes: Only route through these venues
        excluded_dexes: Never route through these venues
    """
    input_mint: str
    output_mint: str
    amount: int
    user_public_key: str
    slippage_percent: float
    priority_fee_lamports: int = 0
    allowed_dexes: Optional[List[str]] = None
    excluded_dexes: Optional[List[str]] = None


@dataclass(frozen=True)
class SwapOutcome:
    """
    Result of ``SwapOrchestrator.execute_swap``.

    ``actual_profit``, ``execution_time_ms`` and ``bundle_id`` stay ``None``
    until the settlement collaborator confirms the transaction on chain and
    calls ``with_settlement``.
    """
    transaction: str
    success: bool
    fee_sol: float
    quote: QuoteResponse
    error_message: str = ""
    actual_profit: Optional[float] = None
    execution_time_ms: Optional[int] = None
    bundle_id: Optional[str] = None

    @property
    def is_settled(self) -> bool:
        return self.bundle_id is not None

    def with_settlement(
        self,
        actual_profit: float,
        execution_time_ms: int,
        bundle_id: str,
    ) -> "SwapOutcome":
        """Copy of this outcome with the on-chain results filled in."""
        return replace(
            self,
            actual_profit=actual_profit,
            execution_time_ms=execution_time_ms,
            bundle_id=bundle_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transaction": self.transaction,
            "success": self.success,
            "error_message": self.error_message,
            "actual_profit": self.actual_profit,
            "fee_sol": self.fee_sol,
            "execution_time_ms": self.execution_time_ms,
            "bundle_id": self.bundle_id,
            "quote": self.quote.to_wire(),
        }


__all__ = ["SwapIntent", "SwapOutcome"]
