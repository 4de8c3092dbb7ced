"""
Quote-then-build swap orchestration.

``execute_swap`` turns a ``SwapIntent`` into an unsigned transaction in two
calls: a quote, then a build request that embeds that quote. The two calls
are not atomic; if the build fails the quote is simply dropped and the error
propagates to the caller.
"""

import logging

from .client import JupiterClient
from .models import SwapIntent, SwapOutcome
from .schemas import QuoteRequest, SwapBuildRequest, SwapMode
from .validators import lamports_to_sol, percent_to_bps

logger = logging.getLogger(__name__)

MAX_ROUTE_ACCOUNTS = 64


class SwapOrchestrator:
    """
    Runs swap intents from the trading engine against one Jupiter client.

    Example:
        async with JupiterClient(TransportProfile.pro(api_key)) as jupiter:
            outcome = await SwapOrchestrator(jupiter).execute_swap(intent)
            settle(outcome.transaction)
    """

    def __init__(self, client: JupiterClient):
        self.client = client

    def build_quote_request(self, intent: SwapIntent) -> QuoteRequest:
        return QuoteRequest(
            input_mint=intent.input_mint,
            output_mint=intent.output_mint,
            amount=intent.amount,
            slippage_bps=percent_to_bps(intent.slippage_percent),
            swap_mode=SwapMode.EXACT_IN,
            dexes=intent.allowed_dexes,
            exclude_dexes=intent.excluded_dexes,
            max_accounts=MAX_ROUTE_ACCOUNTS,
        )

    async def execute_swap(self, intent: SwapIntent) -> SwapOutcome:
        """
        Quote an intent and build its unsigned swap transaction.

        Args:
            intent: Swap request from the arbitrage engine

        Returns:
            SwapOutcome carrying the transaction payload and the quote it was
            built from; settlement fields are left empty

        Raises:
            Any BridgeError from either call, unchanged
        """
        quote_request = self.build_quote_request(intent)

        logger.info(
            f"Executing swap: {intent.amount} {intent.input_mint} -> {intent.output_mint} "
            f"(slippage {quote_request.slippage_bps} bps)"
        )

        quote = await self.client.get_quote(quote_request)

        logger.info(
            f"Quote: {quote.in_amount} -> {quote.out_amount} "
            f"via {', '.join(quote.dexes_used)} ({quote.num_hops} hops)"
        )

        build_request = SwapBuildRequest(
            quote=quote,
            user_public_key=intent.user_public_key,
            dynamic_compute_unit_limit=True,
            prioritization_fee_lamports=intent.priority_fee_lamports,
            as_legacy_transaction=False,
            use_shared_accounts=True,
            as_versioned_transaction=True,
        )
        swap = await self.client.get_swap_transaction(build_request)

        fee_sol = lamports_to_sol(swap.prioritization_fee_lamports)
        logger.info(
            f"Swap transaction built: fee {fee_sol:.9f} SOL, "
            f"valid until block {swap.last_valid_block_height}"
        )

        return SwapOutcome(
            transaction=swap.swap_transaction,
            success=True,
            fee_sol=fee_sol,
            quote=quote,
        )


__all__ = ["SwapOrchestrator", "MAX_ROUTE_ACCOUNTS"]
