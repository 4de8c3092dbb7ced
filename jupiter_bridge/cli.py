"""
Command-line entry point.

Each subcommand runs exactly one endpoint operation against the configured
tier and prints a short summary. Exit codes: 0 on success, 1 for API and
transport failures, 2 for configuration errors.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import pydantic
from pydantic import SecretStr

from . import __version__
from .client import JupiterClient
from .config import JupiterSettings, get_settings
from .exceptions import BridgeError, ConfigurationError
from .logging_setup import configure_logging
from .schemas import (
    FeatureFlags,
    FeatureQuoteRequest,
    OptimizationConfig,
    OptimizationQuoteRequest,
    QuoteRequest,
    QuoteResponse,
    SlippageProtection,
)
from .transport import ApiTier

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_CONFIG_ERROR = 2

DEFAULT_AMOUNT = 1_000_000
DEFAULT_SLIPPAGE_BPS = 50


# =============================================================================
# ARGUMENTS
# =============================================================================

def _add_quote_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input-mint", required=True, help="Mint being sold")
    parser.add_argument("--output-mint", required=True, help="Mint being bought")
    parser.add_argument(
        "--amount",
        type=int,
        default=DEFAULT_AMOUNT,
        help=f"Input amount in base units (default: {DEFAULT_AMOUNT})"
    )
    parser.add_argument(
        "--slippage-bps",
        type=int,
        default=DEFAULT_SLIPPAGE_BPS,
        help=f"Slippage tolerance in bps (default: {DEFAULT_SLIPPAGE_BPS})"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jupiter-bridge",
        description="Jupiter aggregator client"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--tier",
        choices=[tier.value for tier in ApiTier],
        help="Access tier (overrides JUPITER_TIER)"
    )
    parser.add_argument("--api-key", help="API key (overrides JUPITER_API_KEY)")
    parser.add_argument("--base-url", help="Base URL (overrides JUPITER_API_URL)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Check aggregator health")
    subparsers.add_parser("info", help="Show API information")

    quote = subparsers.add_parser("quote", help="Get a standard quote")
    _add_quote_arguments(quote)

    metis = subparsers.add_parser("metis-quote", help="Get a Metis optimized quote")
    _add_quote_arguments(metis)

    ultra = subparsers.add_parser("ultra-quote", help="Get an Ultra quote")
    _add_quote_arguments(ultra)

    return parser


def resolve_jupiter_settings(args: argparse.Namespace) -> JupiterSettings:
    """Environment settings with command-line overrides applied."""
    jupiter = get_settings().jupiter
    update = {}
    if args.tier:
        update["tier"] = ApiTier(args.tier)
    if args.api_key:
        update["api_key"] = SecretStr(args.api_key)
    if args.base_url:
        update["api_url"] = args.base_url
    return jupiter.model_copy(update=update)


# =============================================================================
# OUTPUT
# =============================================================================

def _print_quote(quote: QuoteResponse) -> None:
    print(f"  Input: {quote.in_amount} {quote.input_mint} tokens")
    print(f"  Output: {quote.out_amount} {quote.output_mint} tokens")
    print(f"  Price impact: {float(quote.price_impact_pct):.2f}%")
    print(f"  Time taken: {quote.time_taken:.2f}ms")
    print(f"  Route: {quote.num_hops} steps ({', '.join(quote.dexes_used)})")


# =============================================================================
# COMMANDS
# =============================================================================

async def run_command(args: argparse.Namespace, client: JupiterClient) -> None:
    command = args.command

    if command == "health":
        health = await client.get_health()
        print("Jupiter API Health Status:")
        print(f"  Status: {health.status.value}")
        print(f"  Version: {health.version}")
        print(f"  Uptime: {health.uptime} seconds")
        if health.last_error:
            print(f"  Last error: {health.last_error}")
        if health.rate_limit_status:
            limits = health.rate_limit_status
            print(f"  Rate limit: {limits.remaining}/{limits.limit} remaining")

    elif command == "info":
        info = await client.get_api_info()
        print("Jupiter API Information:")
        print(f"  Version: {info.version}")
        print(f"  API Type: {info.api_type}")
        print(f"  Supported features: {', '.join(info.supported_features)}")
        limits = info.rate_limits
        print(
            f"  Rate limits: {limits.requests_per_minute}/min, "
            f"{limits.requests_per_hour}/hour, {limits.requests_per_day}/day"
        )
        print(f"  Available endpoints: {len(info.endpoints)}")
        for endpoint in info.endpoints:
            print(f"    {endpoint.method} {endpoint.path} - {endpoint.rate_limit} req/min")

    elif command == "quote":
        quote = await client.get_quote(QuoteRequest(
            input_mint=args.input_mint,
            output_mint=args.output_mint,
            amount=args.amount,
            slippage_bps=args.slippage_bps,
        ))
        print("Jupiter quote received:")
        _print_quote(quote)

    elif command == "metis-quote":
        quote = await client.get_optimization_quote(OptimizationQuoteRequest(
            input_mint=args.input_mint,
            output_mint=args.output_mint,
            amount=args.amount,
            slippage_bps=args.slippage_bps,
            optimization=OptimizationConfig(
                enabled=True,
                optimization_level=3,
                max_iterations=100,
                convergence_threshold=0.001,
            ),
        ))
        print("Metis quote received:")
        _print_quote(quote)
        if quote.optimization:
            print(
                f"  Metis optimization: level {quote.optimization.optimization_level}, "
                f"{quote.optimization.max_iterations} iterations"
            )

    elif command == "ultra-quote":
        quote = await client.get_feature_quote(FeatureQuoteRequest(
            input_mint=args.input_mint,
            output_mint=args.output_mint,
            amount=args.amount,
            slippage_bps=args.slippage_bps,
            features=FeatureFlags(
                enabled=True,
                advanced_routing=True,
                mev_protection=True,
                gas_optimization=True,
                price_impact_optimization=True,
            ),
            slippage_protection=SlippageProtection(
                enabled=True,
                max_slippage_bps=100,
                price_impact_threshold=1.0,
                dynamic_slippage=True,
            ),
        ))
        print("Ultra quote received:")
        _print_quote(quote)
        if quote.features:
            print(
                f"  Ultra features: MEV protection: {quote.features.mev_protection}, "
                f"Gas optimization: {quote.features.gas_optimization}"
            )

    else:
        raise ValueError(f"Unknown command: {command}")


async def _main_async(args: argparse.Namespace, jupiter: JupiterSettings) -> None:
    profile = jupiter.to_profile()
    logger.debug(f"Using profile {profile.describe()}")

    async with JupiterClient(profile, strict_routes=jupiter.strict_routes) as client:
        await run_command(args, client)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        if args.debug:
            settings = settings.model_copy(update={"debug": True})
        configure_logging(settings)
        jupiter = resolve_jupiter_settings(args)
        asyncio.run(_main_async(args, jupiter))

    except pydantic.ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    except BridgeError as e:
        category = getattr(e, "category", type(e).__name__)
        print(f"Error [{category}]: {e.message}", file=sys.stderr)
        return EXIT_API_ERROR

    return EXIT_OK


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
