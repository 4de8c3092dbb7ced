"""Pytest configuration and fixtures."""

import re
from typing import Any, Dict, List, Sequence

import pytest
import pytest_asyncio

from jupiter_bridge.client import JupiterClient
from jupiter_bridge.transport import TransportProfile

# ---------------------------------------------------------------------------
# Test constants
# ---------------------------------------------------------------------------

MINT_A = "So11111111111111111111111111111111111111112"  # wSOL
MINT_B = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"  # USDC
MINT_X = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"  # USDT
USER_KEY = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"

# aioresponses needs regex patterns to match URLs with query params
RE_QUOTE = re.compile(r"https://quote-api\.jup\.ag/v6/quote")
RE_SWAP = re.compile(r"https://quote-api\.jup\.ag/v6/swap$")
RE_TOKENS = re.compile(r"https://quote-api\.jup\.ag/v6/tokens$")
RE_PRICE = re.compile(r"https://quote-api\.jup\.ag/v6/price")
RE_METIS = re.compile(r"https://quote-api\.jup\.ag/v6/metis/quote$")
RE_ULTRA = re.compile(r"https://quote-api\.jup\.ag/v6/ultra/quote$")
RE_HEALTH = re.compile(r"https://quote-api\.jup\.ag/v6/health$")
RE_INFO = re.compile(r"https://quote-api\.jup\.ag/v6/info$")

SWAP_TX = "AQAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAB"


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------

def make_hop(label: str, percent: int, in_amount: str, out_amount: str,
             input_mint: str = MINT_A, output_mint: str = MINT_B) -> Dict[str, Any]:
    return {
        "swapInfo": {
            "ammKey": f"{label}AmmKey1111111111111111111111111111111",
            "label": label,
            "inputMint": input_mint,
            "outputMint": output_mint,
            "inAmount": in_amount,
            "outAmount": out_amount,
            "feeAmount": "25",
            "feeMint": input_mint,
        },
        "percent": percent,
    }


def make_quote_payload(
    percents: Sequence[int] = (60, 40),
    labels: Sequence[str] = ("Raydium", "Orca"),
    in_amount: str = "1000000",
    out_amount: str = "998000",
    **overrides: Any,
) -> Dict[str, Any]:
    """Quote response with one hop per entry in ``percents``."""
    hops: List[Dict[str, Any]] = []
    for label, percent in zip(labels, percents):
        hop_in = str(int(in_amount) * percent // 100)
        hop_out = str(int(out_amount) * percent // 100)
        hops.append(make_hop(label, percent, hop_in, hop_out))

    payload = {
        "inputMint": MINT_A,
        "inAmount": in_amount,
        "outputMint": MINT_B,
        "outAmount": out_amount,
        "otherAmountThreshold": "993010",
        "swapMode": "ExactIn",
        "slippageBps": 50,
        "priceImpactPct": "0.0012",
        "routePlan": hops,
        "contextSlot": 285123456,
        "timeTaken": 0.0123,
    }
    payload.update(overrides)
    return payload


def make_build_payload(prioritization_fee: int = 2_000_000) -> Dict[str, Any]:
    return {
        "swapTransaction": SWAP_TX,
        "lastValidBlockHeight": 265432100,
        "prioritizationFeeLamports": prioritization_fee,
        "computeUnitLimit": 1_400_000,
    }


def find_calls(mocked, method: str, path: str) -> List[Any]:
    """Recorded aioresponses calls for one method and URL path suffix."""
    found = []
    for (call_method, url), calls in mocked.requests.items():
        if call_method == method and url.path.endswith(path):
            found.extend(calls)
    return found


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def quote_payload() -> Dict[str, Any]:
    return make_quote_payload()


@pytest.fixture
def build_payload() -> Dict[str, Any]:
    return make_build_payload()


@pytest.fixture
def metis_payload() -> Dict[str, Any]:
    payload = make_quote_payload()
    payload["metisOptimization"] = {
        "enabled": True,
        "optimizationLevel": 3,
        "maxIterations": 100,
        "convergenceThreshold": 0.001,
    }
    payload["crossAppState"] = {
        "appId": "arb-engine",
        "stateData": {"cursor": 7},
        "syncRequired": False,
    }
    return payload


@pytest.fixture
def ultra_payload() -> Dict[str, Any]:
    payload = make_quote_payload()
    payload["ultraFeatures"] = {
        "enabled": True,
        "advancedRouting": True,
        "mevProtection": True,
        "gasOptimization": False,
        "priceImpactOptimization": True,
    }
    payload["slippageProtection"] = {
        "enabled": True,
        "maxSlippageBps": 100,
        "priceImpactThreshold": 1.0,
        "dynamicSlippage": True,
    }
    return payload


@pytest.fixture
def profile() -> TransportProfile:
    return TransportProfile.public()


@pytest_asyncio.fixture
async def client(profile):
    """Jupiter client on the public tier; closed after the test."""
    jupiter = JupiterClient(profile)
    yield jupiter
    await jupiter.close()

