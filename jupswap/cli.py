"""Command that quotes a swap, builds it and fetches its instructions."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import Optional, Sequence

from .client import ClientError, JupiterSwapApiClient
from .pubkey import Pubkey
from .quote import QuoteRequest, QuoteResponse
from .swap import SwapInstructionsResponse, SwapRequest, SwapResponse
from .transaction_config import TransactionConfig

USDC_MINT = Pubkey.from_base58("EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v")
NATIVE_MINT = Pubkey.from_base58("So11111111111111111111111111111111111111112")
TEST_WALLET = Pubkey(bytes([1]) * 32)


async def run(
    api_base_url: str,
) -> tuple[QuoteResponse, SwapResponse, SwapInstructionsResponse]:
    """Quote USDC to SOL, request the swap and its instructions, printing each."""
    print(f"Using base url: {api_base_url}")
    client = JupiterSwapApiClient(api_base_url)

    quote_request = QuoteRequest(
        amount=1_000_000,
        input_mint=USDC_MINT,
        output_mint=NATIVE_MINT,
        dexes="Whirlpool,Meteora DLMM,Raydium CLMM",
        slippage_bps=50,
    )
    quote_response = await client.quote(quote_request)
    print(quote_response)

    swap_response = await client.swap(
        SwapRequest(
            user_public_key=TEST_WALLET,
            quote_response=quote_response,
            config=TransactionConfig(),
        ),
        None,
    )
    print(f"Raw tx len: {len(swap_response.swap_transaction)}")

    swap_instructions = await client.swap_instructions(
        SwapRequest(
            user_public_key=TEST_WALLET,
            quote_response=quote_response,
            config=TransactionConfig(),
        )
    )
    print(f"swap_instructions: {swap_instructions}")
    return quote_response, swap_response, swap_instructions


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point; the base URL comes from the argument or API_BASE_URL."""
    parser = argparse.ArgumentParser(prog="jupswap", description=__doc__)
    parser.add_argument(
        "base_url",
        nargs="?",
        default=os.environ.get("API_BASE_URL"),
        help="API base URL (default: $API_BASE_URL)",
    )
    args = parser.parse_args(argv)
    if not args.base_url:
        parser.error("an API base URL is required (argument or API_BASE_URL)")
    try:
        asyncio.run(run(args.base_url))
    except ClientError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())