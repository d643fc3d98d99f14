# jupswap

An asyncio client for the Jupiter swap aggregator HTTP API. It asks for
quotes, requests serialized swap transactions and fetches the individual
swap instructions, mapping every request and response onto plain Python
dataclasses.

## Installation

```
pip install jupswap
```

## Usage

```python
import asyncio

from jupswap.client import JupiterSwapApiClient, RequestFailedError
from jupswap.pubkey import Pubkey
from jupswap.quote import QuoteRequest
from jupswap.swap import SwapRequest
from jupswap.transaction_config import TransactionConfig

NATIVE_MINT = Pubkey.from_base58("So11111111111111111111111111111111111111112")


async def demo(base_url: str, output_mint: Pubkey, wallet: Pubkey) -> None:
    client = JupiterSwapApiClient(base_url, timeout=10.0)

    # GET {base_url}/quote
    quote = await client.quote(
        QuoteRequest(
            input_mint=NATIVE_MINT,
            output_mint=output_mint,
            amount=1_000_000,
            slippage_bps=50,
            dexes="Whirlpool,Meteora DLMM,Raydium CLMM",
        )
    )
    print(quote.out_amount, [step.swap_info.label for step in quote.route_plan])

    request = SwapRequest(
        user_public_key=wallet,
        quote_response=quote,
        config=TransactionConfig(),
    )

    # POST {base_url}/swap: serialized transaction bytes
    try:
        swap = await client.swap(request, None)
    except RequestFailedError as exc:
        print("swap rejected:", exc.status, exc.body)
        return
    print("raw transaction length:", len(swap.swap_transaction))

    # POST {base_url}/swap-instructions: the same swap as separate instructions
    instructions = await client.swap_instructions(request)
    print(instructions.swap_instruction.program_id.to_base58())
```

`JupiterSwapApiClient(base_path, timeout=None)` opens a fresh HTTP
connection for each call; a `timeout` of `None` waits without limit.
`swap` takes an optional mapping of extra query arguments.

### Modules and main types

- `jupswap.quote`
  - `QuoteRequest` – quote parameters (mints, amount, slippage, `SwapMode`,
    DEX filters, routing options). `query_params()` gives the query pairs
    sent to the endpoint, leaving out options that are `None`;
    `quote_args` holds extra arguments, returned by `extra_params()` and
    sent after the regular ones.
  - `QuoteResponse` – amounts, swap mode, slippage, `PlatformFee`, price
    impact (a `Decimal`) and the `route_plan`. `to_dict()` / `from_dict()`
    convert to and from the API's JSON.
  - `SwapMode.parse(text)` accepts `"ExactIn"` or `"ExactOut"`.
- `jupswap.route_plan` – `RoutePlanStep` and `SwapInfo`, with
  `route_plan_to_list` / `route_plan_from_list`.
- `jupswap.transaction_config` – `TransactionConfig`, how the swap
  transaction is built: SOL wrapping, fee, destination and tracking
  accounts, compute unit price (an integer or `"auto"`), prioritization fee
  (`AutoFee`, `Lamports`, `AutoMultiplier`, `JitoTipLamports`,
  `PriorityLevelWithMaxLamports` with a `PriorityLevel`, `DisabledFee`),
  `DynamicSlippageSettings`, `KeyedUiAccount` entries and more. Keys
  missing from `from_dict()` input take the defaults.
- `jupswap.swap`
  - `SwapRequest` – user key, quote and config; the config's fields are
    written alongside the other two in `to_dict()`.
  - `SwapResponse` – the decoded transaction bytes plus last valid block
    height, fee, compute unit limit, prioritization type
    (`JitoPrioritization` or `ComputeBudgetPrioritization`),
    `DynamicSlippageReport` and `UiSimulationError`.
  - `SwapInstructionsResponse` – token ledger, compute budget, setup, swap,
    cleanup and other `Instruction`s (each with `AccountMeta`s and raw
    data bytes) and the address lookup table addresses.
  - `encode_base64` / `decode_base64` for the binary payloads.
- `jupswap.pubkey` – `Pubkey`, a 32-byte key with `from_base58` /
  `to_base58`, and the `b58encode` / `b58decode` helpers.
- `jupswap.serde_helpers` – reading and writing values carried as JSON
  strings; malformed values raise `FieldParseError` (a `ValueError`).

### Errors

Every failure of a client call raises a subclass of
`jupswap.client.ClientError`:

- `RequestFailedError` – the server answered with a status outside 2xx;
  it carries `status`, `reason` and the response `body`.
- `DeserializationError` – the request could not be sent, or the response
  body could not be read as the expected JSON; the underlying exception is
  in `cause`.

## Command line

```
jupswap [BASE_URL]
```

quotes 1 USDC (1,000,000 base units) to SOL with 50 bps slippage over the
Whirlpool, Meteora DLMM and Raydium CLMM DEXes, requests the swap
transaction and the swap instructions for a fixed made-up wallet key, and
prints each result. The base URL is the argument, or the `API_BASE_URL`
environment variable when the argument is left out; one of them is
required. On a `ClientError` the message goes to standard error and the
exit status is 1.

## What it does not do

The package only talks to the swap API. It does not deserialize, sign or
send transactions, and has no RPC client: signing the returned
`swap_transaction` bytes and submitting them to a cluster is left to other
tools.

## Development

```
pip install -e ".[test]"
pytest
```