import json
from decimal import Decimal

import httpx
import pytest
import respx

from jupswap.client import (
    ClientError,
    DeserializationError,
    JupiterSwapApiClient,
    RequestFailedError,
)
from jupswap.pubkey import Pubkey
from jupswap.quote import QuoteRequest, QuoteResponse, SwapMode
from jupswap.route_plan import RoutePlanStep, SwapInfo
from jupswap.swap import (
    JitoPrioritization,
    SwapInstructionsResponse,
    SwapRequest,
    SwapResponse,
    encode_base64,
)
from jupswap.transaction_config import TransactionConfig

BASE = "http://api.test/v6"


def key(n):
    return Pubkey(bytes([n]) * 32)


def make_quote():
    return QuoteResponse(
        input_mint=key(1),
        in_amount=1000,
        output_mint=key(2),
        out_amount=900,
        other_amount_threshold=850,
        swap_mode=SwapMode.EXACT_IN,
        slippage_bps=50,
        platform_fee=None,
        price_impact_pct=Decimal("0.01"),
        route_plan=[
            RoutePlanStep(
                swap_info=SwapInfo(
                    amm_key=key(3),
                    label="Whirlpool",
                    input_mint=key(1),
                    output_mint=key(2),
                    in_amount=1000,
                    out_amount=900,
                    fee_amount=1,
                    fee_mint=key(1),
                ),
                percent=100,
            )
        ],
        context_slot=7,
        time_taken=0.5,
    )


def instruction_json(program, data):
    return {
        "programId": str(program),
        "accounts": [{"pubkey": str(key(9)), "isSigner": True, "isWritable": False}],
        "data": encode_base64(data),
    }


@pytest.mark.asyncio
async def test_quote_sends_params_and_decodes():
    quote = make_quote()
    request = QuoteRequest(
        input_mint=key(1),
        output_mint=key(2),
        amount=1000,
        slippage_bps=50,
        quote_args={"extra": "yes"},
    )
    with respx.mock:
        route = respx.get(f"{BASE}/quote").mock(
            return_value=httpx.Response(200, json=quote.to_dict())
        )
        result = await JupiterSwapApiClient(BASE).quote(request)
    assert result == quote
    params = route.calls.last.request.url.params
    assert params["inputMint"] == str(key(1))
    assert params["amount"] == "1000"
    assert params["slippageBps"] == "50"
    assert params["extra"] == "yes"
    keys = list(params.keys())
    assert keys[-1] == "extra"
    assert "swapMode" not in params


@pytest.mark.asyncio
async def test_quote_failure_status_raises_request_failed():
    with respx.mock:
        respx.get(f"{BASE}/quote").mock(return_value=httpx.Response(400, text="bad mint"))
        with pytest.raises(RequestFailedError) as info:
            await JupiterSwapApiClient(BASE).quote(QuoteRequest())
    assert info.value.status == 400
    assert info.value.body == "bad mint"
    assert str(info.value).startswith("Request failed with status 400")
    assert isinstance(info.value, ClientError)


@pytest.mark.asyncio
async def test_quote_bad_json_raises_deserialization_error():
    with respx.mock:
        respx.get(f"{BASE}/quote").mock(return_value=httpx.Response(200, text="not json"))
        with pytest.raises(DeserializationError) as info:
            await JupiterSwapApiClient(BASE).quote(QuoteRequest())
    assert str(info.value).startswith("Failed to deserialize response")


@pytest.mark.asyncio
async def test_quote_missing_field_raises_deserialization_error():
    body = make_quote().to_dict()
    del body["inputMint"]
    with respx.mock:
        respx.get(f"{BASE}/quote").mock(return_value=httpx.Response(200, json=body))
        with pytest.raises(DeserializationError):
            await JupiterSwapApiClient(BASE).quote(QuoteRequest())


@pytest.mark.asyncio
async def test_transport_error_raises_deserialization_error():
    with respx.mock:
        respx.get(f"{BASE}/quote").mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(DeserializationError):
            await JupiterSwapApiClient(BASE).quote(QuoteRequest())


@pytest.mark.asyncio
async def test_swap_posts_flattened_body_and_extra_args():
    quote = make_quote()
    response = SwapResponse(
        swap_transaction=b"\x01\x02\x03",
        last_valid_block_height=10,
        prioritization_fee_lamports=5,
        compute_unit_limit=200,
        prioritization_type=JitoPrioritization(lamports=5),
    )
    request = SwapRequest(user_public_key=key(4), quote_response=quote)
    with respx.mock:
        route = respx.post(f"{BASE}/swap").mock(
            return_value=httpx.Response(200, json=response.to_dict())
        )
        result = await JupiterSwapApiClient(BASE).swap(request, {"mode": "fast"})
    assert result == response
    sent = route.calls.last.request
    assert sent.url.params["mode"] == "fast"
    body = json.loads(sent.content)
    assert body["userPublicKey"] == str(key(4))
    assert body["wrapAndUnwrapSol"] is True
    assert QuoteResponse.from_dict(body["quoteResponse"]) == quote
    assert TransactionConfig.from_dict(body) == TransactionConfig()


@pytest.mark.asyncio
async def test_swap_without_extra_args_has_no_query():
    response = SwapResponse(
        swap_transaction=b"tx",
        last_valid_block_height=1,
        prioritization_fee_lamports=0,
        compute_unit_limit=1,
    )
    with respx.mock:
        route = respx.post(f"{BASE}/swap").mock(
            return_value=httpx.Response(200, json=response.to_dict())
        )
        result = await JupiterSwapApiClient(BASE).swap(
            SwapRequest(user_public_key=key(4), quote_response=make_quote()), None
        )
    assert result.swap_transaction == b"tx"
    assert len(route.calls.last.request.url.params) == 0


@pytest.mark.asyncio
async def test_swap_instructions_decodes_instructions():
    body = {
        "tokenLedgerInstruction": None,
        "computeBudgetInstructions": [instruction_json(key(5), b"cb")],
        "setupInstructions": [],
        "swapInstruction": instruction_json(key(6), b"swap"),
        "cleanupInstruction": instruction_json(key(7), b"clean"),
        "otherInstructions": [],
        "addressLookupTableAddresses": [str(key(8))],
        "prioritizationFeeLamports": 3,
        "computeUnitLimit": 400,
        "prioritizationType": None,
        "dynamicSlippageReport": None,
        "simulationError": None,
    }
    with respx.mock:
        route = respx.post(f"{BASE}/swap-instructions").mock(
            return_value=httpx.Response(200, json=body)
        )
        result = await JupiterSwapApiClient(BASE).swap_instructions(
            SwapRequest(user_public_key=key(4), quote_response=make_quote())
        )
    assert isinstance(result, SwapInstructionsResponse)
    assert result.swap_instruction.program_id == key(6)
    assert result.swap_instruction.data == b"swap"
    assert result.swap_instruction.accounts[0].pubkey == key(9)
    assert result.cleanup_instruction.data == b"clean"
    assert result.token_ledger_instruction is None
    assert result.address_lookup_table_addresses == [key(8)]
    assert result.compute_unit_limit == 400
    assert json.loads(route.calls.last.request.content)["userPublicKey"] == str(key(4))


@pytest.mark.asyncio
async def test_swap_instructions_server_error():
    with respx.mock:
        respx.post(f"{BASE}/swap-instructions").mock(
            return_value=httpx.Response(500, text="boom")
        )
        with pytest.raises(RequestFailedError) as info:
            await JupiterSwapApiClient(BASE).swap_instructions(
                SwapRequest(user_public_key=key(4), quote_response=make_quote())
            )
    assert info.value.status == 500
    assert info.value.body == "boom"