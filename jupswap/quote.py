"""Quote requests and the quotes the API returns."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from .pubkey import Pubkey
from .route_plan import (
    RoutePlanStep,
    _mapping,
    _parse_u64,
    _require,
    route_plan_from_list,
    route_plan_to_list,
)
from .serde_helpers import FieldParseError, field_from_string, field_to_string
from .transaction_config import _boolean, _uint


class SwapMode(str, enum.Enum):
    """Whether the input or the output amount is exact."""

    EXACT_IN = "ExactIn"
    EXACT_OUT = "ExactOut"

    @classmethod
    def parse(cls, text: str) -> "SwapMode":
        """Parse the wire name of a swap mode."""
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"{text} is not a valid SwapMode") from None


def _swap_mode_from_json(value: Any) -> SwapMode:
    if not isinstance(value, str):
        raise FieldParseError(f"invalid type for `swapMode`: expected a string, got {value!r}")
    try:
        return SwapMode(value)
    except ValueError:
        raise FieldParseError(
            f"unknown variant `{value}`, expected `ExactIn` or `ExactOut`"
        ) from None


def _decimal_to_json(value: Decimal) -> str:
    return format(Decimal(value), "f")


def _decimal_from_json(value: Any, what: str) -> Decimal:
    if isinstance(value, bool):
        raise FieldParseError(f"invalid type for `{what}`: expected a decimal")
    if isinstance(value, (int, float)):
        text = str(value)
    elif isinstance(value, str):
        text = value
    else:
        raise FieldParseError(f"invalid type for `{what}`: expected a decimal")
    try:
        number = Decimal(text)
    except InvalidOperation:
        raise FieldParseError(f"invalid decimal for `{what}`: {value!r}") from None
    if not number.is_finite():
        raise FieldParseError(f"invalid decimal for `{what}`: {value!r}")
    return number


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FieldParseError(f"invalid type for `{what}`: expected a number, got {value!r}")
    return float(value)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


@dataclass
class ComputeUnitScore:
    """Use the compute unit score to pick a route."""

    max_penalty_bps: Optional[float] = None


@dataclass
class QuoteRequest:
    """Parameters of a quote; amounts are in the token's smallest unit."""

    input_mint: Pubkey = field(default_factory=Pubkey)
    output_mint: Pubkey = field(default_factory=Pubkey)
    amount: int = 0
    swap_mode: Optional[SwapMode] = None
    slippage_bps: int = 0
    auto_slippage: Optional[bool] = None
    max_auto_slippage_bps: Optional[int] = None
    compute_auto_slippage: bool = False
    auto_slippage_collision_usd_value: Optional[int] = None
    minimize_slippage: Optional[bool] = None
    platform_fee_bps: Optional[int] = None
    dexes: Optional[str] = None
    excluded_dexes: Optional[str] = None
    only_direct_routes: Optional[bool] = None
    as_legacy_transaction: Optional[bool] = None
    restrict_intermediate_tokens: Optional[bool] = None
    max_accounts: Optional[int] = None
    quote_type: Optional[str] = None
    quote_args: Optional[dict[str, str]] = None
    prefer_liquid_dexes: Optional[bool] = None
    compute_unit_score: Optional[ComputeUnitScore] = None
    routing_constraints: Optional[str] = None
    token_category_based_intermediate_tokens: Optional[bool] = None

    def query_params(self) -> list[tuple[str, str]]:
        """The query string pairs sent to the quote endpoint; unset options are left out."""
        pairs = [
            ("inputMint", field_to_string(self.input_mint)),
            ("outputMint", field_to_string(self.output_mint)),
            ("amount", field_to_string(self.amount)),
            ("swapMode", self.swap_mode),
            ("slippageBps", self.slippage_bps),
            ("autoSlippage", self.auto_slippage),
            ("maxAutoSlippageBps", self.max_auto_slippage_bps),
            ("computeAutoSlippage", self.compute_auto_slippage),
            ("autoSlippageCollisionUsdValue", self.auto_slippage_collision_usd_value),
            ("minimizeSlippage", self.minimize_slippage),
            ("platformFeeBps", self.platform_fee_bps),
            ("dexes", self.dexes),
            ("excludedDexes", self.excluded_dexes),
            ("onlyDirectRoutes", self.only_direct_routes),
            ("asLegacyTransaction", self.as_legacy_transaction),
            ("restrictIntermediateTokens", self.restrict_intermediate_tokens),
            ("maxAccounts", self.max_accounts),
            ("quoteType", self.quote_type),
            ("preferLiquidDexes", self.prefer_liquid_dexes),
        ]
        return [(key, _query_value(value)) for key, value in pairs if value is not None]

    def extra_params(self) -> list[tuple[str, str]]:
        """The quote type specific arguments, sent after the regular parameters."""
        if not self.quote_args:
            return []
        return [(str(key), str(value)) for key, value in self.quote_args.items()]


@dataclass
class PlatformFee:
    amount: int
    fee_bps: int

    def to_dict(self) -> dict[str, Any]:
        return {"amount": field_to_string(self.amount), "feeBps": self.fee_bps}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlatformFee":
        data = _mapping(data, "PlatformFee")
        return cls(
            amount=field_from_string(_require(data, "amount"), _parse_u64),
            fee_bps=_uint(_require(data, "feeBps"), 8, "feeBps"),
        )


@dataclass
class QuoteResponse:
    """A quote for a swap, with the route it takes."""

    input_mint: Pubkey
    in_amount: int
    output_mint: Pubkey
    out_amount: int
    other_amount_threshold: int
    swap_mode: SwapMode
    slippage_bps: int
    platform_fee: Optional[PlatformFee]
    price_impact_pct: Decimal
    route_plan: list[RoutePlanStep]
    computed_auto_slippage: Optional[int] = None
    uses_quote_minimizing_slippage: Optional[bool] = None
    context_slot: int = 0
    time_taken: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "inputMint": field_to_string(self.input_mint),
            "inAmount": field_to_string(self.in_amount),
            "outputMint": field_to_string(self.output_mint),
            "outAmount": field_to_string(self.out_amount),
            "otherAmountThreshold": field_to_string(self.other_amount_threshold),
            "swapMode": SwapMode(self.swap_mode).value,
            "slippageBps": self.slippage_bps,
        }
        if self.computed_auto_slippage is not None:
            out["computedAutoSlippage"] = self.computed_auto_slippage
        if self.uses_quote_minimizing_slippage is not None:
            out["usesQuoteMinimizingSlippage"] = self.uses_quote_minimizing_slippage
        out["platformFee"] = None if self.platform_fee is None else self.platform_fee.to_dict()
        out["priceImpactPct"] = _decimal_to_json(self.price_impact_pct)
        out["routePlan"] = route_plan_to_list(self.route_plan)
        out["contextSlot"] = self.context_slot
        out["timeTaken"] = self.time_taken
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QuoteResponse":
        data = _mapping(data, "QuoteResponse")
        computed = data.get("computedAutoSlippage")
        minimizing = data.get("usesQuoteMinimizingSlippage")
        platform_fee = data.get("platformFee")
        return cls(
            input_mint=field_from_string(_require(data, "inputMint"), Pubkey.from_base58),
            in_amount=field_from_string(_require(data, "inAmount"), _parse_u64),
            output_mint=field_from_string(_require(data, "outputMint"), Pubkey.from_base58),
            out_amount=field_from_string(_require(data, "outAmount"), _parse_u64),
            other_amount_threshold=field_from_string(
                _require(data, "otherAmountThreshold"), _parse_u64
            ),
            swap_mode=_swap_mode_from_json(_require(data, "swapMode")),
            slippage_bps=_uint(_require(data, "slippageBps"), 16, "slippageBps"),
            platform_fee=None if platform_fee is None else PlatformFee.from_dict(platform_fee),
            price_impact_pct=_decimal_from_json(
                _require(data, "priceImpactPct"), "priceImpactPct"
            ),
            route_plan=route_plan_from_list(_require(data, "routePlan")),
            computed_auto_slippage=(
                None if computed is None else _uint(computed, 16, "computedAutoSlippage")
            ),
            uses_quote_minimizing_slippage=(
                None
                if minimizing is None
                else _boolean(minimizing, "usesQuoteMinimizingSlippage")
            ),
            context_slot=(
                _uint(data["contextSlot"], 64, "contextSlot") if "contextSlot" in data else 0
            ),
            time_taken=_number(data["timeTaken"], "timeTaken") if "timeTaken" in data else 0.0,
        )