"""Route plan steps returned with a quote."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .pubkey import Pubkey
from .serde_helpers import FieldParseError, field_from_string, field_to_string

_DIGITS = re.compile(r"\+?[0-9]+")
_U64_LIMIT = 1 << 64


def _parse_u64(text: str) -> int:
    if not _DIGITS.fullmatch(text):
        raise ValueError(f"invalid digit found in {text!r}")
    number = int(text)
    if number >= _U64_LIMIT:
        raise ValueError("number too large to fit in u64")
    return number


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise FieldParseError(f"missing field `{key}`") from None


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise FieldParseError(f"invalid type for {what}: expected an object")
    return data


@dataclass
class SwapInfo:
    """One swap made along a route."""

    amm_key: Pubkey = field(default_factory=Pubkey)
    label: str = ""
    input_mint: Pubkey = field(default_factory=Pubkey)
    output_mint: Pubkey = field(default_factory=Pubkey)
    in_amount: int = 0
    out_amount: int = 0
    fee_amount: int = 0
    fee_mint: Pubkey = field(default_factory=Pubkey)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ammKey": field_to_string(self.amm_key),
            "label": self.label,
            "inputMint": field_to_string(self.input_mint),
            "outputMint": field_to_string(self.output_mint),
            "inAmount": field_to_string(self.in_amount),
            "outAmount": field_to_string(self.out_amount),
            "feeAmount": field_to_string(self.fee_amount),
            "feeMint": field_to_string(self.fee_mint),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SwapInfo":
        data = _mapping(data, "SwapInfo")
        label = _require(data, "label")
        if not isinstance(label, str):
            raise FieldParseError("invalid type for `label`: expected a string")
        return cls(
            amm_key=field_from_string(_require(data, "ammKey"), Pubkey.from_base58),
            label=label,
            input_mint=field_from_string(_require(data, "inputMint"), Pubkey.from_base58),
            output_mint=field_from_string(
                _require(data, "outputMint"), Pubkey.from_base58
            ),
            in_amount=field_from_string(_require(data, "inAmount"), _parse_u64),
            out_amount=field_from_string(_require(data, "outAmount"), _parse_u64),
            fee_amount=field_from_string(_require(data, "feeAmount"), _parse_u64),
            fee_mint=field_from_string(_require(data, "feeMint"), Pubkey.from_base58),
        )


@dataclass
class RoutePlanStep:
    """A swap and the percentage of the amount routed through it."""

    swap_info: SwapInfo
    percent: int

    def to_dict(self) -> dict[str, Any]:
        return {"swapInfo": self.swap_info.to_dict(), "percent": self.percent}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoutePlanStep":
        data = _mapping(data, "RoutePlanStep")
        percent = _require(data, "percent")
        if isinstance(percent, bool) or not isinstance(percent, int) or not 0 <= percent <= 0xFF:
            raise FieldParseError(f"invalid value for `percent`: expected u8, got {percent!r}")
        return cls(
            swap_info=SwapInfo.from_dict(_require(data, "swapInfo")),
            percent=percent,
        )


def route_plan_to_list(steps: Iterable[RoutePlanStep]) -> list[dict[str, Any]]:
    """Write route plan steps, in order, as JSON objects."""
    return [step.to_dict() for step in steps]


def route_plan_from_list(data: Any) -> list[RoutePlanStep]:
    """Read route plan steps from a JSON array."""
    if not isinstance(data, list):
        raise FieldParseError("invalid type for route plan: expected an array")
    return [RoutePlanStep.from_dict(item) for item in data]