"""Settings that shape the swap transaction built by the API."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

from .pubkey import Pubkey
from .serde_helpers import (
    FieldParseError,
    option_field_from_string,
    option_field_to_string,
)

T = TypeVar("T")

COMPUTE_UNIT_PRICE_AUTO = "auto"


def _uint(value: Any, bits: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < (1 << bits):
        raise FieldParseError(f"invalid value for `{what}`: expected u{bits}, got {value!r}")
    return value


def _boolean(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise FieldParseError(f"invalid type for `{what}`: expected a boolean, got {value!r}")
    return value


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise FieldParseError(f"invalid type for {what}: expected an object")
    return data


def _optional(value: Any, convert: Callable[[Any], T]) -> Optional[T]:
    return None if value is None else convert(value)


class PriorityLevel(str, enum.Enum):
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "veryHigh"


@dataclass(frozen=True)
class AutoMultiplier:
    multiplier: int


@dataclass(frozen=True)
class JitoTipLamports:
    lamports: int


@dataclass(frozen=True)
class PriorityLevelWithMaxLamports:
    priority_level: PriorityLevel
    max_lamports: int
    is_global: bool = False


@dataclass(frozen=True)
class AutoFee:
    """Let the API pick the prioritization fee."""


@dataclass(frozen=True)
class Lamports:
    lamports: int


@dataclass(frozen=True)
class DisabledFee:
    """Pay no prioritization fee."""


PrioritizationFeeLamports = Union[
    AutoMultiplier,
    JitoTipLamports,
    PriorityLevelWithMaxLamports,
    AutoFee,
    Lamports,
    DisabledFee,
]

ComputeUnitPriceMicroLamports = Union[int, str]


def compute_unit_price_to_json(value: ComputeUnitPriceMicroLamports) -> Union[int, str]:
    """Write a compute unit price: a micro-lamport count or "auto"."""
    if value == COMPUTE_UNIT_PRICE_AUTO:
        return COMPUTE_UNIT_PRICE_AUTO
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < (1 << 64):
        raise ValueError(f"invalid compute unit price {value!r}")
    return value


def compute_unit_price_from_json(data: Any) -> ComputeUnitPriceMicroLamports:
    """Read a compute unit price from JSON."""
    if data == COMPUTE_UNIT_PRICE_AUTO:
        return COMPUTE_UNIT_PRICE_AUTO
    if isinstance(data, int) and not isinstance(data, bool) and 0 <= data < (1 << 64):
        return data
    raise FieldParseError(
        "data did not match any variant of untagged enum ComputeUnitPriceMicroLamports"
    )


def prioritization_fee_to_json(value: PrioritizationFeeLamports) -> Any:
    """Write a prioritization fee in the API's JSON shape."""
    match value:
        case AutoMultiplier(multiplier=multiplier):
            return {"autoMultiplier": multiplier}
        case JitoTipLamports(lamports=lamports):
            return {"jitoTipLamports": lamports}
        case AutoFee():
            return "auto"
        case Lamports(lamports=lamports):
            return lamports
        case DisabledFee():
            return "disabled"
        case PriorityLevelWithMaxLamports(
            priority_level=level, max_lamports=max_lamports, is_global=is_global
        ):
            return {
                "priorityLevelWithMaxLamports": {
                    "priorityLevel": PriorityLevel(level).value,
                    "maxLamports": max_lamports,
                    "global": is_global,
                }
            }
    raise TypeError(f"not a prioritization fee: {value!r}")


def _priority_level_with_max_lamports(body: Any) -> PriorityLevelWithMaxLamports:
    body = _mapping(body, "priorityLevelWithMaxLamports")
    if "priorityLevel" not in body:
        raise FieldParseError("missing field `priorityLevel`")
    if "maxLamports" not in body:
        raise FieldParseError("missing field `maxLamports`")
    try:
        level = PriorityLevel(body["priorityLevel"])
    except (ValueError, TypeError):
        raise FieldParseError(
            f"unknown priority level {body['priorityLevel']!r}"
        ) from None
    return PriorityLevelWithMaxLamports(
        priority_level=level,
        max_lamports=_uint(body["maxLamports"], 64, "maxLamports"),
        is_global=_boolean(body.get("global", False), "global"),
    )


def prioritization_fee_from_json(data: Any) -> PrioritizationFeeLamports:
    """Read a prioritization fee from JSON."""
    if isinstance(data, Mapping):
        if len(data) != 1:
            raise FieldParseError("expected an object with a single variant key")
        ((tag, body),) = data.items()
        if tag == "autoMultiplier":
            return AutoMultiplier(_uint(body, 32, tag))
        if tag == "jitoTipLamports":
            return JitoTipLamports(_uint(body, 64, tag))
        if tag == "priorityLevelWithMaxLamports":
            return _priority_level_with_max_lamports(body)
        raise FieldParseError(f"unknown variant `{tag}`")
    if isinstance(data, str):
        if data == "auto":
            return AutoFee()
        if data == "disabled":
            return DisabledFee()
    elif isinstance(data, int) and not isinstance(data, bool) and 0 <= data < (1 << 64):
        return Lamports(data)
    raise FieldParseError("data did not match any variant of PrioritizationFeeLamports")


@dataclass
class DynamicSlippageSettings:
    min_bps: Optional[int] = None
    max_bps: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {"minBps": self.min_bps, "maxBps": self.max_bps}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DynamicSlippageSettings":
        data = _mapping(data, "DynamicSlippageSettings")
        return cls(
            min_bps=_optional(data.get("minBps"), lambda v: _uint(v, 16, "minBps")),
            max_bps=_optional(data.get("maxBps"), lambda v: _uint(v, 16, "maxBps")),
        )


@dataclass
class KeyedUiAccount:
    """An account handed to the router, with its fields kept as given."""

    pubkey: str
    ui_account: dict[str, Any] = field(default_factory=dict)
    params: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"pubkey": self.pubkey, **self.ui_account, "params": self.params}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KeyedUiAccount":
        data = _mapping(data, "KeyedUiAccount")
        if "pubkey" not in data:
            raise FieldParseError("missing field `pubkey`")
        pubkey = data["pubkey"]
        if not isinstance(pubkey, str):
            raise FieldParseError("invalid type for `pubkey`: expected a string")
        rest = {key: value for key, value in data.items() if key not in ("pubkey", "params")}
        return cls(pubkey=pubkey, ui_account=rest, params=data.get("params"))


def _keyed_accounts(value: Any) -> list[KeyedUiAccount]:
    if not isinstance(value, list):
        raise FieldParseError("invalid type for `keyedUiAccounts`: expected an array")
    return [KeyedUiAccount.from_dict(item) for item in value]


@dataclass
class TransactionConfig:
    """Options for building the swap transaction."""

    wrap_and_unwrap_sol: bool = True
    allow_optimized_wrapped_sol_token_account: bool = False
    fee_account: Optional[Pubkey] = None
    destination_token_account: Optional[Pubkey] = None
    tracking_account: Optional[Pubkey] = None
    compute_unit_price_micro_lamports: Optional[ComputeUnitPriceMicroLamports] = None
    prioritization_fee_lamports: Optional[PrioritizationFeeLamports] = None
    dynamic_compute_unit_limit: bool = False
    as_legacy_transaction: bool = False
    use_shared_accounts: Optional[bool] = None
    use_token_ledger: bool = False
    skip_user_accounts_rpc_calls: bool = False
    keyed_ui_accounts: Optional[list[KeyedUiAccount]] = None
    program_authority_id: Optional[int] = None
    dynamic_slippage: Optional[DynamicSlippageSettings] = None
    blockhash_slots_to_expiry: Optional[int] = None
    correct_last_valid_block_height: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "wrapAndUnwrapSol": self.wrap_and_unwrap_sol,
            "allowOptimizedWrappedSolTokenAccount": self.allow_optimized_wrapped_sol_token_account,
            "feeAccount": option_field_to_string(self.fee_account),
            "destinationTokenAccount": option_field_to_string(self.destination_token_account),
            "trackingAccount": option_field_to_string(self.tracking_account),
            "computeUnitPriceMicroLamports": _optional(
                self.compute_unit_price_micro_lamports, compute_unit_price_to_json
            ),
            "prioritizationFeeLamports": _optional(
                self.prioritization_fee_lamports, prioritization_fee_to_json
            ),
            "dynamicComputeUnitLimit": self.dynamic_compute_unit_limit,
            "asLegacyTransaction": self.as_legacy_transaction,
            "useSharedAccounts": self.use_shared_accounts,
            "useTokenLedger": self.use_token_ledger,
            "skipUserAccountsRpcCalls": self.skip_user_accounts_rpc_calls,
            "keyedUiAccounts": _optional(
                self.keyed_ui_accounts, lambda items: [item.to_dict() for item in items]
            ),
            "programAuthorityId": self.program_authority_id,
            "dynamicSlippage": _optional(self.dynamic_slippage, DynamicSlippageSettings.to_dict),
            "blockhashSlotsToExpiry": self.blockhash_slots_to_expiry,
            "correctLastValidBlockHeight": self.correct_last_valid_block_height,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TransactionConfig":
        """Read a config; missing keys take their defaults."""
        data = _mapping(data, "TransactionConfig")
        defaults = cls()

        def flag(key: str, attribute: str) -> bool:
            if key not in data:
                return getattr(defaults, attribute)
            return _boolean(data[key], key)

        return cls(
            wrap_and_unwrap_sol=flag("wrapAndUnwrapSol", "wrap_and_unwrap_sol"),
            allow_optimized_wrapped_sol_token_account=flag(
                "allowOptimizedWrappedSolTokenAccount",
                "allow_optimized_wrapped_sol_token_account",
            ),
            fee_account=option_field_from_string(data.get("feeAccount"), Pubkey.from_base58),
            destination_token_account=option_field_from_string(
                data.get("destinationTokenAccount"), Pubkey.from_base58
            ),
            tracking_account=option_field_from_string(
                data.get("trackingAccount"), Pubkey.from_base58
            ),
            compute_unit_price_micro_lamports=_optional(
                data.get("computeUnitPriceMicroLamports"), compute_unit_price_from_json
            ),
            prioritization_fee_lamports=_optional(
                data.get("prioritizationFeeLamports"), prioritization_fee_from_json
            ),
            dynamic_compute_unit_limit=flag(
                "dynamicComputeUnitLimit", "dynamic_compute_unit_limit"
            ),
            as_legacy_transaction=flag("asLegacyTransaction", "as_legacy_transaction"),
            use_shared_accounts=_optional(
                data.get("useSharedAccounts"), lambda v: _boolean(v, "useSharedAccounts")
            ),
            use_token_ledger=flag("useTokenLedger", "use_token_ledger"),
            skip_user_accounts_rpc_calls=flag(
                "skipUserAccountsRpcCalls", "skip_user_accounts_rpc_calls"
            ),
            keyed_ui_accounts=_optional(data.get("keyedUiAccounts"), _keyed_accounts),
            program_authority_id=_optional(
                data.get("programAuthorityId"), lambda v: _uint(v, 8, "programAuthorityId")
            ),
            dynamic_slippage=_optional(
                data.get("dynamicSlippage"), DynamicSlippageSettings.from_dict
            ),
            blockhash_slots_to_expiry=_optional(
                data.get("blockhashSlotsToExpiry"),
                lambda v: _uint(v, 8, "blockhashSlotsToExpiry"),
            ),
            correct_last_valid_block_height=flag(
                "correctLastValidBlockHeight", "correct_last_valid_block_height"
            ),
        )