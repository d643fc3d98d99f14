"""Swap requests and the transactions or instructions the API returns."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from .pubkey import Pubkey
from .quote import QuoteResponse, _decimal_from_json, _decimal_to_json
from .route_plan import _mapping, _require
from .serde_helpers import FieldParseError, field_from_string, field_to_string
from .transaction_config import TransactionConfig, _boolean, _uint


def encode_base64(data: bytes) -> str:
    """Encode bytes as standard, padded base64."""
    return base64.b64encode(bytes(data)).decode("ascii")


def decode_base64(text: str) -> bytes:
    """Decode standard, padded base64 text."""
    if not isinstance(text, str):
        raise FieldParseError(f"invalid type: expected a string, got {text!r}")
    try:
        return base64.b64decode(text, validate=True)
    except ValueError as exc:
        raise FieldParseError(f"base64 decoding error: {exc}") from None


def _string(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise FieldParseError(f"invalid type for `{what}`: expected a string, got {value!r}")
    return value


def _i16(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not -(1 << 15) <= value < (1 << 15):
        raise FieldParseError(f"invalid value for `{what}`: expected i16, got {value!r}")
    return value


def _list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise FieldParseError(f"invalid type for `{what}`: expected an array")
    return value


@dataclass
class SwapRequest:
    """A quote to turn into a transaction for a user."""

    user_public_key: Pubkey
    quote_response: QuoteResponse
    config: TransactionConfig = field(default_factory=TransactionConfig)

    def to_dict(self) -> dict[str, Any]:
        return {
            "userPublicKey": field_to_string(self.user_public_key),
            "quoteResponse": self.quote_response.to_dict(),
            **self.config.to_dict(),
        }


@dataclass(frozen=True)
class JitoPrioritization:
    lamports: int


@dataclass(frozen=True)
class ComputeBudgetPrioritization:
    micro_lamports: int
    estimated_micro_lamports: Optional[int] = None


PrioritizationType = Union[JitoPrioritization, ComputeBudgetPrioritization]


def prioritization_type_to_json(value: PrioritizationType) -> dict[str, Any]:
    """Write how the transaction was prioritized."""
    match value:
        case JitoPrioritization(lamports=lamports):
            return {"jito": {"lamports": lamports}}
        case ComputeBudgetPrioritization(
            micro_lamports=micro_lamports, estimated_micro_lamports=estimated
        ):
            return {
                "computeBudget": {
                    "microLamports": micro_lamports,
                    "estimatedMicroLamports": estimated,
                }
            }
    raise TypeError(f"not a prioritization type: {value!r}")


def prioritization_type_from_json(data: Any) -> PrioritizationType:
    """Read how the transaction was prioritized."""
    if not isinstance(data, Mapping) or len(data) != 1:
        raise FieldParseError("expected an object with a single variant key")
    ((tag, body),) = data.items()
    if tag == "jito":
        body = _mapping(body, "jito")
        return JitoPrioritization(_uint(_require(body, "lamports"), 64, "lamports"))
    if tag == "computeBudget":
        body = _mapping(body, "computeBudget")
        estimated = body.get("estimatedMicroLamports")
        return ComputeBudgetPrioritization(
            micro_lamports=_uint(_require(body, "microLamports"), 64, "microLamports"),
            estimated_micro_lamports=(
                None if estimated is None else _uint(estimated, 64, "estimatedMicroLamports")
            ),
        )
    raise FieldParseError(f"unknown variant `{tag}`, expected `jito` or `computeBudget`")


@dataclass
class DynamicSlippageReport:
    slippage_bps: int
    other_amount: Optional[int] = None
    simulated_incurred_slippage_bps: Optional[int] = None
    """Signed, to show positive and negative slippage."""
    amplification_ratio: Optional[Decimal] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "slippageBps": self.slippage_bps,
            "otherAmount": self.other_amount,
            "simulatedIncurredSlippageBps": self.simulated_incurred_slippage_bps,
            "amplificationRatio": (
                None
                if self.amplification_ratio is None
                else _decimal_to_json(self.amplification_ratio)
            ),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DynamicSlippageReport":
        data = _mapping(data, "DynamicSlippageReport")
        other = data.get("otherAmount")
        incurred = data.get("simulatedIncurredSlippageBps")
        ratio = data.get("amplificationRatio")
        return cls(
            slippage_bps=_uint(_require(data, "slippageBps"), 16, "slippageBps"),
            other_amount=None if other is None else _uint(other, 64, "otherAmount"),
            simulated_incurred_slippage_bps=(
                None if incurred is None else _i16(incurred, "simulatedIncurredSlippageBps")
            ),
            amplification_ratio=(
                None if ratio is None else _decimal_from_json(ratio, "amplificationRatio")
            ),
        )


@dataclass
class UiSimulationError:
    error_code: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"errorCode": self.error_code, "error": self.error}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UiSimulationError":
        data = _mapping(data, "UiSimulationError")
        return cls(
            error_code=_string(_require(data, "errorCode"), "errorCode"),
            error=_string(_require(data, "error"), "error"),
        )


def _optional_parts(data: Mapping[str, Any]) -> dict[str, Any]:
    prioritization = data.get("prioritizationType")
    report = data.get("dynamicSlippageReport")
    simulation = data.get("simulationError")
    return {
        "prioritization_type": (
            None if prioritization is None else prioritization_type_from_json(prioritization)
        ),
        "dynamic_slippage_report": (
            None if report is None else DynamicSlippageReport.from_dict(report)
        ),
        "simulation_error": (
            None if simulation is None else UiSimulationError.from_dict(simulation)
        ),
    }


@dataclass
class SwapResponse:
    """A serialized swap transaction ready to be signed."""

    swap_transaction: bytes
    last_valid_block_height: int
    prioritization_fee_lamports: int
    compute_unit_limit: int
    prioritization_type: Optional[PrioritizationType] = None
    dynamic_slippage_report: Optional[DynamicSlippageReport] = None
    simulation_error: Optional[UiSimulationError] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "swapTransaction": encode_base64(self.swap_transaction),
            "lastValidBlockHeight": self.last_valid_block_height,
            "prioritizationFeeLamports": self.prioritization_fee_lamports,
            "computeUnitLimit": self.compute_unit_limit,
            "prioritizationType": (
                None
                if self.prioritization_type is None
                else prioritization_type_to_json(self.prioritization_type)
            ),
            "dynamicSlippageReport": (
                None
                if self.dynamic_slippage_report is None
                else self.dynamic_slippage_report.to_dict()
            ),
            "simulationError": (
                None if self.simulation_error is None else self.simulation_error.to_dict()
            ),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SwapResponse":
        data = _mapping(data, "SwapResponse")
        return cls(
            swap_transaction=decode_base64(_require(data, "swapTransaction")),
            last_valid_block_height=_uint(
                _require(data, "lastValidBlockHeight"), 64, "lastValidBlockHeight"
            ),
            prioritization_fee_lamports=_uint(
                _require(data, "prioritizationFeeLamports"), 64, "prioritizationFeeLamports"
            ),
            compute_unit_limit=_uint(_require(data, "computeUnitLimit"), 32, "computeUnitLimit"),
            **_optional_parts(data),
        )


@dataclass(frozen=True)
class AccountMeta:
    pubkey: Pubkey
    is_signer: bool
    is_writable: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AccountMeta":
        data = _mapping(data, "AccountMeta")
        return cls(
            pubkey=field_from_string(_require(data, "pubkey"), Pubkey.from_base58),
            is_signer=_boolean(_require(data, "isSigner"), "isSigner"),
            is_writable=_boolean(_require(data, "isWritable"), "isWritable"),
        )


@dataclass
class Instruction:
    program_id: Pubkey
    accounts: list[AccountMeta]
    data: bytes

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Instruction":
        data = _mapping(data, "Instruction")
        return cls(
            program_id=field_from_string(_require(data, "programId"), Pubkey.from_base58),
            accounts=[
                AccountMeta.from_dict(item)
                for item in _list(_require(data, "accounts"), "accounts")
            ],
            data=decode_base64(_require(data, "data")),
        )


def _instructions(data: Mapping[str, Any], key: str) -> list[Instruction]:
    return [Instruction.from_dict(item) for item in _list(_require(data, key), key)]


def _optional_instruction(data: Mapping[str, Any], key: str) -> Optional[Instruction]:
    value = data.get(key)
    return None if value is None else Instruction.from_dict(value)


@dataclass
class SwapInstructionsResponse:
    """The instructions of a swap, to assemble a transaction from."""

    swap_instruction: Instruction
    compute_budget_instructions: list[Instruction] = field(default_factory=list)
    setup_instructions: list[Instruction] = field(default_factory=list)
    other_instructions: list[Instruction] = field(default_factory=list)
    address_lookup_table_addresses: list[Pubkey] = field(default_factory=list)
    prioritization_fee_lamports: int = 0
    compute_unit_limit: int = 0
    token_ledger_instruction: Optional[Instruction] = None
    cleanup_instruction: Optional[Instruction] = None
    prioritization_type: Optional[PrioritizationType] = None
    dynamic_slippage_report: Optional[DynamicSlippageReport] = None
    simulation_error: Optional[UiSimulationError] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SwapInstructionsResponse":
        data = _mapping(data, "SwapInstructionsResponse")
        tables = _list(
            _require(data, "addressLookupTableAddresses"), "addressLookupTableAddresses"
        )
        return cls(
            token_ledger_instruction=_optional_instruction(data, "tokenLedgerInstruction"),
            compute_budget_instructions=_instructions(data, "computeBudgetInstructions"),
            setup_instructions=_instructions(data, "setupInstructions"),
            swap_instruction=Instruction.from_dict(_require(data, "swapInstruction")),
            cleanup_instruction=_optional_instruction(data, "cleanupInstruction"),
            other_instructions=_instructions(data, "otherInstructions"),
            address_lookup_table_addresses=[
                field_from_string(item, Pubkey.from_base58) for item in tables
            ],
            prioritization_fee_lamports=_uint(
                _require(data, "prioritizationFeeLamports"), 64, "prioritizationFeeLamports"
            ),
            compute_unit_limit=_uint(_require(data, "computeUnitLimit"), 32, "computeUnitLimit"),
            **_optional_parts(data),
        )