import pytest

from jupswap.pubkey import Pubkey
from jupswap.serde_helpers import (
    FieldParseError,
    field_from_string,
    field_to_string,
    option_field_from_string,
    option_field_to_string,
)

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def test_field_to_string_number():
    assert field_to_string(1_000_000) == "1000000"


def test_field_to_string_pubkey():
    assert field_to_string(Pubkey.from_base58(USDC_MINT)) == USDC_MINT


def test_field_from_string_parses():
    assert field_from_string("1000000", int) == 1_000_000
    assert field_from_string(USDC_MINT, Pubkey.from_base58) == Pubkey.from_base58(
        USDC_MINT
    )


def test_field_from_string_parse_failure():
    with pytest.raises(FieldParseError, match="^Parse error:"):
        field_from_string("abc", int)


def test_field_from_string_requires_string():
    with pytest.raises(FieldParseError):
        field_from_string(42, int)


def test_field_parse_error_is_value_error():
    with pytest.raises(ValueError):
        field_from_string("not a key", Pubkey.from_base58)


def test_option_none_both_ways():
    assert option_field_to_string(None) is None
    assert option_field_from_string(None, int) is None


def test_option_round_trip_pubkey():
    key = Pubkey(bytes(range(32)))
    text = option_field_to_string(key)
    assert text == key.to_base58()
    assert option_field_from_string(text, Pubkey.from_base58) == key


def test_option_from_string_requires_string():
    with pytest.raises(FieldParseError):
        option_field_from_string(5, int)


def test_option_from_string_parse_failure():
    with pytest.raises(FieldParseError):
        option_field_from_string("xyz", int)