import pytest

from jupswap.pubkey import Pubkey, b58decode, b58encode

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
NATIVE_MINT = "So11111111111111111111111111111111111111112"


def test_known_base58_text():
    assert b58encode(b"hello world") == "StV1DL6CwTryKyV"
    assert b58decode("StV1DL6CwTryKyV") == b"hello world"


def test_leading_zero_bytes_become_ones():
    assert b58encode(b"\0\0\x01") == "112"
    assert b58decode("112") == b"\0\0\x01"


def test_empty_input():
    assert b58encode(b"") == ""
    assert b58decode("") == b""


@pytest.mark.parametrize(
    "data",
    [b"\0", b"\xff" * 32, bytes(range(32)), b"\0\0abc", bytes(range(200, 256))],
)
def test_round_trip_bytes(data):
    assert b58decode(b58encode(data)) == data


@pytest.mark.parametrize("text", ["0abc", "abcO", "Il", "a b"])
def test_decode_rejects_bad_characters(text):
    with pytest.raises(ValueError):
        b58decode(text)


def test_default_key_is_all_zero():
    key = Pubkey()
    assert key.raw == bytes(32)
    assert key.to_base58() == "1" * 32


@pytest.mark.parametrize("text", [USDC_MINT, NATIVE_MINT])
def test_pubkey_round_trip(text):
    key = Pubkey.from_base58(text)
    assert len(key.raw) == 32
    assert key.to_base58() == text
    assert str(key) == text
    assert bytes(key) == key.raw


def test_pubkey_equality_and_hash():
    first = Pubkey.from_base58(USDC_MINT)
    second = Pubkey(bytes(first.raw))
    assert first == second
    assert {first: 1}[second] == 1


def test_pubkey_wrong_size_text():
    with pytest.raises(ValueError):
        Pubkey.from_base58("1" * 31)


def test_pubkey_too_long_text():
    with pytest.raises(ValueError):
        Pubkey.from_base58("2" * 45)


def test_pubkey_bad_character():
    with pytest.raises(ValueError):
        Pubkey.from_base58("0" * 32)


def test_pubkey_wrong_byte_length():
    with pytest.raises(ValueError):
        Pubkey(b"\x01" * 31)


def test_pubkey_requires_bytes():
    with pytest.raises(TypeError):
        Pubkey("not bytes")