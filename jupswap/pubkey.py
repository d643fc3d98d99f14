"""Base58 encoding and 32-byte public keys."""

from __future__ import annotations

from dataclasses import dataclass

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
PUBKEY_LENGTH = 32
MAX_BASE58_LENGTH = 44

_INDEX = {char: position for position, char in enumerate(ALPHABET)}


def b58encode(data: bytes) -> str:
    """Encode bytes as base58 text, keeping leading zero bytes as '1'."""
    data = bytes(data)
    stripped = data.lstrip(b"\0")
    zeros = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(ALPHABET[remainder])
    return "1" * zeros + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode base58 text into bytes; raises ValueError on a bad character."""
    stripped = text.lstrip("1")
    zeros = len(text) - len(stripped)
    number = 0
    for char in stripped:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * zeros + body


@dataclass(frozen=True)
class Pubkey:
    """A 32-byte public key, shown as base58."""

    raw: bytes = bytes(PUBKEY_LENGTH)

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise TypeError("a public key is built from bytes")
        raw = bytes(self.raw)
        if len(raw) != PUBKEY_LENGTH:
            raise ValueError(
                f"a public key has {PUBKEY_LENGTH} bytes, got {len(raw)}"
            )
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_base58(cls, text: str) -> "Pubkey":
        """Parse a base58 string into a public key."""
        if not isinstance(text, str):
            raise TypeError("a public key is parsed from a string")
        if len(text) > MAX_BASE58_LENGTH:
            raise ValueError("string is too long for a public key")
        try:
            raw = b58decode(text)
        except ValueError as exc:
            raise ValueError(f"invalid public key: {exc}") from None
        if len(raw) != PUBKEY_LENGTH:
            raise ValueError(f"a public key has {PUBKEY_LENGTH} bytes, got {len(raw)}")
        return cls(raw)

    def to_base58(self) -> str:
        return b58encode(self.raw)

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f"Pubkey({self.to_base58()})"

    def __bytes__(self) -> bytes:
        return self.raw