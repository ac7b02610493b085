"""Public keys, base58 text form and well-known program addresses."""

from __future__ import annotations

PUBKEY_BYTES = 32

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: value for value, char in enumerate(_ALPHABET)}


def b58encode(data: bytes) -> str:
    """Encode bytes as base58 text."""
    data = bytes(data)
    stripped = data.lstrip(b"\x00")
    leading = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_ALPHABET[rem])
    return "1" * leading + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode base58 text into bytes; raises ValueError on a bad character."""
    number = 0
    for char in text:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
    leading = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * leading + body


def pubkey(text: str) -> bytes:
    """Parse a base58 public key, which must decode to exactly 32 bytes."""
    key = b58decode(text)
    if len(key) != PUBKEY_BYTES:
        raise ValueError(f"public key must be {PUBKEY_BYTES} bytes, got {len(key)}")
    return key


TOKEN_PROGRAM_ID = pubkey("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")

# There are 10^9 lamports in one SOL.
NATIVE_DECIMALS = 9

NATIVE_MINT = pubkey("So11111111111111111111111111111111111111112")


def is_native_mint(key: bytes) -> bool:
    """Return True if the key is the native mint."""
    return bytes(key) == NATIVE_MINT