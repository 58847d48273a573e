"""Base58 public keys and a little-endian Borsh reader."""

from __future__ import annotations

import struct
from dataclasses import dataclass

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {ch: i for i, ch in enumerate(_ALPHABET)}

PUBKEY_LEN = 32


class BorshError(ValueError):
    """Raised when Borsh-encoded data is truncated or malformed."""


def b58encode(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet."""
    data = bytes(data)
    stripped = data.lstrip(b"\x00")
    zeros = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits: list[str] = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_ALPHABET[rem])
    return "1" * zeros + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode a base58 string; raises ValueError on characters outside the alphabet."""
    stripped = text.lstrip("1")
    zeros = len(text) - len(stripped)
    number = 0
    for ch in stripped:
        try:
            number = number * 58 + _INDEX[ch]
        except KeyError:
            raise ValueError(f"invalid base58 character: {ch!r}") from None
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * zeros + body


@dataclass(frozen=True, order=True)
class Pubkey:
    """A 32-byte account address, shown in base58."""

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) != PUBKEY_LEN:
            raise ValueError(f"pubkey must be {PUBKEY_LEN} bytes, got {len(self.raw)}")
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_base58(cls, text: str) -> "Pubkey":
        return cls(b58decode(text.strip()))

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return b58encode(self.raw)

    def __repr__(self) -> str:
        return f"Pubkey({self})"


class BorshReader:
    """Sequential reader over Borsh-encoded bytes."""

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(bytes(data))
        self.position = 0

    def _take(self, size: int) -> bytes:
        end = self.position + size
        if end > len(self._data):
            raise BorshError(
                f"unexpected end of data: need {size} bytes at offset {self.position}, "
                f"have {len(self._data) - self.position}"
            )
        chunk = bytes(self._data[self.position:end])
        self.position = end
        return chunk

    def _unpack(self, fmt: str) -> int:
        (value,) = struct.unpack(fmt, self._take(struct.calcsize(fmt)))
        return value

    def u8(self) -> int:
        return self._unpack("<B")

    def bool(self) -> bool:
        value = self.u8()
        if value > 1:
            raise BorshError(f"invalid bool value: {value}")
        return value == 1

    def u32(self) -> int:
        return self._unpack("<I")

    def u64(self) -> int:
        return self._unpack("<Q")

    def i64(self) -> int:
        return self._unpack("<q")

    def string(self) -> str:
        length = self.u32()
        raw = self._take(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BorshError(f"invalid utf-8 in string: {exc}") from None

    def pubkey(self) -> Pubkey:
        return Pubkey(self._take(PUBKEY_LEN))

    def is_empty(self) -> bool:
        return self.position >= len(self._data)

    @property
    def remaining(self) -> int:
        return len(self._data) - self.position