"""
Alternative IPv6 address notations.

Supported formats
-----------------
std       Canonical notation          2001:db8::8a2e:370:7334
exploded  Eight full 4-digit groups   2001:0db8:0000:0000:0000:8a2e:0370:7334
b4        32-char hex                 20010db80000000000008a2e03707334
b1        128-char binary             00100000000000010000110110111000...
nibbles   numpy uint8 vector of 32 values 0–15

Everything here goes through IPv6Address, so every notation maps to the
same 16 bytes and the same ordering.
"""

from __future__ import annotations

import numpy as np

from .address import AddressLike, IPv6Address, as_address
from .errors import InvalidAddressFormat

_HEX = "0123456789abcdef"


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def to_exploded(addr: AddressLike) -> str:
    """Full notation, eight zero-padded lowercase groups."""
    b4 = to_b4(addr)
    return ":".join(b4[i : i + 4] for i in range(0, 32, 4))


def to_b4(addr: AddressLike) -> str:
    return as_address(addr).to_bytes().hex()


def from_b4(b4: str) -> IPv6Address:
    if not _is_b4(b4):
        raise InvalidAddressFormat(f"Expected 32-char hex string, got {b4!r}")
    return IPv6Address.from_bytes(bytes.fromhex(b4))


def to_b1(addr: AddressLike) -> str:
    """128-char binary string, most significant bit first."""
    return format(as_address(addr).to_int(), "0128b")


def from_b1(b1: str) -> IPv6Address:
    if not _is_b1(b1):
        raise InvalidAddressFormat(f"Expected 128-char binary string, got {len(b1)} chars")
    return IPv6Address.from_int(int(b1, 2))


def to_nibbles(addr: AddressLike) -> np.ndarray:
    """Return the 32 nibbles of *addr* as a uint8 vector, high nibble first."""
    raw = np.frombuffer(as_address(addr).to_bytes(), dtype=np.uint8)
    out = np.empty(32, dtype=np.uint8)
    out[0::2] = raw >> 4
    out[1::2] = raw & 0x0F
    return out


def from_nibbles(nibbles) -> IPv6Address:
    arr = np.asarray(nibbles, dtype=np.uint8)
    if arr.shape != (32,) or (arr > 15).any():
        raise InvalidAddressFormat("Expected 32 nibble values in 0..15")
    return IPv6Address.from_bytes(((arr[0::2] << 4) | arr[1::2]).astype(np.uint8).tobytes())


def normalize_to_b4(addr: str) -> str | None:
    """
    Convert an address in std, exploded, b4 or b1 notation to b4.

    Returns None if the input cannot be parsed.
    """
    addr = addr.strip()

    parsed = IPv6Address.parse(addr)
    if parsed is not None:
        return to_b4(parsed)

    # Already b4?
    if _is_b4(addr):
        return addr.lower()

    # b1 → b4
    if _is_b1(addr):
        return to_b4(from_b1(addr))

    return None


# ---------------------------------------------------------------------------
# Format detection
# ---------------------------------------------------------------------------

def _is_b4(s: str) -> bool:
    return len(s) == 32 and all(c in _HEX for c in s.lower())


def _is_b1(s: str) -> bool:
    return len(s) == 128 and all(c in "01" for c in s)
