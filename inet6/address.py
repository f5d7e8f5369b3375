"""
IPv6 address value type.

An address is always exactly 16 bytes in network (big-endian) order.  Text
conversion is delegated to the platform's ``inet_pton``/``inet_ntop`` for
AF_INET6, so the presentation rules are the platform's own:

  lowercase hex groups
  the longest run of zero groups compressed to ``::`` (at most once)
  dotted IPv4 suffix accepted on input for mapped/compatible forms

Ordering is unsigned lexicographic comparison of the 16 bytes.  It is a
sort/map key, not a numeric notion of address magnitude, although for
fixed-width big-endian bytes the two happen to agree.

Address classes
---------------
link-local       fe80::/10
site-local       fec0::/10   (deprecated, kept for compatibility)
IPv4-mapped      ::ffff:0:0/96
IPv4-compatible  ::/96 except :: and ::1
multicast        ff00::/8
"""

from __future__ import annotations

import logging
import numbers
import socket

from .errors import FormatError, InvalidAddressFormat, InvalidArgument, os_error_code

logger = logging.getLogger(__name__)

IPV6_ADDRESS_SIZE   = 16
MAX_ADDR_V6_STR_LEN = 46   # INET6_ADDRSTRLEN, terminator included

_ZERO     = bytes(IPV6_ADDRESS_SIZE)
_LOOPBACK = bytes(IPV6_ADDRESS_SIZE - 1) + b"\x01"
_MAPPED_PREFIX = bytes(10) + b"\xff\xff"


class IPv6Address:
    """A 16-byte IPv6 address.

    ``IPv6Address()`` is the unspecified address ``::``.  A ``str`` argument
    is parsed as presentation text, any bytes-like object or sequence of 16
    ints is taken as the raw address, and another ``IPv6Address`` is copied.
    """

    __slots__ = ("_bytes",)

    def __init__(self, value: AddressLike | None = None):
        if value is None:
            self._bytes = _ZERO
        elif isinstance(value, IPv6Address):
            self._bytes = value._bytes
        elif isinstance(value, str):
            self._bytes = _pton(value)
        else:
            self._bytes = _coerce_bytes(value)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, data) -> IPv6Address:
        addr = cls.__new__(cls)
        addr._bytes = _coerce_bytes(data)
        return addr

    @classmethod
    def from_text(cls, text: str) -> IPv6Address:
        """Parse presentation text, raising InvalidAddressFormat on failure."""
        addr = cls.__new__(cls)
        addr._bytes = _pton(text)
        return addr

    @classmethod
    def parse(cls, text: str) -> IPv6Address | None:
        """Like from_text() but return None when *text* does not parse."""
        try:
            return cls.from_text(text)
        except InvalidAddressFormat:
            return None

    @classmethod
    def from_int(cls, value: int) -> IPv6Address:
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidArgument(f"expected an int, got {value!r}")
        value = int(value)
        if not 0 <= value < (1 << 128):
            raise InvalidArgument(f"integer out of range for an IPv6 address: {value!r}")
        return cls.from_bytes(value.to_bytes(IPV6_ADDRESS_SIZE, "big"))

    @classmethod
    def any(cls) -> IPv6Address:
        return cls()

    @classmethod
    def loopback(cls) -> IPv6Address:
        return cls.from_bytes(_LOOPBACK)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        return self._bytes

    def to_int(self) -> int:
        return int.from_bytes(self._bytes, "big")

    def to_text(self) -> str:
        """Canonical presentation text.

        A failure here means the platform conversion rejected a 16-byte
        value, which cannot happen for a well-formed address.
        """
        try:
            text = socket.inet_ntop(socket.AF_INET6, self._bytes)
        except (OSError, ValueError) as exc:
            raise FormatError(
                f"inet_ntop failed for {self._bytes.hex()}", os_error_code(exc)
            ) from exc
        if len(text) >= MAX_ADDR_V6_STR_LEN:
            raise FormatError(f"presentation text exceeds {MAX_ADDR_V6_STR_LEN - 1} chars")
        return text

    def to_ipv4(self) -> str:
        """Dotted IPv4 text embedded in a mapped or compatible address."""
        if not (self.is_ipv4_mapped or self.is_ipv4_compatible):
            raise InvalidArgument(f"{self} does not embed an IPv4 address")
        return socket.inet_ntop(socket.AF_INET, self._bytes[12:])

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    @property
    def is_unspecified(self) -> bool:
        return self._bytes == _ZERO

    @property
    def is_loopback(self) -> bool:
        return self._bytes == _LOOPBACK

    @property
    def is_link_local(self) -> bool:
        return self._bytes[0] == 0xFE and (self._bytes[1] & 0xC0) == 0x80

    @property
    def is_site_local(self) -> bool:
        return self._bytes[0] == 0xFE and (self._bytes[1] & 0xC0) == 0xC0

    @property
    def is_ipv4_mapped(self) -> bool:
        return self._bytes[:12] == _MAPPED_PREFIX

    @property
    def is_ipv4_compatible(self) -> bool:
        # IN6_IS_ADDR_V4COMPAT: low 32 bits must be greater than 1
        return (
            self._bytes[:12] == _ZERO[:12]
            and int.from_bytes(self._bytes[12:], "big") > 1
        )

    @property
    def is_multicast(self) -> bool:
        return self._bytes[0] == 0xFF

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def equals(self, other: IPv6Address) -> bool:
        return self._bytes == other._bytes

    def compare(self, other: IPv6Address) -> int:
        """Return -1, 0 or 1 comparing the 16 bytes lexicographically."""
        a, b = self._bytes, other._bytes
        return (a > b) - (a < b)

    def __eq__(self, other):
        if not isinstance(other, IPv6Address):
            return NotImplemented
        return self._bytes == other._bytes

    def __ne__(self, other):
        if not isinstance(other, IPv6Address):
            return NotImplemented
        return self._bytes != other._bytes

    def __lt__(self, other):
        if not isinstance(other, IPv6Address):
            return NotImplemented
        return self._bytes < other._bytes

    def __le__(self, other):
        if not isinstance(other, IPv6Address):
            return NotImplemented
        return self._bytes <= other._bytes

    def __gt__(self, other):
        if not isinstance(other, IPv6Address):
            return NotImplemented
        return self._bytes > other._bytes

    def __ge__(self, other):
        if not isinstance(other, IPv6Address):
            return NotImplemented
        return self._bytes >= other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __bytes__(self) -> bytes:
        return self._bytes

    def __int__(self) -> int:
        return self.to_int()

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"IPv6Address({self.to_text()!r})"

    def __copy__(self) -> IPv6Address:
        return self

    def __deepcopy__(self, memo) -> IPv6Address:
        return self

    def __reduce__(self):
        return (self.__class__, (self._bytes,))


AddressLike = IPv6Address | str | bytes | bytearray | memoryview


def equals(a: IPv6Address, b: IPv6Address) -> bool:
    return a.equals(b)


def compare(a: IPv6Address, b: IPv6Address) -> int:
    return a.compare(b)


def as_address(value: AddressLike) -> IPv6Address:
    """Return *value* as an IPv6Address without copying when it already is one."""
    if isinstance(value, IPv6Address):
        return value
    return IPv6Address(value)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _pton(text: str) -> bytes:
    if not isinstance(text, str):
        raise InvalidAddressFormat(f"expected str, got {type(text).__name__}")
    try:
        return socket.inet_pton(socket.AF_INET6, text)
    except (OSError, ValueError) as exc:
        logger.debug("rejected IPv6 text %r: %s", text, exc)
        raise InvalidAddressFormat(
            f"not an IPv6 address: {text!r}", os_error_code(exc)
        ) from exc


def _coerce_bytes(data) -> bytes:
    if isinstance(data, int):
        # bytes(n) would silently build n zero bytes
        raise InvalidArgument(f"cannot build an address from int {data!r}, use from_int()")
    try:
        raw = bytes(data)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"cannot build an address from {data!r}") from exc
    if len(raw) != IPV6_ADDRESS_SIZE:
        raise InvalidArgument(f"expected {IPV6_ADDRESS_SIZE} bytes, got {len(raw)}")
    return raw
