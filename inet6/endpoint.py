"""
IPv6 TCP endpoint: an address plus a port, stored in native form.

The endpoint owns a 28-byte ``sockaddr_in6`` buffer (see ``native``) and
exposes it through ``data()`` so the socket layer can pass it straight to
connect/bind/accept.  Port is always host order at this API; the buffer
keeps it in network order.  Flow label and scope id are always zero.

Defaults
--------
IPv6Endpoint()                 ::1, port 0
IPv6Endpoint(port)             ::1, given port
IPv6Endpoint(port, address)    given address and port

Equality and ordering use (address, port) only.
"""

from __future__ import annotations

import logging
import numbers
import socket

import numpy as np

from . import native
from .address import AddressLike, IPv6Address, as_address
from .errors import InvalidArgument

logger = logging.getLogger(__name__)


class TCP:
    """Protocol descriptor for IPv6 TCP sockets."""

    def type(self) -> int:
        return socket.SOCK_STREAM

    def protocol(self) -> int:
        return socket.IPPROTO_TCP

    def family(self) -> int:
        return socket.AF_INET6

    def __eq__(self, other):
        return isinstance(other, TCP)

    def __hash__(self) -> int:
        return hash(TCP)

    def __repr__(self) -> str:
        return "TCP()"


class IPv6Endpoint:

    __slots__ = ("_buf", "_rec")

    def __init__(self, port: int = 0, address: AddressLike | None = None):
        self._buf = native.new_buffer()
        self._rec = native.record(self._buf)
        self.port = port
        self.address = IPv6Address.loopback() if address is None else address

    @classmethod
    def from_native(cls, buf) -> IPv6Endpoint:
        """Build an endpoint from a sockaddr_in6 buffer returned by the OS.

        Scoped (link-local zone) or flow-labelled addresses are rejected;
        this endpoint type always carries zero in both fields.
        """
        addr, port, flowinfo, scope_id = native.decode(buf)
        if flowinfo or scope_id:
            logger.debug("rejected sockaddr_in6 with flowinfo=%d scope_id=%d", flowinfo, scope_id)
            raise InvalidArgument(
                f"flow label {flowinfo} / scope id {scope_id} not supported"
            )
        return cls(port, IPv6Address.from_bytes(addr))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def address(self) -> IPv6Address:
        return IPv6Address.from_bytes(self._rec["addr"].tobytes())

    @address.setter
    def address(self, value: AddressLike) -> None:
        raw = as_address(value).to_bytes()
        self._rec["addr"] = np.frombuffer(raw, dtype=np.uint8)

    @property
    def port(self) -> int:
        return int(self._rec["port"])

    @port.setter
    def port(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidArgument(f"port must be an int in 0..65535, got {value!r}")
        if not 0 <= value <= 0xFFFF:
            raise InvalidArgument(f"port out of range: {value!r}")
        self._rec["port"] = int(value)

    def protocol(self) -> TCP:
        return TCP()

    # ------------------------------------------------------------------
    # Native form
    # ------------------------------------------------------------------

    def data(self) -> memoryview:
        """Writable view of the packed sockaddr_in6."""
        return memoryview(self._buf)

    def native_size(self) -> int:
        return native.SOCKADDR_IN6_SIZE

    def set_native_size(self, size: int) -> None:
        """Validate a size reported by the OS; only the structure size is accepted."""
        native.check_size(size)

    def to_sockaddr(self) -> tuple[str, int, int, int]:
        """The 4-tuple accepted by ``socket.socket.connect``/``bind``."""
        return (self.address.to_text(), self.port, 0, 0)

    def __bytes__(self) -> bytes:
        return bytes(self._buf)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def _key(self) -> tuple[bytes, int]:
        return (self._rec["addr"].tobytes(), self.port)

    def equals(self, other: IPv6Endpoint) -> bool:
        return self._key() == other._key()

    def compare(self, other: IPv6Endpoint) -> int:
        """Order by address, then by port."""
        a, b = self._key(), other._key()
        return (a > b) - (a < b)

    def __eq__(self, other):
        if not isinstance(other, IPv6Endpoint):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        if not isinstance(other, IPv6Endpoint):
            return NotImplemented
        return self._key() != other._key()

    def __lt__(self, other):
        if not isinstance(other, IPv6Endpoint):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other):
        if not isinstance(other, IPv6Endpoint):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other):
        if not isinstance(other, IPv6Endpoint):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other):
        if not isinstance(other, IPv6Endpoint):
            return NotImplemented
        return self._key() >= other._key()

    # mutable in place
    __hash__ = None

    # ------------------------------------------------------------------
    # Copying and display
    # ------------------------------------------------------------------

    def copy(self) -> IPv6Endpoint:
        return IPv6Endpoint(self.port, self.address)

    __copy__ = copy

    def __deepcopy__(self, memo) -> IPv6Endpoint:
        return self.copy()

    def __reduce__(self):
        return (self.__class__, (self.port, self.address.to_bytes()))

    def __str__(self) -> str:
        return f"[{self.address.to_text()}]:{self.port}"

    def __repr__(self) -> str:
        return f"IPv6Endpoint({self.port}, {self.address.to_text()!r})"


def equals(a: IPv6Endpoint, b: IPv6Endpoint) -> bool:
    return a.equals(b)


def compare(a: IPv6Endpoint, b: IPv6Endpoint) -> int:
    return a.compare(b)
