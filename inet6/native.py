"""
Bit-exact ``sockaddr_in6`` layout.

The structure handed to connect/bind/accept is described as a numpy
structured dtype so that every field sits at an explicit byte offset in a
fixed 28-byte buffer.  No struct overlay is involved: fields are written and
read through the dtype, which fixes both offset and byte order.

Layouts
-------
Linux / Windows (and other SysV-style ABIs)
    0   family     u16  host order
    2   port       u16  network order
    4   flowinfo   u32  network order
    8   addr       16 × u8
    24  scope_id   u32  host order

BSD / macOS
    0   len        u8   always 28
    1   family     u8
    2.. as above

Both layouts are 28 bytes long.
"""

from __future__ import annotations

import errno
import logging
import numbers
import socket
import sys

import numpy as np

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

AF_INET6 = socket.AF_INET6

_BSD_PLATFORMS = ("darwin", "freebsd", "openbsd", "netbsd", "dragonfly")
BSD_LAYOUT = sys.platform.startswith(_BSD_PLATFORMS)

_TAIL = [
    ("port",     ">u2"),
    ("flowinfo", ">u4"),
    ("addr",     "u1", (16,)),
    ("scope_id", "=u4"),
]

if BSD_LAYOUT:
    SOCKADDR_IN6 = np.dtype([("len", "u1"), ("family", "u1")] + _TAIL)
else:
    SOCKADDR_IN6 = np.dtype([("family", "=u2")] + _TAIL)

SOCKADDR_IN6_SIZE = SOCKADDR_IN6.itemsize
FIELD_OFFSETS = {name: SOCKADDR_IN6.fields[name][1] for name in SOCKADDR_IN6.names}


# ---------------------------------------------------------------------------
# Buffer views
# ---------------------------------------------------------------------------

def new_buffer() -> bytearray:
    """Return a zeroed sockaddr_in6 buffer with the family tag filled in."""
    buf = bytearray(SOCKADDR_IN6_SIZE)
    rec = record(buf)
    if BSD_LAYOUT:
        rec["len"] = SOCKADDR_IN6_SIZE
    rec["family"] = AF_INET6
    return buf


def record(buf) -> np.ndarray:
    """Return a zero-dimensional structured view sharing memory with *buf*.

    Writes through the view land in *buf*; *buf* must be exactly
    SOCKADDR_IN6_SIZE bytes.  A bytearray stays locked against resizing for
    as long as the view is alive.
    """
    check_size(len(buf))
    return np.frombuffer(buf, dtype=SOCKADDR_IN6, count=1).reshape(())


def check_size(size: int) -> None:
    if isinstance(size, bool) or not isinstance(size, numbers.Integral):
        raise InvalidArgument(f"sockaddr_in6 size must be an int, got {size!r}", errno.EINVAL)
    if size != SOCKADDR_IN6_SIZE:
        raise InvalidArgument(
            f"sockaddr_in6 is {SOCKADDR_IN6_SIZE} bytes, got {size}", errno.EINVAL
        )


# ---------------------------------------------------------------------------
# Encode / decode
# ---------------------------------------------------------------------------

def encode(
    address: bytes,
    port: int,
    flowinfo: int = 0,
    scope_id: int = 0,
) -> bytearray:
    """Pack the fields into a fresh 28-byte buffer.

    *port* is given in host order; the dtype stores it big-endian.
    """
    if len(address) != 16:
        raise InvalidArgument(f"expected 16 address bytes, got {len(address)}")
    if not 0 <= port <= 0xFFFF:
        raise InvalidArgument(f"port out of range: {port!r}")
    buf = new_buffer()
    rec = record(buf)
    rec["port"] = port
    rec["flowinfo"] = flowinfo
    rec["addr"] = np.frombuffer(bytes(address), dtype=np.uint8)
    rec["scope_id"] = scope_id
    return buf


def decode(buf) -> tuple[bytes, int, int, int]:
    """Unpack a sockaddr_in6 buffer into (address, port, flowinfo, scope_id)."""
    data = bytes(buf)
    check_size(len(data))
    rec = record(data)
    if BSD_LAYOUT and int(rec["len"]) != SOCKADDR_IN6_SIZE:
        logger.debug("rejected sockaddr with sin6_len %d", int(rec["len"]))
        raise InvalidArgument(
            f"sin6_len must be {SOCKADDR_IN6_SIZE}, got {int(rec['len'])}", errno.EINVAL
        )
    family = int(rec["family"])
    if family != AF_INET6:
        logger.debug("rejected sockaddr with family %d", family)
        raise InvalidArgument(
            f"expected address family {AF_INET6}, got {family}", errno.EAFNOSUPPORT
        )
    return (
        rec["addr"].tobytes(),
        int(rec["port"]),
        int(rec["flowinfo"]),
        int(rec["scope_id"]),
    )
