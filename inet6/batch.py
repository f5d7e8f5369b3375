"""
Vectorised helpers over many addresses and endpoints.

Addresses are held as an (n, 16) uint8 matrix, one row per address in
network byte order, the same layout the scalar types use.  Endpoints are
held as a structured array of native ``sockaddr_in6`` records, ready to be
written out as one contiguous block.

Ordering produced here is identical to ``IPv6Address.compare`` and
``IPv6Endpoint.compare``: lexicographic over the 16 bytes, then port.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from . import native
from .address import IPV6_ADDRESS_SIZE, AddressLike, IPv6Address, as_address
from .endpoint import IPv6Endpoint
from .errors import InvalidArgument


# ─── Addresses ────────────────────────────────────────────────────────────────

def addresses_to_array(addrs: Iterable[AddressLike]) -> np.ndarray:
    """Return an (n, 16) uint8 matrix of *addrs*."""
    raw = b"".join(as_address(a).to_bytes() for a in addrs)
    if not raw:
        return np.zeros((0, IPV6_ADDRESS_SIZE), dtype=np.uint8)
    return np.frombuffer(raw, dtype=np.uint8).reshape(-1, IPV6_ADDRESS_SIZE).copy()


def array_to_addresses(arr: np.ndarray) -> list[IPv6Address]:
    arr = np.asarray(arr, dtype=np.uint8)
    if arr.ndim != 2 or arr.shape[1] != IPV6_ADDRESS_SIZE:
        raise InvalidArgument(f"expected an (n, 16) matrix, got shape {arr.shape}")
    return [IPv6Address.from_bytes(row.tobytes()) for row in arr]


def sort_addresses(addrs: Iterable[AddressLike]) -> list[IPv6Address]:
    """Sort *addrs* by byte-wise lexicographic order."""
    arr = addresses_to_array(addrs)
    # lexsort treats the last key as primary → byte 0 goes last
    order = np.lexsort(tuple(arr[:, i] for i in range(IPV6_ADDRESS_SIZE - 1, -1, -1)))
    return array_to_addresses(arr[order])


def classify(addrs: Iterable[AddressLike]) -> dict[str, np.ndarray]:
    """Return one boolean mask per address class, aligned with *addrs*."""
    a = addresses_to_array(addrs)
    zero_96 = (a[:, :12] == 0).all(axis=1)
    low_32_gt_1 = (a[:, 12:15] != 0).any(axis=1) | (a[:, 15] > 1)
    return {
        "unspecified":     (a == 0).all(axis=1),
        "loopback":        zero_96 & (a[:, 12:15] == 0).all(axis=1) & (a[:, 15] == 1),
        "link_local":      (a[:, 0] == 0xFE) & ((a[:, 1] & 0xC0) == 0x80),
        "site_local":      (a[:, 0] == 0xFE) & ((a[:, 1] & 0xC0) == 0xC0),
        "ipv4_mapped":     (a[:, :10] == 0).all(axis=1) & (a[:, 10] == 0xFF) & (a[:, 11] == 0xFF),
        "ipv4_compatible": zero_96 & low_32_gt_1,
        "multicast":       a[:, 0] == 0xFF,
    }


# ─── Endpoints ────────────────────────────────────────────────────────────────

def pack_endpoints(endpoints: Iterable[IPv6Endpoint]) -> np.ndarray:
    """Return a structured array of SOCKADDR_IN6 records, one per endpoint."""
    raw = b"".join(bytes(ep) for ep in endpoints)
    if not raw:
        return np.zeros(0, dtype=native.SOCKADDR_IN6)
    return np.frombuffer(raw, dtype=native.SOCKADDR_IN6).copy()


def unpack_endpoints(records: np.ndarray) -> list[IPv6Endpoint]:
    if records.dtype != native.SOCKADDR_IN6:
        raise InvalidArgument(f"expected SOCKADDR_IN6 records, got dtype {records.dtype}")
    return [IPv6Endpoint.from_native(rec.tobytes()) for rec in records]


def sort_endpoints(endpoints: Iterable[IPv6Endpoint]) -> list[IPv6Endpoint]:
    """Sort *endpoints* by address, then port."""
    records = pack_endpoints(endpoints)
    addr = records["addr"]
    keys = (records["port"].astype(np.uint16),) + tuple(addr[:, i] for i in range(IPV6_ADDRESS_SIZE - 1, -1, -1))
    return unpack_endpoints(records[np.lexsort(keys)])
