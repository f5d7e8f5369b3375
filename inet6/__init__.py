"""
inet6: IPv6 address and TCP endpoint value types.

Two value types sit at the bottom of the socket stack:

  1. **IPv6Address**: a fixed 16-byte, big-endian address.  Parses and
     formats standard presentation text through the platform's
     inet_pton/inet_ntop, classifies the address (link-local, site-local,
     multicast, IPv4-mapped/compatible) and orders addresses by their bytes.

  2. **IPv6Endpoint**: address plus port, held as a bit-exact
     ``sockaddr_in6`` buffer that can be handed to connect/bind/accept.
     Flow label and scope id are always zero.

Supporting modules
------------------
  native       sockaddr_in6 layout as a numpy structured dtype
  translation  exploded / b4 / b1 / nibble notations
  batch        vectorised sort, classify and pack over many values
  errors       InvalidAddressFormat, FormatError, InvalidArgument

Usage
-----
    from inet6 import IPv6Address, IPv6Endpoint
    ep = IPv6Endpoint(8080, IPv6Address("2001:db8::1"))
    sock.connect(ep.to_sockaddr())
"""

from __future__ import annotations

from .address import IPV6_ADDRESS_SIZE, MAX_ADDR_V6_STR_LEN, IPv6Address
from .endpoint import TCP, IPv6Endpoint
from .errors import ErrorKind, FormatError, Inet6Error, InvalidAddressFormat, InvalidArgument
from .native import SOCKADDR_IN6, SOCKADDR_IN6_SIZE

__all__ = [
    "IPV6_ADDRESS_SIZE",
    "MAX_ADDR_V6_STR_LEN",
    "SOCKADDR_IN6",
    "SOCKADDR_IN6_SIZE",
    "ErrorKind",
    "FormatError",
    "IPv6Address",
    "IPv6Endpoint",
    "Inet6Error",
    "InvalidAddressFormat",
    "InvalidArgument",
    "TCP",
]

__version__ = "0.1.0"
