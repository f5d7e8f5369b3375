"""
Error taxonomy for address parsing, formatting and native-layout handling.

Kinds
-----
INVALID_ADDRESS_FORMAT  text does not parse as an IPv6 address
FORMAT_ERROR            binary → text conversion failed (never expected)
INVALID_ARGUMENT        caller passed a size, length or value out of range

Every exception carries its ``kind`` and an errno-style ``code`` taken from
the underlying OS conversion where one is available.
"""

from __future__ import annotations

import enum
import errno


class ErrorKind(enum.Enum):
    INVALID_ADDRESS_FORMAT = "invalid_address_format"
    FORMAT_ERROR           = "format_error"
    INVALID_ARGUMENT       = "invalid_argument"


class Inet6Error(ValueError):
    """Base class for all errors raised by this package."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, code: int = errno.EINVAL):
        super().__init__(message)
        self.code = code

    def __str__(self) -> str:
        return f"{super().__str__()} [{self.kind.value}, errno {self.code}]"


class InvalidAddressFormat(Inet6Error):
    kind = ErrorKind.INVALID_ADDRESS_FORMAT


class FormatError(Inet6Error):
    kind = ErrorKind.FORMAT_ERROR


class InvalidArgument(Inet6Error):
    kind = ErrorKind.INVALID_ARGUMENT


def os_error_code(exc: BaseException) -> int:
    """Return the errno carried by *exc*, or EINVAL when there is none.

    ``socket.inet_pton`` raises ``OSError`` with errno unset on Linux and
    ``ValueError``/``TypeError`` for some malformed inputs.
    """
    code = getattr(exc, "errno", None)
    return code if isinstance(code, int) and code else errno.EINVAL
