"""
inet6 command-line entry point.

Usage:
    python main.py inspect <address> [<address> ...]
    python main.py endpoint --address <address> --port <port>
    python main.py sort <address> [<address> ...]

Commands:
    inspect     Canonical/exploded text, raw bytes and address classes
    endpoint    Build an endpoint and dump its native sockaddr_in6 bytes
    sort        Print addresses in canonical (byte-wise) order

Exit status is 0 on success and 2 when an address or argument is invalid.
"""

import argparse
import logging
import sys

from inet6 import IPv6Address, IPv6Endpoint, Inet6Error, native
from inet6.batch import sort_addresses
from inet6.translation import to_exploded

logger = logging.getLogger("inet6")

CLASSES = [
    "is_unspecified",
    "is_loopback",
    "is_link_local",
    "is_site_local",
    "is_ipv4_mapped",
    "is_ipv4_compatible",
    "is_multicast",
]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="IPv6 address and endpoint inspection"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_inspect = sub.add_parser("inspect", help="Show text forms and classes of addresses")
    p_inspect.add_argument("addresses", nargs="+", help="IPv6 addresses")

    p_endpoint = sub.add_parser("endpoint", help="Dump the native form of an endpoint")
    p_endpoint.add_argument(
        "--address", "-a",
        default=None,
        help="IPv6 address (default: ::1)",
    )
    p_endpoint.add_argument(
        "--port", "-p",
        type=int,
        default=0,
        help="Port in host byte order (default: 0)",
    )

    p_sort = sub.add_parser("sort", help="Sort addresses byte-wise")
    p_sort.add_argument("addresses", nargs="+", help="IPv6 addresses")

    return parser.parse_args(argv)


def cmd_inspect(args) -> None:
    sep = "─" * 50
    for text in args.addresses:
        addr = IPv6Address(text)
        print(sep)
        print(f"  Address       : {addr}")
        print(f"  Exploded      : {to_exploded(addr)}")
        print(f"  Bytes         : {addr.to_bytes().hex(' ')}")
        classes = [name[3:] for name in CLASSES if getattr(addr, name)]
        print(f"  Classes       : {', '.join(classes) if classes else '-'}")
        if addr.is_ipv4_mapped or addr.is_ipv4_compatible:
            print(f"  IPv4          : {addr.to_ipv4()}")
    print(sep)


def cmd_endpoint(args) -> None:
    ep = IPv6Endpoint(args.port, args.address)
    print(f"[*] Endpoint:    {ep}")
    print(f"[*] Native size: {ep.native_size()}")
    for name, offset in native.FIELD_OFFSETS.items():
        size = native.SOCKADDR_IN6.fields[name][0].itemsize
        print(f"    {name:<9} @{offset:<2} {bytes(ep)[offset:offset + size].hex(' ')}")


def cmd_sort(args) -> None:
    for addr in sort_addresses(args.addresses):
        print(addr)


COMMANDS = {
    "inspect":  cmd_inspect,
    "endpoint": cmd_endpoint,
    "sort":     cmd_sort,
}


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("running command: %s", args.command)
    try:
        COMMANDS[args.command](args)
    except Inet6Error as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
