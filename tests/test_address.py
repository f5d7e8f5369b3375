"""Tests for the IPv6Address value type."""

import copy
import errno
import itertools
import pickle
import random

import pytest

from inet6 import ErrorKind, InvalidAddressFormat, InvalidArgument, IPv6Address
from inet6.address import compare, equals

SAMPLES = [
    "::",
    "::1",
    "::2",
    "::ffff:192.0.2.1",
    "::192.0.2.1",
    "2001:db8::1",
    "2001:db8::2",
    "2001:db8:1::",
    "fe80::1",
    "fec0::1",
    "ff02::1",
    "ffff:ffff:ffff:ffff:ffff:ffff:ffff:ffff",
]


class TestConstruction:
    def test_default_is_any(self):
        assert IPv6Address().to_bytes() == bytes(16)
        assert IPv6Address() == IPv6Address.any()

    def test_loopback_constant(self):
        assert IPv6Address.loopback().to_bytes() == bytes(15) + b"\x01"

    def test_from_bytes_keeps_pattern(self):
        rng = random.Random(6)
        for _ in range(50):
            raw = bytes(rng.randrange(256) for _ in range(16))
            assert IPv6Address(raw).to_bytes() == raw
            assert IPv6Address.from_bytes(bytearray(raw)).to_bytes() == raw

    def test_from_sequence_of_ints(self):
        addr = IPv6Address([0xFE, 0x80] + [0] * 13 + [1])
        assert addr.to_text() == "fe80::1"

    def test_from_memoryview(self):
        raw = bytes(range(16))
        assert IPv6Address(memoryview(raw)).to_bytes() == raw

    def test_copy_constructor(self):
        a = IPv6Address("2001:db8::1")
        b = IPv6Address(a)
        assert a == b
        assert b.to_text() == "2001:db8::1"

    @pytest.mark.parametrize("raw", [b"", bytes(15), bytes(17), bytes(32)])
    def test_wrong_length_bytes_rejected(self, raw):
        with pytest.raises(InvalidArgument):
            IPv6Address(raw)

    def test_int_argument_rejected(self):
        with pytest.raises(InvalidArgument):
            IPv6Address(16)

    def test_int_view(self):
        assert IPv6Address.from_int(1) == IPv6Address.loopback()
        assert IPv6Address("2001:db8::1").to_int() == 0x20010DB8000000000000000000000001
        assert int(IPv6Address.from_int(12345)) == 12345

    @pytest.mark.parametrize("value", [-1, 1 << 128])
    def test_int_out_of_range(self, value):
        with pytest.raises(InvalidArgument):
            IPv6Address.from_int(value)

    @pytest.mark.parametrize("value", [1.5, 1.0, True, "1", None])
    def test_int_wrong_type(self, value):
        with pytest.raises(InvalidArgument):
            IPv6Address.from_int(value)


class TestTextParsing:
    @pytest.mark.parametrize("text", SAMPLES)
    def test_round_trip(self, text):
        addr = IPv6Address(text)
        assert IPv6Address(addr.to_text()) == addr

    def test_round_trip_random_patterns(self):
        rng = random.Random(16)
        for _ in range(500):
            addr = IPv6Address(bytes(rng.randrange(256) for _ in range(16)))
            assert IPv6Address.from_text(addr.to_text()) == addr
        # runs of zero groups exercise the :: compression
        for _ in range(500):
            groups = [rng.choice((0, 0, 0, rng.randrange(1 << 16))) for _ in range(8)]
            addr = IPv6Address(b"".join(g.to_bytes(2, "big") for g in groups))
            assert IPv6Address.from_text(addr.to_text()) == addr

    def test_full_notation(self):
        addr = IPv6Address("2001:0db8:0000:0000:0000:0000:0000:0001")
        assert addr.to_text() == "2001:db8::1"

    def test_uppercase_accepted(self):
        assert IPv6Address("FF02::1").to_text() == "ff02::1"

    def test_embedded_ipv4(self):
        addr = IPv6Address("::ffff:192.0.2.1")
        assert addr.to_bytes() == bytes(10) + b"\xff\xff\xc0\x00\x02\x01"

    @pytest.mark.parametrize("text", [
        "not-an-address",
        "",
        "1:2:3:4:5:6:7:8:9",
        "::1::",
        "12345::",
        "2001:db8::g",
        " ::1",
        "::1 ",
        "192.0.2.1",
        "fe80::1%eth0",
        "::1\x00",
    ])
    def test_invalid_text_rejected(self, text):
        with pytest.raises(InvalidAddressFormat) as info:
            IPv6Address(text)
        assert info.value.kind is ErrorKind.INVALID_ADDRESS_FORMAT
        assert isinstance(info.value.code, int) and info.value.code != 0

    def test_invalid_text_is_value_error(self):
        with pytest.raises(ValueError):
            IPv6Address.from_text("not-an-address")

    def test_missing_diagnostic_defaults_to_einval(self):
        with pytest.raises(InvalidAddressFormat) as info:
            IPv6Address("not-an-address")
        assert info.value.code == errno.EINVAL

    def test_non_string_rejected(self):
        with pytest.raises(InvalidAddressFormat):
            IPv6Address.from_text(b"::1")

    def test_parse_returns_none(self):
        assert IPv6Address.parse("::1") == IPv6Address.loopback()
        assert IPv6Address.parse("nope") is None


class TestFormatting:
    def test_any(self):
        assert IPv6Address(bytes(16)).to_text() == "::"

    def test_loopback(self):
        assert IPv6Address.loopback().to_text() == "::1"

    def test_longest_zero_run_compressed(self):
        addr = IPv6Address("2001:db8:0:0:1:0:0:0")
        assert addr.to_text() == "2001:db8:0:0:1::"

    def test_lowercase(self):
        assert IPv6Address("2001:DB8:ABCD::EF").to_text() == "2001:db8:abcd::ef"

    def test_str_and_repr(self):
        addr = IPv6Address("fe80::1")
        assert str(addr) == "fe80::1"
        assert repr(addr) == "IPv6Address('fe80::1')"

    def test_bytes_dunder(self):
        assert bytes(IPv6Address.loopback()) == bytes(15) + b"\x01"


class TestClassification:
    def test_multicast(self):
        assert IPv6Address("ff02::1").is_multicast
        assert not IPv6Address("fe80::1").is_multicast

    def test_link_local(self):
        assert IPv6Address("fe80::1").is_link_local
        assert IPv6Address("febf:ffff::1").is_link_local
        assert not IPv6Address("fec0::1").is_link_local
        assert not IPv6Address("2001:db8::1").is_link_local

    def test_site_local(self):
        assert IPv6Address("fec0::1").is_site_local
        assert IPv6Address("feff::1").is_site_local
        assert not IPv6Address("fe80::1").is_site_local

    def test_ipv4_mapped(self):
        assert IPv6Address("::ffff:192.0.2.1").is_ipv4_mapped
        assert not IPv6Address("::192.0.2.1").is_ipv4_mapped
        assert not IPv6Address("::fffe:192.0.2.1").is_ipv4_mapped

    def test_ipv4_compatible(self):
        assert IPv6Address("::192.0.2.1").is_ipv4_compatible
        assert IPv6Address("::2").is_ipv4_compatible
        assert not IPv6Address("::").is_ipv4_compatible
        assert not IPv6Address("::1").is_ipv4_compatible
        assert not IPv6Address("::ffff:192.0.2.1").is_ipv4_compatible

    def test_unspecified_and_loopback(self):
        assert IPv6Address().is_unspecified
        assert IPv6Address.loopback().is_loopback
        assert not IPv6Address.loopback().is_unspecified

    def test_to_ipv4(self):
        assert IPv6Address("::ffff:192.0.2.1").to_ipv4() == "192.0.2.1"
        assert IPv6Address("::10.0.0.1").to_ipv4() == "10.0.0.1"
        with pytest.raises(InvalidArgument):
            IPv6Address("2001:db8::1").to_ipv4()


class TestOrdering:
    def test_lexicographic(self):
        assert IPv6Address("::1") < IPv6Address("::2")
        assert IPv6Address("::ffff") < IPv6Address("1::")
        assert IPv6Address("fe80::1") > IPv6Address("2001:db8::1")

    def test_equality_and_hash(self):
        a = IPv6Address("2001:db8::1")
        b = IPv6Address("2001:0db8:0:0:0:0:0:1")
        assert a == b
        assert not a != b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_compare_functions(self):
        a, b = IPv6Address("::1"), IPv6Address("::2")
        assert compare(a, b) == -1
        assert compare(b, a) == 1
        assert compare(a, a) == 0
        assert equals(a, IPv6Address.loopback())
        assert not equals(a, b)

    def test_not_comparable_with_str(self):
        assert IPv6Address("::1") != "::1"
        with pytest.raises(TypeError):
            IPv6Address("::1") < "::2"

    def test_strict_total_order(self):
        addrs = [IPv6Address(t) for t in SAMPLES]
        for a, b in itertools.product(addrs, repeat=2):
            assert (a.compare(b) == 0) == (a == b)
            assert a.compare(b) == -b.compare(a)
            assert not (a < b and b < a)
        for a, b, c in itertools.permutations(addrs, 3):
            if a < b and b < c:
                assert a < c

    def test_sorting_matches_bytes(self):
        addrs = [IPv6Address(t) for t in SAMPLES]
        random.Random(1).shuffle(addrs)
        assert [a.to_bytes() for a in sorted(addrs)] == sorted(a.to_bytes() for a in addrs)


class TestValueSemantics:
    def test_immutable(self):
        addr = IPv6Address("::1")
        with pytest.raises(AttributeError):
            addr.foo = 1

    def test_copy_and_pickle(self):
        addr = IPv6Address("2001:db8::1")
        assert copy.copy(addr) == addr
        assert copy.deepcopy(addr) == addr
        assert pickle.loads(pickle.dumps(addr)) == addr
