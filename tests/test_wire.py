import math
import struct

import pytest

from ft8rbn.wire import (
    DatagramReader,
    decode_double,
    encode_double,
    header,
    p32,
    pstr,
    read_datagram,
)


def test_zero_is_eight_zero_bytes():
    assert encode_double(0.0) == bytes(8)
    assert encode_double(-0.0) == bytes(8)


def test_known_pattern_is_big_endian_double():
    assert encode_double(0.2) == bytes.fromhex("3fc999999999999a")
    assert encode_double(1.0) == bytes.fromhex("3ff0000000000000")
    assert encode_double(-2.5) == bytes.fromhex("c004000000000000")


@pytest.mark.parametrize("v", [0.1, 0.2, 1.0, 1.5, 2.7, 12.0, 1e-3, 123456.789])
def test_negation_flips_only_sign_bit(v):
    pos = encode_double(v)
    neg = encode_double(-v)
    assert pos[0] & 0x80 == 0
    assert neg[0] == pos[0] | 0x80
    assert neg[1:] == pos[1:]


@pytest.mark.parametrize("v", [0.2, -1.3, 3.0, -0.05])
def test_matches_struct_big_endian(v):
    assert encode_double(v) == struct.pack(">d", v)
    assert decode_double(encode_double(v)) == v


def test_special_values_do_not_crash():
    assert len(encode_double(float("inf"))) == 8
    assert len(encode_double(float("nan"))) == 8
    assert math.isinf(decode_double(encode_double(float("-inf"))))


def test_int32_wraps_twos_complement():
    assert p32(10) == b"\x00\x00\x00\x0a"
    assert p32(-1) == b"\xff\xff\xff\xff"
    assert p32(-21) == struct.pack(">i", -21)


def test_length_prefixed_string():
    assert pstr("FT8") == b"\x00\x00\x00\x03FT8"
    assert pstr("") == b"\x00\x00\x00\x00"


def test_header_layout():
    assert header(2) == bytes.fromhex("adbccbda00000002 00000002".replace(" ", ""))


def test_reader_rejects_short_and_foreign_packets():
    with pytest.raises(ValueError):
        read_datagram(b"\xad\xbc")
    with pytest.raises(ValueError):
        read_datagram(bytes(12))
    with pytest.raises(ValueError):
        read_datagram(bytes.fromhex("adbccbda00000003") + p32(2))
    with pytest.raises(ValueError):
        read_datagram(header(7) + pstr("x"))


def test_reader_primitives():
    r = DatagramReader(p32(-5) + pstr("abc") + b"\x01")
    assert r.read_i32() == -5
    assert r.read_str() == "abc"
    assert r.read_bool() is True
    assert r.remaining == 0
    with pytest.raises(ValueError):
        r.read_u8()


def test_undecodable_bytes_written_back_raw():
    s = b"AB1\xe9YZ".decode("utf-8", errors="surrogateescape")
    assert pstr(s) == b"\x00\x00\x00\x06AB1\xe9YZ"
