from __future__ import annotations

"""
Field packers for the WSJT-X QDataStream layout, the 8-byte delta-time codec,
and a reader that parses produced datagrams back for diagnostics.
"""

import struct
from typing import Dict

import numpy as np

from .constants import HEADER, MAGIC, MSG_DECODE, MSG_STATUS, SCHEMA_VERSION

_ZERO_DOUBLE = bytes(8)


def p8(value: int) -> bytes:
    return struct.pack(">B", int(value) & 0xFF)


def pbool(value: bool) -> bytes:
    return p8(1 if value else 0)


def p32(value: int) -> bytes:
    # Two's complement, wrapped to 32 bits like the receiver's int32 fields
    return struct.pack(">I", int(value) & 0xFFFFFFFF)


def pstr(s: str) -> bytes:
    # Undecodable input bytes were kept as surrogates; write them back unchanged
    b = s.encode("utf-8", errors="surrogateescape")
    return p32(len(b)) + b


def encode_double(value: float) -> bytes:
    """Encode a double as sign/11-bit exponent/52-bit mantissa, 8 bytes.

    Zero (either sign) is 8 zero bytes. Otherwise the 64-bit pattern is cut
    into two 32-bit words, each written big-endian, high word first.
    """
    value = float(value)
    if value == 0.0:
        return _ZERO_DOUBLE
    bits = int(np.array([value], dtype=np.float64).view(np.uint64)[0])
    words = np.array([bits >> 32, bits & 0xFFFFFFFF], dtype=">u4")
    return words.tobytes()


def decode_double(data: bytes) -> float:
    if len(data) != 8:
        raise ValueError("double field must be 8 bytes")
    words = np.frombuffer(data, dtype=">u4")
    bits = (int(words[0]) << 32) | int(words[1])
    return float(np.array([bits], dtype=np.uint64).view(np.float64)[0])


def header(message_type: int) -> bytes:
    return HEADER + p32(message_type)


class DatagramReader:
    """Sequential reader over one datagram payload."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    def _take(self, size: int) -> bytes:
        if self.offset + size > len(self.data):
            raise ValueError("datagram too short")
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def read_u8(self) -> int:
        return self._take(1)[0]

    def read_bool(self) -> bool:
        return self.read_u8() != 0

    def read_u32(self) -> int:
        return struct.unpack(">I", self._take(4))[0]

    def read_i32(self) -> int:
        return struct.unpack(">i", self._take(4))[0]

    def read_u64(self) -> int:
        return struct.unpack(">Q", self._take(8))[0]

    def read_double(self) -> float:
        return decode_double(self._take(8))

    def read_str(self) -> str:
        length = self.read_u32()
        return self._take(length).decode("utf-8", errors="replace")

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset


def read_datagram(data: bytes) -> Dict[str, object]:
    """Parse a status or decode datagram into a dict of its fields.

    Raises ValueError for a foreign magic/schema, an unknown message type,
    a truncated payload or trailing bytes.
    """
    r = DatagramReader(data)
    if r.read_u32() != MAGIC:
        raise ValueError("bad magic")
    schema = r.read_u32()
    if schema != SCHEMA_VERSION:
        raise ValueError(f"unsupported schema {schema}")
    msg_type = r.read_u32()
    out: Dict[str, object] = {"type": msg_type, "id": r.read_str()}
    if msg_type == MSG_STATUS:
        out["frequency_hz"] = r.read_u64()
        out["mode"] = r.read_str()
        out["dx_call"] = r.read_str()
        out["report"] = r.read_str()
        out["tx_mode"] = r.read_str()
        out["tx_enabled"] = r.read_bool()
        out["transmitting"] = r.read_bool()
        out["decoding"] = r.read_bool()
        out["rx_df"] = r.read_i32()
        out["tx_df"] = r.read_i32()
        out["de_call"] = r.read_str()
        out["de_grid"] = r.read_str()
        out["dx_grid"] = r.read_str()
        out["tx_watchdog"] = r.read_bool()
        out["submode"] = r.read_str()
        out["fast_mode"] = r.read_bool()
        out["special_mode"] = r.read_u8()
    elif msg_type == MSG_DECODE:
        out["new"] = r.read_bool()
        out["time"] = r.read_u32()
        out["snr"] = r.read_i32()
        out["delta_time"] = r.read_double()
        out["delta_frequency"] = r.read_i32()
        out["mode"] = r.read_str()
        out["message"] = r.read_str()
        out["low_confidence"] = r.read_bool()
        out["off_air"] = r.read_bool()
    else:
        raise ValueError(f"unknown message type {msg_type}")
    if r.remaining:
        raise ValueError(f"{r.remaining} trailing bytes")
    return out
