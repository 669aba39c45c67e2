from __future__ import annotations

from typing import List, Optional, Tuple

from .channels import DEFAULT_CHANNEL_TABLE, ChannelTable
from .config import UploaderSettings, get_default_settings
from .constants import MSG_DECODE, MSG_STATUS
from .types import ChannelState, Datagram, DecodeEvent
from .wire import encode_double, header, p8, pbool, p32, pstr


def build_status_datagram(
    base_frequency_hz: int,
    event: DecodeEvent,
    settings: Optional[UploaderSettings] = None,
) -> Datagram:
    """Status message (type 1) announcing the receiver's dial frequency.

    Only frequency and mode matter to the aggregator; the rest satisfy the schema.
    """
    s = settings or get_default_settings()
    buf = bytearray(header(MSG_STATUS))
    buf += pstr(s.software_id)
    buf += p32(0)  # dial frequency, high word
    buf += p32(base_frequency_hz)
    buf += pstr(s.mode)
    buf += pstr(event.callsign)  # DX call
    buf += pstr(str(event.snr))  # report
    buf += pstr(s.mode)  # tx mode
    buf += pbool(False)  # tx enabled
    buf += pbool(False)  # transmitting
    buf += pbool(False)  # decoding
    buf += p32(0)  # rx df
    buf += p32(0)  # tx df
    buf += pstr(s.operator_call)
    buf += pstr(s.operator_grid)
    buf += pstr(s.target_grid)
    buf += pbool(False)  # tx watchdog
    buf += pstr("")  # submode
    buf += pbool(False)  # fast mode
    buf += p8(0)  # special operation mode
    return Datagram(MSG_STATUS, bytes(buf))


def build_decode_datagram(
    event: DecodeEvent,
    delta_hz: int,
    settings: Optional[UploaderSettings] = None,
) -> Datagram:
    """Decode message (type 2) carrying SNR, dt, audio offset and a CQ text."""
    s = settings or get_default_settings()
    buf = bytearray(header(MSG_DECODE))
    buf += pstr(s.software_id)
    buf += pbool(True)  # new
    buf += p32(0)  # time
    buf += p32(event.snr)
    buf += encode_double(event.delta_time)
    buf += p32(delta_hz)
    buf += pstr(s.mode)
    buf += pstr(event.message)
    buf += pbool(False)  # low confidence
    buf += pbool(False)  # off air
    return Datagram(MSG_DECODE, bytes(buf))


def encode_event(
    event: DecodeEvent,
    state: ChannelState,
    table: ChannelTable = DEFAULT_CHANNEL_TABLE,
    settings: Optional[UploaderSettings] = None,
) -> Tuple[List[Datagram], ChannelState]:
    """Return the datagrams for one decode and the successor channel state.

    A status datagram precedes the decode whenever the resolved base frequency
    differs from the one in ``state``.
    """
    base = table.resolve(event.frequency_hz)
    delta_hz = event.frequency_hz - base

    out: List[Datagram] = []
    if base != state.previous_base_frequency:
        out.append(build_status_datagram(base, event, settings))
    out.append(build_decode_datagram(event, delta_hz, settings))
    return out, ChannelState(previous_base_frequency=base)


class DatagramEncoder:
    """Owns the channel state across a run."""

    def __init__(
        self,
        table: ChannelTable = DEFAULT_CHANNEL_TABLE,
        settings: Optional[UploaderSettings] = None,
        state: Optional[ChannelState] = None,
    ):
        self.table = table
        self.settings = settings or get_default_settings()
        self.state = state or ChannelState.initial()

    def encode(self, event: DecodeEvent) -> List[Datagram]:
        datagrams, self.state = encode_event(event, self.state, self.table, self.settings)
        return datagrams
