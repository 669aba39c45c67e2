"""Upload FT8 decode logs to RBN Aggregator over the WSJT-X UDP protocol.

Public API:
- decode_line(line) -> DecodeEvent | None
- encode_event(event, state) -> (datagrams, state)
- upload_lines(lines, sink) -> UploadStats
"""
from .types import ChannelState, Datagram, DecodeEvent, UploadStats
from .line_decoder import decode_line, decode_lines
from .channels import DEFAULT_CHANNEL_TABLE, ChannelTable, load_channel_table
from .wire import encode_double, decode_double, read_datagram
from .encoder import DatagramEncoder, build_decode_datagram, build_status_datagram, encode_event
from .config import UploaderSettings, get_default_settings, load_settings
from .transport import DryRunSink, TransportError, UdpSink
from .uploader import upload_lines

__all__ = [
    "ChannelState",
    "Datagram",
    "DecodeEvent",
    "UploadStats",
    "decode_line",
    "decode_lines",
    "DEFAULT_CHANNEL_TABLE",
    "ChannelTable",
    "load_channel_table",
    "encode_double",
    "decode_double",
    "read_datagram",
    "DatagramEncoder",
    "build_decode_datagram",
    "build_status_datagram",
    "encode_event",
    "UploaderSettings",
    "get_default_settings",
    "load_settings",
    "DryRunSink",
    "TransportError",
    "UdpSink",
    "upload_lines",
]
