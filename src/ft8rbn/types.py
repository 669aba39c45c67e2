from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .constants import MSG_STATUS


@dataclass(frozen=True)
class DecodeEvent:
    timestamp: datetime
    sync: float
    snr: int
    delta_time: float
    frequency_hz: int
    callsign: str = ""
    grid: str = ""

    @property
    def message(self) -> str:
        # Fake CQ built from the decode; a missing grid leaves a trailing space
        return f"CQ {self.callsign} {self.grid}"


@dataclass(frozen=True)
class ChannelState:
    previous_base_frequency: Optional[int] = None

    @classmethod
    def initial(cls) -> "ChannelState":
        return cls(previous_base_frequency=None)


@dataclass(frozen=True)
class Datagram:
    message_type: int
    payload: bytes

    @property
    def is_status(self) -> bool:
        return self.message_type == MSG_STATUS

    def __len__(self) -> int:
        return len(self.payload)


@dataclass(frozen=True)
class UploadStats:
    lines: int = 0
    skipped: int = 0
    events: int = 0
    status_datagrams: int = 0
    decode_datagrams: int = 0
    total_bytes: int = 0
