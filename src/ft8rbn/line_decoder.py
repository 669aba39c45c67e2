from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Iterable, Iterator, Optional, Tuple

from .constants import MAX_CALLSIGN_LEN, MAX_GRID_LEN
from .types import DecodeEvent

logger = logging.getLogger(__name__)

# yymmdd HHMMSS; like strptime, the blank between date and time is optional
_TIME_RE = re.compile(r"\s*(\d{2})(\d{2})(\d{2})\s*(\d{2})(\d{2})(\d{2})", re.ASCII)
# strtol / strtod prefixes, leading whitespace skipped
_INT_RE = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE | re.ASCII,
)
# scanf("%13s %4s")
_TOKENS_RE = re.compile(
    r"\s*(\S{1,%d})(?:\s*(\S{1,%d}))?" % (MAX_CALLSIGN_LEN, MAX_GRID_LEN),
    re.ASCII,
)


class _Cursor:
    """Left-to-right reader over one line; each read advances past its token."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _match(self, pattern: re.Pattern) -> Optional[re.Match]:
        m = pattern.match(self.text, self.pos)
        if m is not None:
            self.pos = m.end()
        return m

    def read_time(self) -> Optional[datetime]:
        m = self._match(_TIME_RE)
        if m is None:
            return None
        yy, mo, dd, hh, mi, ss = (int(g) for g in m.groups())
        # POSIX %y pivot: 69-99 -> 19xx, 00-68 -> 20xx
        year = 1900 + yy if yy >= 69 else 2000 + yy
        try:
            return datetime(year, mo, dd, hh, mi, ss)
        except ValueError:
            return None

    def read_int(self) -> Optional[int]:
        m = self._match(_INT_RE)
        return int(m.group(1)) if m is not None else None

    def read_float(self) -> Optional[float]:
        m = self._match(_FLOAT_RE)
        return float(m.group(1)) if m is not None else None

    def read_tokens(self) -> Tuple[str, str]:
        m = self._match(_TOKENS_RE)
        if m is None:
            return "", ""
        return m.group(1), m.group(2) or ""


def decode_line(line: str) -> Optional[DecodeEvent]:
    """Parse one decode record.

    Expected layout: ``yymmdd HHMMSS sync snr dt freq [call [grid]]``.
    Returns None when any of the six leading fields is missing or malformed;
    callsign and grid default to the empty string.
    """
    cur = _Cursor(line.rstrip("\r\n"))

    timestamp = cur.read_time()
    if timestamp is None:
        return None
    sync = cur.read_float()
    if sync is None:
        return None
    snr = cur.read_int()
    if snr is None:
        return None
    delta_time = cur.read_float()
    if delta_time is None:
        return None
    frequency_hz = cur.read_int()
    if frequency_hz is None:
        return None

    callsign, grid = cur.read_tokens()
    return DecodeEvent(
        timestamp=timestamp,
        sync=sync,
        snr=snr,
        delta_time=delta_time,
        frequency_hz=frequency_hz,
        callsign=callsign,
        grid=grid,
    )


def decode_lines(lines: Iterable[str]) -> Iterator[Tuple[int, Optional[DecodeEvent]]]:
    """Yield (line_number, event) for each line; event is None for skipped lines."""
    for lineno, line in enumerate(lines, start=1):
        event = decode_line(line)
        if event is None:
            logger.debug("line %d skipped: %r", lineno, line.rstrip("\r\n"))
        yield lineno, event
