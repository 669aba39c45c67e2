from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple
import json

import numpy as np

from .constants import CHANNEL_WIDTH_HZ, FALLBACK_OFFSET_HZ, FALLBACK_STEP_HZ

# FT8 dial frequencies the receiver listens on, in kHz
DEFAULT_CHANNELS_KHZ: Tuple[int, ...] = (
    1840,
    3573,
    5357,
    7056,
    7074,
    10131,
    10136,
    14074,
    18095,
    18100,
    21074,
    24911,
    24915,
    28074,
    50313,
    50323,
)


def fallback_base_frequency(frequency_hz: int) -> int:
    """Base for a frequency outside every window: 1000 * floor((f - 200) / 1000)."""
    return FALLBACK_STEP_HZ * ((int(frequency_hz) - FALLBACK_OFFSET_HZ) // FALLBACK_STEP_HZ)


class ChannelTable:
    """Immutable map from a decode frequency to its channel base frequency.

    Each rule covers the window [base, base + 4 kHz). Windows may not overlap.
    Frequencies that fall in no window use :func:`fallback_base_frequency`.
    """

    def __init__(self, bases_hz: Iterable[int], width_hz: int = CHANNEL_WIDTH_HZ):
        bases = np.unique(np.asarray(list(bases_hz), dtype=np.int64))
        if width_hz <= 0:
            raise ValueError("channel width must be positive")
        if bases.size > 1 and np.any(np.diff(bases) < width_hz):
            raise ValueError("channel windows overlap")
        bases.setflags(write=False)
        self._bases = bases
        self._width = int(width_hz)

    @classmethod
    def from_khz(cls, bases_khz: Iterable[int]) -> "ChannelTable":
        bases = []
        for k in bases_khz:
            try:
                bases.append(int(k) * 1000)
            except (TypeError, ValueError, OverflowError) as exc:
                raise ValueError(f"channel base must be a number of kHz, got {k!r}") from exc
        return cls(bases)

    @property
    def bases_hz(self) -> Tuple[int, ...]:
        return tuple(int(b) for b in self._bases)

    @property
    def width_hz(self) -> int:
        return self._width

    def windows(self) -> List[Tuple[int, int, int]]:
        """Return (low_hz, high_hz_exclusive, base_hz) per rule, ascending."""
        return [(int(b), int(b) + self._width, int(b)) for b in self._bases]

    def lookup(self, frequency_hz: int) -> Optional[int]:
        """Return the matching window base, or None when no rule applies."""
        if self._bases.size == 0:
            return None
        # Last window starting at or below the frequency
        idx = int(np.searchsorted(self._bases, frequency_hz, side="right")) - 1
        if idx < 0:
            return None
        base = int(self._bases[idx])
        if frequency_hz < base + self._width:
            return base
        return None

    def resolve(self, frequency_hz: int) -> int:
        base = self.lookup(frequency_hz)
        if base is None:
            return fallback_base_frequency(frequency_hz)
        return base

    def __len__(self) -> int:
        return int(self._bases.size)

    def __repr__(self) -> str:
        khz = ", ".join(str(b // 1000) for b in self.bases_hz)
        return f"ChannelTable([{khz}] kHz, width={self._width} Hz)"


DEFAULT_CHANNEL_TABLE = ChannelTable.from_khz(DEFAULT_CHANNELS_KHZ)


def load_channel_table(path: str | Path) -> ChannelTable:
    """Load a table from JSON: either a list of kHz bases or {"channels_khz": [...]}."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        if "channels_khz" not in data:
            raise ValueError(f"{p}: missing 'channels_khz'")
        data = data["channels_khz"]
    if not isinstance(data, Sequence) or isinstance(data, str):
        raise ValueError(f"{p}: channel list must be a JSON array")
    return ChannelTable.from_khz(data)
