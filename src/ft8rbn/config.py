from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import json

from .constants import (
    MODE,
    OPERATOR_CALL,
    OPERATOR_GRID,
    SOFTWARE_ID,
    STATUS_PACING_S,
    TARGET_GRID,
    UPLOAD_WARN_BYTES,
)


@dataclass(frozen=True)
class UploaderSettings:
    # Strings carried in every datagram; the aggregator reads only mode
    software_id: str = SOFTWARE_ID
    mode: str = MODE
    operator_call: str = OPERATOR_CALL
    operator_grid: str = OPERATOR_GRID
    target_grid: str = TARGET_GRID
    status_pacing_s: float = STATUS_PACING_S
    upload_warn_bytes: int = UPLOAD_WARN_BYTES


def get_default_settings() -> UploaderSettings:
    return UploaderSettings()


def settings_from_dict(data: dict, base: UploaderSettings | None = None) -> UploaderSettings:
    """Overlay a mapping of field names onto ``base`` (defaults when None)."""
    base = base or get_default_settings()
    known = {f.name for f in fields(UploaderSettings)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(unknown)}")
    values = {}
    for key, value in data.items():
        current = getattr(base, key)
        if isinstance(current, str):
            if not isinstance(value, str):
                raise ValueError(f"{key} must be a string")
            values[key] = value
        else:
            convert = float if isinstance(current, float) else int
            try:
                values[key] = convert(value)
            except (TypeError, ValueError, OverflowError) as exc:
                raise ValueError(f"{key} must be a number, got {value!r}") from exc
    if values.get("status_pacing_s", 0.0) < 0:
        raise ValueError("status_pacing_s must not be negative")
    return replace(base, **values)


def load_settings(path: str | Path) -> UploaderSettings:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{p}: settings must be a JSON object")
    return settings_from_dict(data)
