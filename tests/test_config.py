import json

import pytest

from ft8rbn.config import get_default_settings, load_settings, settings_from_dict


def test_defaults():
    s = get_default_settings()
    assert s.software_id == "QMTECH FT8 RX 1.0"
    assert s.mode == "FT8"
    assert s.status_pacing_s == 0.001
    assert s.upload_warn_bytes == 65535


def test_load_settings_overrides(tmp_path):
    p = tmp_path / "settings.json"
    p.write_text(json.dumps({"software_id": "RP FT8", "status_pacing_s": 0}), encoding="utf-8")
    s = load_settings(p)
    assert s.software_id == "RP FT8"
    assert s.status_pacing_s == 0.0
    assert s.operator_grid == "AB12"


def test_unknown_and_bad_values_rejected(tmp_path):
    with pytest.raises(ValueError):
        settings_from_dict({"colour": "red"})
    with pytest.raises(ValueError):
        settings_from_dict({"mode": 8})
    with pytest.raises(ValueError):
        settings_from_dict({"status_pacing_s": -1})
    p = tmp_path / "list.json"
    p.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(p)
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.json")


@pytest.mark.parametrize("value", [None, [1], {"a": 1}, "fast"])
def test_non_numeric_values_rejected(value):
    with pytest.raises(ValueError, match="status_pacing_s"):
        settings_from_dict({"status_pacing_s": value})
    with pytest.raises(ValueError, match="upload_warn_bytes"):
        settings_from_dict({"upload_warn_bytes": value})
