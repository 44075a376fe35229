import json

import pytest

from otpbridge.config import BridgeConfig, get_config_path, load_config
from otpbridge.config.loader import camel_to_snake, convert_keys


def test_defaults_when_file_missing(tmp_path):
    cfg = load_config(tmp_path / "missing.json")
    assert cfg.protocol.frame_byte_order == "native"
    assert cfg.device.serial is None
    assert cfg.matching.case_sensitive is False


def test_load_camel_case_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "protocol": {"frameByteOrder": "little"},
                "device": {"serial": 12345678, "oathPassword": "pw"},
                "logging": {"stderrLevel": "DEBUG"},
            }
        ),
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.protocol.frame_byte_order == "little"
    assert cfg.device.serial == 12345678
    assert cfg.device.oath_password == "pw"
    assert cfg.logging.stderr_level == "DEBUG"


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"protocol": {"frame_byte_order": "little"}}), encoding="utf-8")
    monkeypatch.setenv("OTPBRIDGE_PROTOCOL__FRAME_BYTE_ORDER", "big")
    assert load_config(path).protocol.frame_byte_order == "big"


@pytest.mark.parametrize(
    "content",
    ["{not json", "[]", json.dumps({"protocol": {"frameByteOrder": "middle"}})],
)
def test_invalid_file_raises_value_error(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError) as excinfo:
        load_config(path)
    assert str(path) in str(excinfo.value)


def test_default_path_under_home(tmp_path):
    assert get_config_path() == tmp_path / ".otpbridge" / "config.json"


def test_log_dir_expands_user(tmp_path):
    cfg = BridgeConfig()
    assert cfg.logging.log_dir == tmp_path / ".otpbridge" / "logs"


def test_key_conversion():
    assert camel_to_snake("frameByteOrder") == "frame_byte_order"
    assert convert_keys({"a": [{"bC": 1}]}) == {"a": [{"b_c": 1}]}
