from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from sercalo_tf.app.config import TunableFilterConfig, load_config
from sercalo_tf.core.errors import ConfigError
from sercalo_tf.model.uart import Parity


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "tf.yml"
    p.write_text(textwrap.dedent(text), encoding="utf-8")
    return p


def test_defaults():
    cfg = TunableFilterConfig()

    assert cfg.port is None
    assert cfg.baudrate == 9600
    assert cfg.parity_setting is Parity.NONE
    assert cfg.read_timeout_s == 5.0
    assert cfg.lock_timeout_s == 1.0
    assert cfg.uart_settle_s == 0.2
    assert cfg.reset_settle_s == 1.0


def test_load_yaml(tmp_path):
    p = _write(tmp_path, """
        port: /dev/ttyUSB0
        baudrate: 115200
        parity: even
        lock_timeout_s: 2
    """)

    cfg = load_config(p)

    assert cfg.port == "/dev/ttyUSB0"
    assert cfg.baudrate == 115200
    assert cfg.parity == "E"
    assert cfg.lock_timeout_s == 2.0
    assert isinstance(cfg.lock_timeout_s, float)


def test_empty_file_gives_defaults(tmp_path):
    assert load_config(_write(tmp_path, "")) == TunableFilterConfig()


def test_overrides_win_over_file(tmp_path):
    p = _write(tmp_path, "port: COM1\n")

    cfg = load_config(p, port="COM7", baudrate=None)

    assert cfg.port == "COM7"
    assert cfg.baudrate == 9600


def test_unknown_key_rejected(tmp_path):
    with pytest.raises(ConfigError) as ei:
        load_config(_write(tmp_path, "speed: 9600\n"))
    assert ei.value.details == {"key": "speed"}


@pytest.mark.parametrize("text", ["baudrate: fast\n", "baudrate: true\n", "parity: X\n", "port: 3\n"])
def test_bad_types_rejected(tmp_path, text):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, text))


def test_non_mapping_rejected(tmp_path):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "- a\n- b\n"))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError) as ei:
        load_config(tmp_path / "nope.yml")
    assert ei.value.code == "config_error"


def test_invalid_yaml(tmp_path):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "port: [unclosed\n"))


@pytest.mark.parametrize("key", ["lock_timeout_s", "read_timeout_s", "uart_settle_s", "reset_settle_s"])
def test_negative_duration_rejected(tmp_path, key):
    with pytest.raises(ConfigError) as ei:
        load_config(_write(tmp_path, f"{key}: -0.5\n"))
    assert ei.value.details["key"] == key


def test_negative_override_rejected():
    with pytest.raises(ConfigError):
        TunableFilterConfig().with_overrides(lock_timeout_s=-0.5)
