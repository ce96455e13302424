# sercalo_tf/app/config.py
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from sercalo_tf.core.errors import ConfigError
from sercalo_tf.model.uart import Parity


@dataclass(frozen=True)
class TunableFilterConfig:
    port: Optional[str] = None
    baudrate: int = 9600
    parity: str = "N"
    read_timeout_s: float = 5.0
    write_timeout_s: float = 5.0
    lock_timeout_s: float = 1.0
    uart_settle_s: float = 0.2
    reset_settle_s: float = 1.0

    def with_overrides(self, **overrides: Any) -> "TunableFilterConfig":
        """Apply non-None overrides (e.g. CLI flags) after validating them."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **_resolve(values))

    @property
    def parity_setting(self) -> Parity:
        return Parity(self.parity)


_TYPES: Dict[str, str] = {
    "port": "str",
    "baudrate": "int",
    "parity": "parity",
    "read_timeout_s": "float",
    "write_timeout_s": "float",
    "lock_timeout_s": "float",
    "uart_settle_s": "float",
    "reset_settle_s": "float",
}


def load_config(path: str | Path, **overrides: Any) -> TunableFilterConfig:
    """
    Load a YAML mapping of TunableFilterConfig fields.

    Missing keys keep their defaults; non-None `overrides` win over the file.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(
            "Failed to load configuration file.",
            hint=str(e),
            details={"path": str(path)},
        ) from None

    if not isinstance(doc, dict):
        raise ConfigError(
            "Configuration file must contain a mapping.",
            details={"path": str(path)},
        )

    return TunableFilterConfig(**_resolve(doc)).with_overrides(**overrides)


def _resolve(values: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(TunableFilterConfig)}
    resolved: Dict[str, Any] = {}

    for key, value in values.items():
        if key not in known:
            raise ConfigError(
                f"Unknown configuration key '{key}'.",
                hint=f"Valid keys: {sorted(known)}",
                details={"key": key},
            )
        try:
            resolved[key] = _cast_param(value, _TYPES[key])
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"Invalid value for configuration key '{key}'.",
                hint=str(e),
                details={"key": key, "value": value, "expected_type": _TYPES[key]},
            ) from None

    return resolved


def _cast_param(value: Any, type_name: str) -> Any:
    if value is None:
        return None

    if type_name == "str":
        if not isinstance(value, str):
            raise TypeError(f"Expected str, got {type(value).__name__}")
        return value

    if type_name == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        return value

    if type_name == "float":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Expected float, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"Expected a non-negative duration, got {value}")
        return float(value)

    if type_name == "parity":
        # accept the letter ("E") or the name ("even")
        if isinstance(value, str):
            text = value.strip()
            if text.upper() in Parity.__members__:
                return Parity[text.upper()].value
            return Parity(text.upper()).value
        raise TypeError(f"Expected parity string, got {type(value).__name__}")

    raise TypeError(f"Unknown schema type '{type_name}'")
