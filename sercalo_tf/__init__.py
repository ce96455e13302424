# sercalo_tf/__init__.py
"""Host driver for Sercalo MEMS tunable filters (ASCII serial protocol)."""

from sercalo_tf.app import TunableFilterConfig, create, load_config, open_device
from sercalo_tf.core.errors import (
    DeviceError,
    LockTimeout,
    MalformedResponse,
    NotConnected,
    OutOfRange,
    SercaloError,
)
from sercalo_tf.device import AsyncTunableFilter, TunableFilter
from sercalo_tf.model import ErrorCode, ErrorMode, Parity, PowerMode
from sercalo_tf.protocol.codec import Position

__all__ = [
    "TunableFilter", "AsyncTunableFilter",
    "TunableFilterConfig", "create", "load_config", "open_device",
    "ErrorCode", "ErrorMode", "Parity", "PowerMode", "Position",
    "SercaloError", "DeviceError", "LockTimeout", "MalformedResponse", "NotConnected", "OutOfRange",
]
