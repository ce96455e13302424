# sercalo_tf/model/enums.py
from __future__ import annotations

from enum import IntEnum
from typing import Dict, Optional


class PowerMode(IntEnum):
    LOW = 0
    NORMAL = 1


class ErrorMode(IntEnum):
    """How the device reports failures: `ERR <n>` or `ERR <text>`."""
    NUMBER = 0
    TEXT = 1


class ErrorCode(IntEnum):
    """Fault codes reported by the device in numeric error mode."""
    UNKNOWN = 0
    CRC = 2
    INVALID_PARAMETERS = 3
    UNKNOWN_COMMAND = 4
    BUFFER_OVERRUN = 6
    IDLE_MODE = 8
    INVALID_CHANNEL = 9
    INVALID_WAVELENGTH = 10

    @property
    def description(self) -> str:
        return ERROR_DESCRIPTIONS[self]

    @classmethod
    def from_number(cls, number: int) -> "ErrorCode":
        """Map a device error number; unrecognized numbers become UNKNOWN."""
        try:
            return cls(int(number))
        except ValueError:
            return cls.UNKNOWN


ERROR_DESCRIPTIONS: Dict[ErrorCode, str] = {
    ErrorCode.UNKNOWN: "Error code unknown",
    ErrorCode.CRC: "The CRC of the last SMBus/I2C command is invalid",
    ErrorCode.INVALID_PARAMETERS: "Invalid parameter(s)",
    ErrorCode.UNKNOWN_COMMAND: "Command unknown",
    ErrorCode.BUFFER_OVERRUN: "The command is too long and UART or SMBus/I2C receive buffer is full",
    ErrorCode.IDLE_MODE: "Command unavailable because the device is in idle mode",
    ErrorCode.INVALID_CHANNEL: "The memory location of the selected channel is empty",
    ErrorCode.INVALID_WAVELENGTH: "Current wavelength is unknown",
}


def describe(code: ErrorCode) -> Optional[str]:
    return ERROR_DESCRIPTIONS.get(code)
