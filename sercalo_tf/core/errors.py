# sercalo_tf/core/errors.py
from __future__ import annotations

from typing import Optional

from sercalo_tf.model.enums import ErrorCode


class SercaloError(Exception):
    """
    Base class for all expected operational errors of the tunable filter driver.
    """

    #: Stable machine-readable identifier (for CLI exit mapping, logs, etc.)
    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Configuration errors (no hardware access yet)
# ---------------------------------------------------------------------------

class ConfigError(SercaloError):
    """
    Driver configuration is invalid.

    Examples:
      - unreadable / malformed YAML file
      - unknown configuration key
      - value of the wrong type
    """
    code = "config_error"


# ---------------------------------------------------------------------------
# Transport / connection errors
# ---------------------------------------------------------------------------

class DeviceConnectError(SercaloError):
    """
    Serial port could not be opened.

    Examples:
      - COM port not found
      - permission denied
      - port already in use
    """
    code = "device_connect_error"


class NotConnected(SercaloError):
    """An exchange was attempted while the transport is closed."""
    code = "not_connected"


class LockTimeout(SercaloError):
    """
    The exclusive-access guard could not be acquired in time.

    No transport I/O was performed.
    """
    code = "lock_timeout"


class DeviceTransportError(SercaloError):
    """
    Low-level I/O failure during an exchange.

    Examples:
      - read timeout (device silent)
      - OS-level error during read/write
      - cable removed
    """
    code = "transport_error"


# ---------------------------------------------------------------------------
# Protocol / device errors
# ---------------------------------------------------------------------------

class MalformedResponse(SercaloError):
    """The response does not have the expected shape."""
    code = "malformed_response"


class EchoMismatch(MalformedResponse):
    """A set command was echoed with a value other than the one sent."""
    code = "echo_mismatch"


class OutOfRange(SercaloError):
    """
    The device returned an index or enumeration byte with no local mapping.

    Examples:
      - UART baud index 7
      - power mode 3
    """
    code = "out_of_range"


class DeviceError(SercaloError):
    """
    The device answered with an `ERR` frame.

    `error_code` is the mapped fault code (UNKNOWN for unrecognized numbers and
    for text-mode errors), `number` the raw number when one was sent.
    """
    code = "device_error"

    def __init__(
        self,
        message: str,
        *,
        error_code: ErrorCode = ErrorCode.UNKNOWN,
        description: Optional[str] = None,
        number: Optional[int] = None,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, hint=hint, details=details)
        self.error_code = error_code
        self.description = description
        self.number = number
