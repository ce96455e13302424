# sercalo_tf/device/tunable_filter.py
from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

from sercalo_tf.core.errors import (
    DeviceConnectError,
    DeviceTransportError,
    EchoMismatch,
    MalformedResponse,
)
from sercalo_tf.model.enums import ErrorMode, PowerMode
from sercalo_tf.model.identity import DeviceIdentity
from sercalo_tf.model.uart import (
    BAUD_RATES,
    DEFAULT_BAUDRATE,
    DEFAULT_PARITY,
    PARITIES,
    Parity,
    baudrate_index,
    parity_index,
)
from sercalo_tf.protocol.codec import (
    Position,
    ValueCodec,
    require_int,
    table_lookup,
    to_enum,
)
from sercalo_tf.protocol.engine import ExchangeSession, QueryEngine, strip_response
from sercalo_tf.protocol.error_map import raise_if_error
from sercalo_tf.protocol.guard import ExclusiveAccessGuard
from sercalo_tf.transport.base import Transport
from sercalo_tf.transport.errors import TransportError, TransportOpenError
from sercalo_tf.transport.uart import UARTTransport

PositionLike = Union[Position, Tuple[int, int]]


class TunableFilter:
    """
    User-facing API of a Sercalo MEMS tunable filter.

    Getters return typed values; setters return None once the device echoed the
    command, and raise otherwise (DeviceError for ERR frames, EchoMismatch for a
    different echo). Nothing is retried.
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        *,
        lock_timeout_s: float = 1.0,
        uart_settle_s: float = 0.2,
        reset_settle_s: float = 1.0,
        wavelength_settle_s: float = 0.001,
        logger: Optional[logging.Logger] = None,
    ):
        self._log = logger or logging.getLogger(__name__)
        self.transport = transport or UARTTransport()
        self.uart_settle_s = float(uart_settle_s)
        self.reset_settle_s = float(reset_settle_s)
        self.wavelength_settle_s = float(wavelength_settle_s)

        self._guard = ExclusiveAccessGuard(lock_timeout_s, logger=self._log)
        self._engine = QueryEngine(self.transport, self._guard, logger=self._log)
        self._codec = ValueCodec(self._engine)

    # ---------------- Lifecycle ----------------
    @property
    def lock_timeout_s(self) -> float:
        return self._guard.timeout_s

    @lock_timeout_s.setter
    def lock_timeout_s(self, value: float) -> None:
        self._guard.timeout_s = value

    @property
    def is_open(self) -> bool:
        return self.transport.is_open()

    def open(self, port: str) -> bool:
        try:
            opened = self._guard.run(self.transport.open, port)
        except TransportOpenError as e:
            self._log.warning("OPEN_FAILED port=%s err=%s", port, e)
            raise DeviceConnectError(
                f"Cannot open the device with specified port '{port}'.",
                hint=str(e),
                details={"port": port},
            ) from e
        self._log.info("OPEN port=%s baudrate=%d", port, self.transport.baudrate)
        return opened

    def close(self) -> None:
        if self.transport.is_open():
            self._guard.run(self.transport.close)
            self._log.info("CLOSE")

    def __enter__(self) -> "TunableFilter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---------------- Identification / reset ----------------
    def get_id(self) -> DeviceIdentity:
        return DeviceIdentity.from_id_string(self._engine.query("ID"))

    def reset(self) -> None:
        """
        Reset the device.

        The device comes back at factory UART settings (9600 baud, no parity) and
        is given `reset_settle_s` before anyone else may talk to it.
        """
        with self._engine.exclusive() as s:
            resp = s.query("RST")
            if resp != "RST":
                raise_if_error(resp)
                raise MalformedResponse(
                    "Cannot reset the device.",
                    details={"command": "RST", "response": resp},
                )
            self._apply_local_uart(baudrate=DEFAULT_BAUDRATE, parity=DEFAULT_PARITY)
            s.sleep(self.reset_settle_s)
        self._log.info("RESET")

    # ---------------- Modes / status ----------------
    def get_power_mode(self) -> PowerMode:
        return to_enum(PowerMode, self._codec.get_byte("POW"), "Power mode")

    def set_power_mode(self, mode: PowerMode) -> None:
        mode = to_enum(PowerMode, mode, "Power mode")
        self._codec.set_byte("POW", int(mode))
        self._log.info("SET_POWER_MODE mode=%s", mode.name)

    def get_error_mode(self) -> ErrorMode:
        return to_enum(ErrorMode, self._codec.get_byte("ERM"), "Error mode")

    def set_error_mode(self, mode: ErrorMode) -> None:
        mode = to_enum(ErrorMode, mode, "Error mode")
        self._codec.set_byte("ERM", int(mode))
        self._log.info("SET_ERROR_MODE mode=%s", mode.name)

    def get_temperature(self) -> float:
        """Microcontroller temperature in degrees Celsius."""
        return self._codec.get_double("TMP")

    # ---------------- UART ----------------
    def get_uart_baudrate(self) -> int:
        return table_lookup(BAUD_RATES, self._codec.get_byte("UART"), "UART baud rate")

    def set_uart_baudrate(self, baudrate: int) -> None:
        """
        Change the device baud rate.

        `baudrate` is a rate from BAUD_RATES or its index (0-4). Other values are
        sent unchanged; the device rejects them with an ERR frame.
        """
        index = baudrate_index(require_int(baudrate, "UART baud rate"))
        self._change_uart(f"UART {index}", lambda: {"baudrate": table_lookup(BAUD_RATES, index, "UART baud rate")})

    def get_uart_parity(self) -> Parity:
        return table_lookup(PARITIES, self._codec.get_byte("PTY"), "UART parity")

    def set_uart_parity(self, parity: Parity) -> None:
        parity = to_enum(Parity, parity, "UART parity")
        self._change_uart(f"PTY {parity_index(parity)}", lambda: {"parity": parity})

    def _change_uart(self, command: str, resolve_settings) -> None:
        # The reply to a UART change may come back at either rate, so the
        # sequence below is one guarded exchange:
        #   write -> settle -> drain + check ERR -> switch local -> query echo
        with self._engine.exclusive() as s:
            s.write(command)
            s.sleep(self.uart_settle_s)
            self._raise_if_drained_error(s)

            settings = resolve_settings()
            self._apply_local_uart(**settings)

            echoed = s.query(command)

        if echoed != command:
            self._log.warning("UART_SWITCH_FAILED cmd=%r echoed=%r %s", command, echoed, settings)
            raise_if_error(echoed)
            raise EchoMismatch(
                f"Device echoed '{echoed}' for '{command}'.",
                details={"command": command, "echoed": echoed},
            )
        self._log.info("UART_SWITCH cmd=%r %s", command, settings)

    @staticmethod
    def _raise_if_drained_error(s: ExchangeSession) -> None:
        for line in strip_response(s.read_all()).splitlines():
            raise_if_error(strip_response(line))

    def _apply_local_uart(self, *, baudrate: Optional[int] = None, parity: Optional[Parity] = None) -> None:
        try:
            if baudrate is not None:
                self.transport.baudrate = baudrate
            if parity is not None:
                self.transport.parity = parity
        except TransportError as e:
            raise DeviceTransportError(
                "Cannot apply local UART settings.",
                hint=str(e),
                details={"baudrate": baudrate, "parity": parity},
            ) from e

    # ---------------- SMBus / I2C ----------------
    def get_i2c_address(self) -> int:
        return self._codec.get_byte("IIC")

    def set_i2c_address(self, address: int) -> None:
        self._codec.set_byte("IIC", address)
        self._log.info("SET_I2C_ADDRESS address=%d", int(address))

    # ---------------- Mirror position ----------------
    def get_position(self) -> Position:
        return self._codec.get_position("POS")

    def set_position(self, position: PositionLike) -> None:
        self._codec.set_position("SET", position)
        self._log.info("SET_POSITION x=%d y=%d", *position)

    # ---------------- Channels ----------------
    def select_channel(self, channel: int) -> None:
        """Move the mirror to a stored user-defined channel."""
        self._codec.set_byte("CHSET", channel)
        self._log.info("SELECT_CHANNEL channel=%d", int(channel))

    def get_channel_position(self, channel: int) -> Position:
        return self._codec.get_position(f"CHGET {int(channel)}")

    def set_channel_position(self, channel: int, position: PositionLike) -> None:
        """Store `position` in the given user-defined channel."""
        self._codec.set_position(f"CHMOD {int(channel)}", position)
        self._log.info("SET_CHANNEL_POSITION channel=%d x=%d y=%d", int(channel), *position)

    # ---------------- Wavelength ----------------
    def get_wavelength(self) -> float:
        return self._codec.get_double("WVL")

    def set_wavelength(self, wavelength_nm: float) -> None:
        with self._engine.exclusive() as s:
            ValueCodec(s).set_double("WVL", wavelength_nm)
            s.sleep(self.wavelength_settle_s)
        self._log.info("SET_WAVELENGTH nm=%.3f", float(wavelength_nm))

    def get_minimum_wavelength(self) -> float:
        return self._codec.get_double("WVMIN")

    def get_maximum_wavelength(self) -> float:
        return self._codec.get_double("WVMAX")

    def get_wavelength_range(self) -> Tuple[float, float]:
        with self._engine.exclusive() as s:
            codec = ValueCodec(s)
            return codec.get_double("WVMIN"), codec.get_double("WVMAX")
