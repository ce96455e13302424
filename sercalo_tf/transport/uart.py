# sercalo_tf/transport/uart.py
from __future__ import annotations

import time
from typing import Optional

import serial
from serial import SerialException

from sercalo_tf.model.uart import DEFAULT_BAUDRATE, DEFAULT_PARITY, Parity

from .base import Transport
from .errors import TransportIOError, TransportOpenError, TransportTimeout


_PYSERIAL_PARITY = {
    Parity.NONE: serial.PARITY_NONE,
    Parity.EVEN: serial.PARITY_EVEN,
    Parity.ODD: serial.PARITY_ODD,
    Parity.MARK: serial.PARITY_MARK,
    Parity.SPACE: serial.PARITY_SPACE,
}


class UARTTransport(Transport):
    """
    UART transport implemented via pyserial.

    Lines are ASCII and terminated by `newline` ("\\r\\n" by default).
    Settings given before open() are kept and applied when the port opens.
    """

    def __init__(
        self,
        baudrate: int = DEFAULT_BAUDRATE,
        parity: Parity = DEFAULT_PARITY,
        *,
        read_timeout: float = 5.0,
        write_timeout: float = 5.0,
        newline: str = "\r\n",
        encoding: str = "ascii",
    ):
        self._baudrate = int(baudrate)
        self._parity = Parity(parity)
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout
        self.newline = newline
        self.encoding = encoding
        self.port: Optional[str] = None
        self.ser: Optional[serial.Serial] = None

    def open(self, port: str) -> bool:
        if self.is_open():
            self.close()
        try:
            self.ser = serial.Serial(
                port,
                baudrate=self._baudrate,
                parity=_PYSERIAL_PARITY[self._parity],
                bytesize=serial.EIGHTBITS,
                stopbits=serial.STOPBITS_ONE,
                timeout=self.read_timeout,
                write_timeout=self.write_timeout,
            )
            self.port = port
        except (SerialException, ValueError) as e:
            self.ser = None
            raise TransportOpenError(str(e)) from None
        return self.is_open()

    def close(self) -> None:
        if self.ser is not None:
            try:
                self.ser.close()
            finally:
                self.ser = None

    def is_open(self) -> bool:
        return self.ser is not None and self.ser.is_open

    # --- settings ---
    @property
    def baudrate(self) -> int:
        return self._baudrate

    @baudrate.setter
    def baudrate(self, value: int) -> None:
        self._baudrate = int(value)
        if self.ser is not None:
            try:
                self.ser.baudrate = self._baudrate
            except (SerialException, ValueError) as e:
                raise TransportIOError(f"UART baudrate change failed: {e}") from None

    @property
    def parity(self) -> Parity:
        return self._parity

    @parity.setter
    def parity(self, value: Parity) -> None:
        self._parity = Parity(value)
        if self.ser is not None:
            try:
                self.ser.parity = _PYSERIAL_PARITY[self._parity]
            except (SerialException, ValueError) as e:
                raise TransportIOError(f"UART parity change failed: {e}") from None

    # --- I/O ---
    def write_line(self, text: str) -> None:
        ser = self._require_open("write")
        try:
            ser.write((text + self.newline).encode(self.encoding))
            ser.flush()
        except SerialException as e:
            self.ser = None
            raise TransportIOError(f"UART write failed: {e}") from None

    def read_line(self) -> str:
        ser = self._require_open("read")
        terminator = self.newline[-1].encode(self.encoding)
        try:
            raw = ser.read_until(terminator)
        except SerialException as e:
            self.ser = None
            raise TransportIOError(f"UART read failed: {e}") from None

        if not raw.endswith(terminator):
            # timeout reached before the terminator
            raise TransportTimeout(f"no line within {self.read_timeout}s (got {raw!r})")
        return raw.decode(self.encoding, errors="replace")

    def read_all_available(self) -> str:
        ser = self._require_open("read")
        buf = b""
        try:
            while True:
                waiting = ser.in_waiting
                if waiting:
                    buf += ser.read(waiting)
                time.sleep(0.001)
                if not ser.in_waiting:
                    break
        except SerialException as e:
            self.ser = None
            raise TransportIOError(f"UART read failed: {e}") from None
        return buf.decode(self.encoding, errors="replace")

    def discard_buffers(self) -> None:
        ser = self._require_open("discard")
        try:
            ser.reset_output_buffer()
            ser.reset_input_buffer()
        except SerialException as e:
            self.ser = None
            raise TransportIOError(f"UART discard failed: {e}") from None

    def _require_open(self, op: str) -> serial.Serial:
        if self.ser is None:
            raise TransportIOError(f"{op} while transport not open")
        return self.ser
