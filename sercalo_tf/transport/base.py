from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from sercalo_tf.model.uart import Parity


class Transport(ABC):
    """
    Abstract line-oriented transport to a single device.

    Contract:
      - open(port)/close() manage the underlying connection; open() returns
        is_open() and raises TransportOpenError on any I/O fault.
      - write_line(text) sends text followed by the line terminator.
      - read_line() blocks until one terminated line arrives or the read
        timeout expires (TransportTimeout).
      - read_all_available() drains whatever is buffered, without waiting for
        a terminator. It may return "".
      - discard_buffers() drops pending input and output.
      - baudrate / parity may be changed while open; the new settings apply
        immediately.
    """

    @abstractmethod
    def is_open(self) -> bool: ...

    @abstractmethod
    def open(self, port: str) -> bool: ...

    @abstractmethod
    def close(self) -> None: ...

    @abstractmethod
    def write_line(self, text: str) -> None: ...

    @abstractmethod
    def read_line(self) -> str: ...

    @abstractmethod
    def read_all_available(self) -> str: ...

    @abstractmethod
    def discard_buffers(self) -> None: ...

    @property
    @abstractmethod
    def baudrate(self) -> int: ...

    @baudrate.setter
    @abstractmethod
    def baudrate(self, value: int) -> None: ...

    @property
    @abstractmethod
    def parity(self) -> Parity: ...

    @parity.setter
    @abstractmethod
    def parity(self, value: Parity) -> None: ...

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        self.close()
