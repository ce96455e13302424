# sercalo_tf/protocol/engine.py
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from sercalo_tf.core.errors import DeviceTransportError, NotConnected
from sercalo_tf.transport.base import Transport
from sercalo_tf.transport.errors import TransportError

from .guard import ExclusiveAccessGuard

_TRIM_CHARS = "\r\n\0"


def strip_response(text: str) -> str:
    """Drop trailing line terminators and NUL padding."""
    return text.rstrip(_TRIM_CHARS)


class ExchangeSession:
    """
    Transport operations for a caller that already holds the guard.

    Obtained from QueryEngine.exclusive(); only valid inside that block.
    """

    def __init__(self, transport: Transport, logger: logging.Logger):
        self._transport = transport
        self._log = logger

    def query(self, command: str) -> str:
        """Reset framing, send one command line and read one response line."""
        self._require_open(command)
        try:
            self._transport.discard_buffers()
            self._log.debug("TX cmd=%r", command)
            self._transport.write_line(command)
            raw = self._transport.read_line()
        except TransportError as e:
            self._log.warning("QUERY_FAILED cmd=%r err=%s", command, e)
            raise DeviceTransportError(
                f"Cannot get response from input '{command}'.",
                hint=str(e),
                details={"command": command},
            ) from e

        resp = strip_response(raw)
        self._log.debug("RX resp=%r", resp)
        return resp

    def write(self, command: str) -> None:
        """Send one command line without waiting for a reply."""
        self._require_open(command)
        try:
            self._transport.discard_buffers()
            self._log.debug("TX cmd=%r (no reply)", command)
            self._transport.write_line(command)
        except TransportError as e:
            self._log.warning("WRITE_FAILED cmd=%r err=%s", command, e)
            raise DeviceTransportError(
                f"Cannot write input '{command}'.",
                hint=str(e),
                details={"command": command},
            ) from e

    def read_all(self) -> str:
        """Drain whatever the device has sent so far."""
        self._require_open(None)
        try:
            raw = self._transport.read_all_available()
        except TransportError as e:
            self._log.warning("READ_ALL_FAILED err=%s", e)
            raise DeviceTransportError(
                "Cannot get response.",
                hint=str(e),
            ) from e

        self._log.debug("RX drained=%r", raw)
        return raw

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)

    def _require_open(self, command: Optional[str]) -> None:
        if not self._transport.is_open():
            raise NotConnected(
                "Device is not connected.",
                hint="Call open(port) first.",
                details={"command": command} if command is not None else {},
            )


class QueryEngine:
    """
    Command/response cycle over a line transport.

    Each public call is one guarded exchange. Multi-step sequences that must not
    interleave with other callers use `exclusive()`.
    """

    def __init__(
        self,
        transport: Transport,
        guard: Optional[ExclusiveAccessGuard] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self.transport = transport
        self.guard = guard or ExclusiveAccessGuard()
        self._log = logger or logging.getLogger(__name__)
        self._session = ExchangeSession(transport, self._log)

    @contextmanager
    def exclusive(self) -> Iterator[ExchangeSession]:
        with self.guard.hold():
            yield self._session

    def query(self, command: str) -> str:
        return self.guard.run(self._session.query, command)

    def write(self, command: str) -> None:
        self.guard.run(self._session.write, command)

    def read_all(self) -> str:
        return self.guard.run(self._session.read_all)

    def sleep(self, seconds: float) -> None:
        """Settle delay that keeps other callers off the wire."""
        self.guard.run(self._session.sleep, seconds)
