from __future__ import annotations


class TransportError(Exception):
    """Serial line failure below the protocol layer."""


class TransportOpenError(TransportError):
    """The serial port could not be opened with the requested baud rate and parity."""


class TransportIOError(TransportError):
    """A line write, read or drain failed, or the port was not open."""


class TransportTimeout(TransportIOError):
    """No complete line arrived before the read timeout."""
