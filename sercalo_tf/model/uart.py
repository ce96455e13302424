# sercalo_tf/model/uart.py
from __future__ import annotations

from enum import Enum
from typing import Tuple


class Parity(str, Enum):
    """UART parity setting. Values are the usual single-letter codes."""
    NONE = "N"
    EVEN = "E"
    ODD = "O"
    MARK = "M"
    SPACE = "S"


# The device refers to these by index (UART <i>, PTY <i>), never by value.
BAUD_RATES: Tuple[int, ...] = (9600, 19200, 38400, 57600, 115200)
PARITIES: Tuple[Parity, ...] = (Parity.NONE, Parity.EVEN, Parity.ODD, Parity.MARK, Parity.SPACE)

DEFAULT_BAUDRATE = BAUD_RATES[0]
DEFAULT_PARITY = PARITIES[0]


def baudrate_index(value: int) -> int:
    """
    Map a baud rate to its table index.

    Values that are not a known rate are returned unchanged, so callers may pass
    either a rate (115200) or an index (4). Unknown values still reach the
    device, which answers with an error frame.
    """
    value = int(value)
    try:
        return BAUD_RATES.index(value)
    except ValueError:
        return value


def parity_index(parity: Parity) -> int:
    return PARITIES.index(Parity(parity))
