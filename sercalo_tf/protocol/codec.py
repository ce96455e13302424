# sercalo_tf/protocol/codec.py
"""
Value codecs between protocol text and typed values.

Get form:  `<FUNC>`          -> `<FUNC> <value>`
Set form:  `<FUNC> <value>`  -> `<FUNC> <value>` (the echo is the acknowledgement)

Positions use the electrode split encoding: each signed axis is sent as two
non-negative magnitudes `<neg> <pos>`, so (x, y) travels as
`x_neg x_pos y_neg y_pos`.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import NamedTuple, Protocol as TypingProtocol, Sequence, Tuple, Type, TypeVar

from sercalo_tf.core.errors import EchoMismatch, MalformedResponse, OutOfRange

from .error_map import raise_if_error

E = TypeVar("E", bound=Enum)
V = TypeVar("V")


class Queryable(TypingProtocol):
    """Anything that runs one command/response exchange (QueryEngine, ExchangeSession)."""
    def query(self, command: str) -> str: ...


class Position(NamedTuple):
    """MEMS mirror drive coordinates."""
    x: int
    y: int


# ---------------- Responses ----------------

def match_value(function: str, response: str) -> str:
    """
    Extract `<value>` from `<function> <value>`.

    ERR frames raise DeviceError; any other mismatch raises MalformedResponse.
    """
    m = re.match(rf"^{re.escape(function)} (?P<val>.+)$", response)
    if m is None:
        raise_if_error(response)
        raise MalformedResponse(
            f"Cannot find a suitable match from expression '{response}'.",
            details={"function": function, "response": response},
        )
    return m.group("val")


# ---------------- Scalars ----------------

def format_double(value: float) -> str:
    # The device works with 3 decimals; always '.' as separator.
    return f"{float(value):.3f}"


def parse_double(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        raise MalformedResponse(f"Expected a number, got {text!r}.", details={"value": text}) from None


def require_int(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise OutOfRange(
            f"{what} must be an integer, got {value!r}.",
            details={"value": value},
        )
    return value


def format_byte(value: int) -> str:
    value = require_int(value, "Byte value")
    if not 0 <= value <= 255:
        raise OutOfRange(f"Byte value out of range: {value}.", details={"value": value})
    return str(value)


def parse_byte(text: str) -> int:
    try:
        value = int(text.strip())
    except ValueError:
        raise MalformedResponse(f"Expected a byte, got {text!r}.", details={"value": text}) from None
    if not 0 <= value <= 255:
        raise MalformedResponse(f"Byte value out of range: {value}.", details={"value": text})
    return value


# ---------------- Positions ----------------

def _split_axis(value: int, axis: str) -> Tuple[int, int]:
    value = require_int(value, f"Position {axis}")
    if value < 0:
        return -value, 0
    return 0, value


def _join_axis(neg: int, pos: int) -> int:
    # A nonzero negative magnitude wins, even if pos is also nonzero.
    if neg > 0:
        return -neg
    return pos


def encode_position(x: int, y: int) -> str:
    x_neg, x_pos = _split_axis(x, "x")
    y_neg, y_pos = _split_axis(y, "y")
    return f"{x_neg} {x_pos} {y_neg} {y_pos}"


def decode_position(text: str) -> Position:
    tokens = text.split()
    if len(tokens) != 4:
        raise MalformedResponse(
            f"Expected 4 electrode values, got {len(tokens)} in {text!r}.",
            details={"value": text},
        )
    try:
        x_neg, x_pos, y_neg, y_pos = (int(t) for t in tokens)
    except ValueError:
        raise MalformedResponse(f"Non-integer electrode value in {text!r}.", details={"value": text}) from None

    if min(x_neg, x_pos, y_neg, y_pos) < 0:
        raise MalformedResponse(f"Negative electrode value in {text!r}.", details={"value": text})

    return Position(_join_axis(x_neg, x_pos), _join_axis(y_neg, y_pos))


# ---------------- Enumerations / tables ----------------

def to_enum(enum_cls: Type[E], raw, what: str) -> E:
    """Map a wire byte or a caller value onto `enum_cls`; OutOfRange otherwise."""
    try:
        return enum_cls(raw)
    except (TypeError, ValueError):
        raise OutOfRange(
            f"{what} value out of range: {raw}.",
            details={"value": raw, "known": [m.value for m in enum_cls]},
        ) from None


def table_lookup(table: Sequence[V], index: int, what: str) -> V:
    if not 0 <= index < len(table):
        raise OutOfRange(
            f"{what} index out of range: {index}.",
            details={"index": index, "size": len(table)},
        )
    return table[index]


# ---------------- Query-level codec ----------------

class ValueCodec:
    """
    Typed get/set on top of a QueryEngine.

    Built over an ExchangeSession instead, several gets/sets run inside one
    guarded block.
    """

    def __init__(self, engine: Queryable):
        self._engine = engine

    def get(self, function: str) -> str:
        return match_value(function, self._engine.query(function))

    def set(self, function: str, value: str) -> None:
        command = f"{function} {value}"
        echoed = match_value(function, self._engine.query(command))
        if echoed != value:
            raise EchoMismatch(
                f"Device echoed '{echoed}' for '{command}'.",
                details={"command": command, "sent": value, "echoed": echoed},
            )

    def get_double(self, function: str) -> float:
        return parse_double(self.get(function))

    def set_double(self, function: str, value: float) -> None:
        self.set(function, format_double(value))

    def get_byte(self, function: str) -> int:
        return parse_byte(self.get(function))

    def set_byte(self, function: str, value: int) -> None:
        self.set(function, format_byte(value))

    def get_position(self, function: str) -> Position:
        return decode_position(self.get(function))

    def set_position(self, function: str, position: Tuple[int, int]) -> None:
        x, y = position
        self.set(function, encode_position(x, y))
