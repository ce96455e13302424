from __future__ import annotations

import pytest

from sercalo_tf.core.errors import DeviceError, EchoMismatch, MalformedResponse, OutOfRange
from sercalo_tf.model.enums import ErrorCode, PowerMode
from sercalo_tf.model.uart import BAUD_RATES
from sercalo_tf.protocol.codec import (
    Position,
    ValueCodec,
    decode_position,
    encode_position,
    format_byte,
    format_double,
    match_value,
    parse_byte,
    parse_double,
    table_lookup,
    to_enum,
)


class FakeEngine:
    """Answers queries from a dict; records commands."""
    def __init__(self, answers: dict):
        self.answers = dict(answers)
        self.sent: list[str] = []

    def query(self, command: str) -> str:
        self.sent.append(command)
        return self.answers[command]


# ---------------- positions ----------------

def test_encode_position_splits_by_sign():
    assert encode_position(5000, -5000) == "0 5000 5000 0"
    assert encode_position(-1, 2) == "1 0 0 2"
    assert encode_position(0, 0) == "0 0 0 0"


@pytest.mark.parametrize("x,y", [(1.9, 0), (0, -2.7), (True, 0), ("5", 0)])
def test_encode_position_rejects_non_integer_coordinates(x, y):
    with pytest.raises(OutOfRange):
        encode_position(x, y)


def test_set_position_with_fractional_coordinates_sends_nothing():
    eng = FakeEngine({})

    with pytest.raises(OutOfRange) as ei:
        ValueCodec(eng).set_position("SET", (1.9, -2.7))

    assert ei.value.details == {"value": 1.9}
    assert eng.sent == []


def test_decode_position():
    assert decode_position("0 5000 5000 0") == Position(5000, -5000)
    assert decode_position("  7 0   0 9 ") == Position(-7, 9)


@pytest.mark.parametrize("x,y", [(0, 0), (1, -1), (-32768, 32767), (65535, -65535), (-10**9, 10**9)])
def test_position_round_trip(x, y):
    assert decode_position(encode_position(x, y)) == (x, y)


def test_decode_position_negative_magnitude_wins():
    # both magnitudes set: accepted, negative branch wins
    assert decode_position("3 4 0 2") == Position(-3, 2)


@pytest.mark.parametrize("text", ["", "1 2 3", "1 2 3 4 5", "a b c d", "1 2 3 -4"])
def test_decode_position_rejects_bad_shapes(text):
    with pytest.raises(MalformedResponse):
        decode_position(text)


# ---------------- scalars ----------------

def test_format_double_uses_three_decimals():
    assert format_double(1550) == "1550.000"
    assert format_double(1549.9996) == "1550.000"
    assert format_double(1530.1234) == "1530.123"


def test_parse_double_is_culture_invariant():
    assert parse_double("1550.250") == 1550.25
    with pytest.raises(MalformedResponse):
        parse_double("1550,250")


def test_byte_bounds():
    assert format_byte(255) == "255"
    assert parse_byte("0") == 0
    with pytest.raises(OutOfRange) as ei:
        format_byte(256)
    assert ei.value.details == {"value": 256}
    with pytest.raises(OutOfRange):
        format_byte(12.7)
    with pytest.raises(MalformedResponse):
        parse_byte("300")
    with pytest.raises(MalformedResponse):
        parse_byte("x")


def test_match_value():
    assert match_value("CHGET 1", "CHGET 1 0 10 0 20") == "0 10 0 20"

    with pytest.raises(DeviceError):
        match_value("WVL", "ERR 10")
    with pytest.raises(MalformedResponse):
        match_value("WVL", "POW 1")


# ---------------- enums / tables ----------------

def test_to_enum():
    assert to_enum(PowerMode, 1, "Power mode") is PowerMode.NORMAL
    assert to_enum(PowerMode, PowerMode.LOW, "Power mode") is PowerMode.LOW
    with pytest.raises(OutOfRange):
        to_enum(PowerMode, 2, "Power mode")
    with pytest.raises(OutOfRange):
        to_enum(PowerMode, "low", "Power mode")


def test_table_lookup():
    assert table_lookup(BAUD_RATES, 4, "UART") == 115200
    with pytest.raises(OutOfRange):
        table_lookup(BAUD_RATES, 5, "UART")


# ---------------- ValueCodec ----------------

def test_set_double_sends_formatted_value_and_accepts_echo():
    eng = FakeEngine({"WVL 1550.000": "WVL 1550.000"})

    ValueCodec(eng).set_double("WVL", 1550.0)

    assert eng.sent == ["WVL 1550.000"]


def test_set_double_device_error_is_raised():
    eng = FakeEngine({"WVL 1550.000": "ERR 10"})

    with pytest.raises(DeviceError) as ei:
        ValueCodec(eng).set_double("WVL", 1550.0)

    assert ei.value.error_code is ErrorCode.INVALID_WAVELENGTH


def test_set_echo_mismatch_is_failure():
    eng = FakeEngine({"IIC 125": "IIC 124"})

    with pytest.raises(EchoMismatch) as ei:
        ValueCodec(eng).set_byte("IIC", 125)

    assert ei.value.details["echoed"] == "124"


def test_get_position_and_set_position():
    eng = FakeEngine({"POS": "POS 0 5000 5000 0", "SET 0 5000 5000 0": "SET 0 5000 5000 0"})
    codec = ValueCodec(eng)

    assert codec.get_position("POS") == Position(5000, -5000)
    codec.set_position("SET", (5000, -5000))

    assert eng.sent == ["POS", "SET 0 5000 5000 0"]
