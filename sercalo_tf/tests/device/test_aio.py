from __future__ import annotations

import asyncio

import pytest

from sercalo_tf.core.errors import DeviceError
from sercalo_tf.device.aio import AsyncTunableFilter
from sercalo_tf.device.tunable_filter import TunableFilter
from sercalo_tf.model.enums import ErrorCode, PowerMode
from sercalo_tf.protocol.codec import Position


class EchoLine:
    """Answers get commands from a table and echoes every set command."""
    def __init__(self, gets: dict):
        self.gets = gets
        self.opened = True
        self.baudrate = 9600
        self.parity = "N"
        self._last = ""
        self.written: list[str] = []

    def is_open(self) -> bool:
        return self.opened

    def close(self) -> None:
        self.opened = False

    def discard_buffers(self) -> None:
        pass

    def write_line(self, text: str) -> None:
        self.written.append(text)
        self._last = text

    def read_line(self) -> str:
        return self.gets.get(self._last, self._last) + "\r\n"

    def read_all_available(self) -> str:
        return ""


def test_async_calls_share_the_device():
    line = EchoLine({
        "POW": "POW 1",
        "POS": "POS 3 0 0 4",
        "WVMIN": "WVMIN 1527.000",
        "WVMAX": "WVMAX 1567.000",
    })
    adev = AsyncTunableFilter(TunableFilter(line, wavelength_settle_s=0.0))

    async def scenario():
        await adev.set_wavelength(1550.0)
        mode, pos, rng = await asyncio.gather(
            adev.get_power_mode(),
            adev.get_position(),
            adev.get_wavelength_range(),
        )
        return mode, pos, rng

    mode, pos, rng = asyncio.run(scenario())

    assert mode is PowerMode.NORMAL
    assert pos == Position(-3, 4)
    assert rng == (1527.0, 1567.0)
    assert line.written[0] == "WVL 1550.000"


def test_async_errors_propagate():
    adev = AsyncTunableFilter(TunableFilter(EchoLine({"WVL 1550.000": "ERR 10"})))

    with pytest.raises(DeviceError) as ei:
        asyncio.run(adev.set_wavelength(1550))

    assert ei.value.error_code is ErrorCode.INVALID_WAVELENGTH


def test_async_context_manager_closes():
    line = EchoLine({})
    adev = AsyncTunableFilter(TunableFilter(line))

    async def scenario():
        async with adev as d:
            assert d.is_open

    asyncio.run(scenario())
    assert line.opened is False
