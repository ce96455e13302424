# sercalo_tf/device/aio.py
from __future__ import annotations

import asyncio
from typing import Tuple

from sercalo_tf.model.enums import ErrorMode, PowerMode
from sercalo_tf.model.identity import DeviceIdentity
from sercalo_tf.model.uart import Parity
from sercalo_tf.protocol.codec import Position

from .tunable_filter import PositionLike, TunableFilter


class AsyncTunableFilter:
    """
    asyncio front-end for TunableFilter.

    Each call runs in a worker thread, so async tasks and plain threads share the
    same exclusive-access guard. Cancelling the awaiting task does not interrupt
    an exchange already on the wire.
    """

    def __init__(self, device: TunableFilter):
        self.device = device

    async def _call(self, fn, *args):
        return await asyncio.to_thread(fn, *args)

    @property
    def is_open(self) -> bool:
        return self.device.is_open

    async def open(self, port: str) -> bool:
        return await self._call(self.device.open, port)

    async def close(self) -> None:
        await self._call(self.device.close)

    async def __aenter__(self) -> "AsyncTunableFilter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def get_id(self) -> DeviceIdentity:
        return await self._call(self.device.get_id)

    async def reset(self) -> None:
        await self._call(self.device.reset)

    async def get_power_mode(self) -> PowerMode:
        return await self._call(self.device.get_power_mode)

    async def set_power_mode(self, mode: PowerMode) -> None:
        await self._call(self.device.set_power_mode, mode)

    async def get_error_mode(self) -> ErrorMode:
        return await self._call(self.device.get_error_mode)

    async def set_error_mode(self, mode: ErrorMode) -> None:
        await self._call(self.device.set_error_mode, mode)

    async def get_temperature(self) -> float:
        return await self._call(self.device.get_temperature)

    async def get_uart_baudrate(self) -> int:
        return await self._call(self.device.get_uart_baudrate)

    async def set_uart_baudrate(self, baudrate: int) -> None:
        await self._call(self.device.set_uart_baudrate, baudrate)

    async def get_uart_parity(self) -> Parity:
        return await self._call(self.device.get_uart_parity)

    async def set_uart_parity(self, parity: Parity) -> None:
        await self._call(self.device.set_uart_parity, parity)

    async def get_i2c_address(self) -> int:
        return await self._call(self.device.get_i2c_address)

    async def set_i2c_address(self, address: int) -> None:
        await self._call(self.device.set_i2c_address, address)

    async def get_position(self) -> Position:
        return await self._call(self.device.get_position)

    async def set_position(self, position: PositionLike) -> None:
        await self._call(self.device.set_position, position)

    async def select_channel(self, channel: int) -> None:
        await self._call(self.device.select_channel, channel)

    async def get_channel_position(self, channel: int) -> Position:
        return await self._call(self.device.get_channel_position, channel)

    async def set_channel_position(self, channel: int, position: PositionLike) -> None:
        await self._call(self.device.set_channel_position, channel, position)

    async def get_wavelength(self) -> float:
        return await self._call(self.device.get_wavelength)

    async def set_wavelength(self, wavelength_nm: float) -> None:
        await self._call(self.device.set_wavelength, wavelength_nm)

    async def get_minimum_wavelength(self) -> float:
        return await self._call(self.device.get_minimum_wavelength)

    async def get_maximum_wavelength(self) -> float:
        return await self._call(self.device.get_maximum_wavelength)

    async def get_wavelength_range(self) -> Tuple[float, float]:
        return await self._call(self.device.get_wavelength_range)
