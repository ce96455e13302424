# sercalo_tf/cli/commands.py
from __future__ import annotations

import argparse

from sercalo_tf.device.tunable_filter import TunableFilter
from sercalo_tf.model.enums import PowerMode
from sercalo_tf.protocol.codec import Position


def cmd_id(dev: TunableFilter) -> int:
    ident = dev.get_id()
    print(f"Product:   {ident.product_name}")
    print(f"Serial:    {ident.serial_number or '-'}")
    print(f"Firmware:  {ident.firmware_version or '-'}")
    return 0


def cmd_status(dev: TunableFilter) -> int:
    print(f"Power:       {dev.get_power_mode().name.lower()}")
    print(f"Error mode:  {dev.get_error_mode().name.lower()}")
    print(f"Temperature: {dev.get_temperature():.1f} C")
    print(f"UART:        {dev.get_uart_baudrate()} baud, parity={dev.get_uart_parity().name.lower()}")
    print(f"Wavelength:  {dev.get_wavelength():.3f} nm")
    return 0


def cmd_reset(dev: TunableFilter) -> int:
    dev.reset()
    print("Reset OK")
    return 0


def cmd_range(dev: TunableFilter) -> int:
    lo, hi = dev.get_wavelength_range()
    print(f"Wavelength range: {lo:.3f} .. {hi:.3f} nm")
    return 0


def cmd_wavelength(dev: TunableFilter, args: argparse.Namespace) -> int:
    if args.value is not None:
        dev.set_wavelength(args.value)
    print(f"Wavelength: {dev.get_wavelength():.3f} nm")
    return 0


def _print_position(label: str, pos: Position) -> None:
    print(f"{label}: x={pos.x} y={pos.y}")


def cmd_position(dev: TunableFilter, args: argparse.Namespace) -> int:
    if args.xy:
        dev.set_position(Position(*args.xy))
    _print_position("Position", dev.get_position())
    return 0


def cmd_channel(dev: TunableFilter, args: argparse.Namespace) -> int:
    if args.set is not None:
        dev.set_channel_position(args.channel, Position(*args.set))
    elif args.select:
        dev.select_channel(args.channel)
        _print_position("Position", dev.get_position())
        return 0
    _print_position(f"Channel {args.channel}", dev.get_channel_position(args.channel))
    return 0


def cmd_power(dev: TunableFilter, args: argparse.Namespace) -> int:
    if args.mode is not None:
        dev.set_power_mode(PowerMode[args.mode.upper()])
    print(f"Power: {dev.get_power_mode().name.lower()}")
    return 0


def cmd_baud(dev: TunableFilter, args: argparse.Namespace) -> int:
    if args.rate is not None:
        dev.set_uart_baudrate(args.rate)
    print(f"UART: {dev.get_uart_baudrate()} baud")
    return 0
