# sercalo_tf/cli/args.py
from __future__ import annotations

import argparse
from typing import Optional

from sercalo_tf.app.config import TunableFilterConfig, load_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sercalo-tf")
    parser.add_argument("--port", "-p", default=None, help="Serial port (e.g. COM3, /dev/ttyUSB0).")
    parser.add_argument("--config", default=None, help="YAML configuration file.")
    parser.add_argument("--baudrate", type=int, default=None, help="Local baud rate to open the port with.")
    parser.add_argument("--lock-timeout", type=float, default=None, help="Guard wait in seconds.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("id", help="Print product, serial number and firmware.")
    sub.add_parser("status", help="Print modes, temperature, UART and wavelength.")
    sub.add_parser("reset", help="Reset the device to factory UART settings.")
    sub.add_parser("range", help="Print the selectable wavelength range.")

    p_wvl = sub.add_parser("wavelength", help="Get or set the output wavelength (nm).")
    p_wvl.add_argument("value", type=float, nargs="?", default=None)

    p_pos = sub.add_parser("position", help="Get or set the mirror position.")
    p_pos.add_argument("xy", type=int, nargs="*", metavar="XY")

    p_ch = sub.add_parser("channel", help="Read, store or select a user-defined channel.")
    p_ch.add_argument("channel", type=int)
    g = p_ch.add_mutually_exclusive_group()
    g.add_argument("--set", type=int, nargs=2, metavar=("X", "Y"), default=None)
    g.add_argument("--select", action="store_true")

    p_pow = sub.add_parser("power", help="Get or set the power mode.")
    p_pow.add_argument("mode", nargs="?", choices=("low", "normal"), default=None)

    p_baud = sub.add_parser("baud", help="Get or set the device baud rate.")
    p_baud.add_argument("rate", type=int, nargs="?", default=None)

    return parser


def parse_args(argv: Optional[list[str]] = None) -> tuple[argparse.Namespace, TunableFilterConfig]:
    """
    Returns: (args, config)

    Config comes from --config when given; explicit flags override it.
    """
    args = build_parser().parse_args(argv)

    if args.cmd == "position" and len(args.xy) not in (0, 2):
        build_parser().error("position takes either no value or X Y")

    overrides = {
        "port": args.port,
        "baudrate": args.baudrate,
        "lock_timeout_s": args.lock_timeout,
    }
    if args.config:
        cfg = load_config(args.config, **overrides)
    else:
        cfg = TunableFilterConfig().with_overrides(**overrides)

    return args, cfg
