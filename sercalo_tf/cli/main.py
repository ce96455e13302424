# sercalo_tf/cli/main.py
from __future__ import annotations

import logging
from typing import Optional

from sercalo_tf.app.factory import open_device
from sercalo_tf.core.errors import SercaloError

from sercalo_tf.cli.args import parse_args
from sercalo_tf.cli.commands import (
    cmd_baud,
    cmd_channel,
    cmd_id,
    cmd_position,
    cmd_power,
    cmd_range,
    cmd_reset,
    cmd_status,
    cmd_wavelength,
)

_SIMPLE = {
    "id": cmd_id,
    "status": cmd_status,
    "reset": cmd_reset,
    "range": cmd_range,
}

_WITH_ARGS = {
    "wavelength": cmd_wavelength,
    "position": cmd_position,
    "channel": cmd_channel,
    "power": cmd_power,
    "baud": cmd_baud,
}


def main(argv: Optional[list[str]] = None) -> int:
    try:
        args, cfg = parse_args(argv)
        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )

        with open_device(cfg) as dev:
            if args.cmd in _SIMPLE:
                return _SIMPLE[args.cmd](dev)
            if args.cmd in _WITH_ARGS:
                return _WITH_ARGS[args.cmd](dev, args)

        return 2
    except SercaloError as e:
        print(f"ERROR: {e.message}")
        if e.hint:
            print(f"Hint: {e.hint}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
