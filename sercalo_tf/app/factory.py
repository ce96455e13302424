# sercalo_tf/app/factory.py
from __future__ import annotations

import logging
from typing import Optional

from sercalo_tf.core.errors import ConfigError
from sercalo_tf.device.tunable_filter import TunableFilter
from sercalo_tf.transport.uart import UARTTransport

from .config import TunableFilterConfig


def create(
    config: Optional[TunableFilterConfig] = None,
    *,
    logger: Optional[logging.Logger] = None,
) -> TunableFilter:
    """
    Build a TunableFilter over a UART transport.
    Note: does NOT open the port.
    """
    cfg = config or TunableFilterConfig()
    transport = UARTTransport(
        baudrate=cfg.baudrate,
        parity=cfg.parity_setting,
        read_timeout=cfg.read_timeout_s,
        write_timeout=cfg.write_timeout_s,
    )
    return TunableFilter(
        transport,
        lock_timeout_s=cfg.lock_timeout_s,
        uart_settle_s=cfg.uart_settle_s,
        reset_settle_s=cfg.reset_settle_s,
        logger=logger,
    )


def open_device(
    config: TunableFilterConfig,
    *,
    logger: Optional[logging.Logger] = None,
) -> TunableFilter:
    """Build a TunableFilter and open `config.port`."""
    if not config.port:
        raise ConfigError(
            "No serial port configured.",
            hint="Set 'port' in the configuration file or pass --port.",
        )
    device = create(config, logger=logger)
    device.open(config.port)
    return device
