"""CLI entry point for the serial → WebSocket bridge."""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from common.config import ConfigurationError, get_settings

from .main import create_app

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Leak monitor bridge (serial sensors -> WebSocket dashboard)")
    p.add_argument("--serial-port", help="serial device path (overrides SERIAL_PORT)")
    p.add_argument("--baud-rate", type=int, help="serial baud rate (overrides SERIAL_BAUD_RATE)")
    p.add_argument("--host", help="listen address (overrides BRIDGE_HOST)")
    p.add_argument("--port", type=int, help="listen port (overrides BRIDGE_PORT)")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING... (overrides BRIDGE_LOG_LEVEL)")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    try:
        settings = get_settings(
            serial_port=args.serial_port,
            baud_rate=args.baud_rate,
            host=args.host,
            port=args.port,
            log_level=args.log_level,
        )
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 2

    # Nivel ya validado por get_settings.
    logging.getLogger().setLevel(settings.log_level)
    logger.info("Leak monitor bridge starting")
    logger.info(
        "Config: serial=%s baud=%d window=%d max_age=%dms sweep=%.1fs",
        settings.serial_port,
        settings.baud_rate,
        settings.window_capacity,
        settings.max_sample_age_ms,
        settings.eviction_sweep_seconds,
    )

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
