from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(level: str = "info", format: str = DEFAULT_FORMAT) -> None:
    """Configure a basic logging setup if none is present.

    The package logger always follows ``level``; the root handler is only
    installed when the host application has not configured logging itself.
    """
    numeric = LOG_LEVELS.get(level.lower())
    if numeric is None:
        raise ValueError(f"Unknown log level: {level}")

    if not logging.getLogger().handlers:
        logging.basicConfig(level=numeric, format=format)

    logging.getLogger("calculator_agent").setLevel(numeric)
