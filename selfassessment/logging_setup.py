"""Console logging bootstrap for the server and the CLI."""
from __future__ import annotations

import logging

from selfassessment.config import LOG_LEVEL

# Libraries that log every statement or request at INFO
_NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "httpx")


def setup_console_logging(level: int = LOG_LEVEL) -> None:
    """
    Call once at process start. Prints engine and service logs to stderr.
    """
    root = logging.getLogger()
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if root.handlers:
        # already configured (pytest, uvicorn --log-config, ...)
        root.setLevel(level)
        return

    root.setLevel(level)
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)
