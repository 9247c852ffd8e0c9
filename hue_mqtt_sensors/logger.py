"""Logging setup for the Hue MQTT sensors bridge.

Command handling on the paho network thread and polling on timer threads
share one stdout handler installed by configure_logging(); modules log
through logging.getLogger(__name__).
Per-request chatter from urllib3 (every hub call) and the uvicorn access log is
held at WARNING unless the bridge itself runs at a higher level.
"""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import AppConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every request at DEBUG/INFO
NOISY_LOGGERS = ("urllib3", "uvicorn.access")


def configure_logging(config: "AppConfig") -> None:
    """Install the shared stdout handler at the configured LOG_LEVEL.

    Safe to call again: existing root handlers are replaced, not duplicated.

    Args:
        config: Application configuration
    """
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
