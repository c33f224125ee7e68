# app/core/logging.py
import logging
import sys
from typing import Iterable
import colorlog

LOG_FORMAT = "%(log_color)s%(asctime)s %(levelname)-8s [%(name)s]%(reset)s %(message)s"

# Third-party loggers kept at WARNING whatever the app level is
NOISY_LOGGERS = ("pymongo", "motor", "redis", "httpx")

def build_handler(stream=sys.stdout) -> logging.Handler:
    handler = colorlog.StreamHandler(stream)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            LOG_FORMAT,
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
    )
    return handler

def configure_logging(level=logging.INFO, quiet: Iterable[str] = NOISY_LOGGERS):
    """Install a single colored stdout handler on the root logger."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [build_handler()]

    # uvicorn follows the app level
    for name in ("uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
