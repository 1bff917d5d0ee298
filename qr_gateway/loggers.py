"""
Logging setup for the QR payment gateway.

Every module logs through the shared ``logger`` defined at the bottom.
Records go to a colored console stream, optionally to a size-rotated file
(LOG_FILE) and optionally to a Loki push endpoint (LOKI_URL).
"""

import logging
import os
import time
from logging.handlers import RotatingFileHandler
from typing import Final, Union

import colorlog
import httpx

from configs import LOG_FILE, LOG_LEVEL, LOKI_URL


# =============================================================================
# Formats
# =============================================================================

PLAIN_FORMAT: Final[str] = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s"
)
COLOR_FORMAT: Final[str] = (
    "%(log_color)s%(asctime)s | %(levelname)-8s%(reset)s | %(name)s | "
    "%(module)s.%(funcName)s:%(lineno)d | %(message_log_color)s%(message)s"
)
DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

FILE_MAX_BYTES: Final[int] = 10 * 1024 * 1024
FILE_BACKUPS: Final[int] = 5
LOKI_PUSH_TIMEOUT: Final[float] = 2.0

LEVEL_COLORS: Final[dict[str, str]] = {
    "DEBUG": "thin_white",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}
MESSAGE_COLORS: Final[dict[str, dict[str, str]]] = {
    "message": {"ERROR": "red", "CRITICAL": "red"},
}


# =============================================================================
# Loki
# =============================================================================


class LokiHandler(logging.Handler):
    """
    Push each record to Loki as a single-entry stream.

    Labels: service, logger and level.
    """

    def __init__(self, url: str, service: str) -> None:
        super().__init__()
        self.url = url
        self.service = service

    def payload(self, record: logging.LogRecord) -> dict:
        labels = {
            "service": self.service,
            "logger": record.name,
            "level": record.levelname.lower(),
        }
        timestamp_ns = str(int(record.created * 1e9)) if record.created else str(time.time_ns())
        return {"streams": [{"stream": labels, "values": [[timestamp_ns, self.format(record)]]}]}

    def emit(self, record: logging.LogRecord) -> None:
        try:
            httpx.post(self.url, json=self.payload(record), timeout=LOKI_PUSH_TIMEOUT)
        except Exception:
            self.handleError(record)


# =============================================================================
# Handler Builders
# =============================================================================


def _console_handler() -> logging.Handler:
    handler = colorlog.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            COLOR_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LEVEL_COLORS,
            secondary_log_colors=MESSAGE_COLORS,
        )
    )
    return handler


def _file_handler(path: str) -> logging.Handler:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=FILE_MAX_BYTES,
        backupCount=FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _loki_handler(url: str, service: str) -> logging.Handler:
    handler = LokiHandler(url, service)
    handler.setFormatter(logging.Formatter("%(module)s.%(funcName)s:%(lineno)d | %(message)s"))
    return handler


def get_logger(
    name: str,
    app: str = "qr_gateway",
    log_file: str = "",
    loki_url: str = "",
    level: Union[int, str] = logging.DEBUG,
) -> logging.Logger:
    """
    Get a configured logger.

    Handlers are attached once per logger name; later calls return the
    same instance untouched.

    Args:
        name: Logger name.
        app: Service label sent to Loki.
        log_file: Rotating log file path. Empty disables file output.
        loki_url: Loki push URL. Empty disables remote output.
        level: Threshold for the logger and all its handlers.
    """
    instance = logging.getLogger(name)
    if instance.handlers:
        return instance

    instance.setLevel(level)
    instance.propagate = False

    handlers = [_console_handler()]
    if log_file:
        handlers.append(_file_handler(log_file))
    if loki_url:
        handlers.append(_loki_handler(loki_url, app))

    for handler in handlers:
        handler.setLevel(level)
        instance.addHandler(handler)
    return instance


logger = get_logger(
    name="qr_gateway",
    log_file=LOG_FILE,
    loki_url=LOKI_URL,
    level=LOG_LEVEL,
)
