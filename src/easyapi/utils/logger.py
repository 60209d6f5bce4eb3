"""Logging setup for easyapi.

The library only logs through get_logger() and attaches no handlers. An
application that wants to see request logs calls setup_logger once:

    from easyapi.utils.logger import setup_logger
    setup_logger(level="DEBUG", log_file=Path("logs/easyapi.log"))
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from easyapi.utils.config import log_level

LOGGER_NAME = "easyapi"


def setup_logger(
    name: str = LOGGER_NAME,
    level: Union[int, str, None] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return a logger.

    Args:
        name: Logger name.
        level: Logging level. If None, EASYAPI_LOG_LEVEL is used.
        log_file: Optional path to log file. If None, logs to stderr only.

    Returns:
        Configured logger.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(level if level is not None else log_level())
    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    log.addHandler(h)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return the library logger. Handlers are only attached by setup_logger."""
    return logging.getLogger(name)
