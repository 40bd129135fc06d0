"""
Pullet16 Interpreter - Logging Setup

All modules log through children of the 'pullet16' logger
(logging.getLogger(__name__)). setup_logging() attaches:

  - a rich console handler at console_level (WARNING unless -v / -vv)
  - optionally a file handler that captures everything at DEBUG,
    including the per-instruction EXECUTE trace

Calling it again replaces the handlers it installed earlier instead of
stacking duplicates.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .config import LOGGER_NAME

FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def verbosity_to_level(verbose: int) -> int:
    """-v count -> console level (0 = WARNING, 1 = INFO, 2+ = DEBUG)."""
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    console_level: int = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    name: str = LOGGER_NAME,
    rich_console: bool = True,
) -> logging.Logger:
    """Configure and return the package logger."""
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # ── Console handler ──
    if rich_console:
        ch = RichHandler(
            level=console_level,
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
    else:
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    ch.setLevel(console_level)
    logger.addHandler(ch)

    # ── File handler: captures everything (DEBUG+) ──
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(fh)
        logger.debug("Log file: %s", log_path)

    return logger
