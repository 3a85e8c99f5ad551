"""
Logging setup for the maskdec command-line tool.

Library modules only create loggers (``logging.getLogger(__name__)``);
handlers are attached here by the CLI. Calling ``setup_logging`` again
updates the console level and adds a file handler for any new log file.
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .config import LOGGER_NAME


def _file_handler(log_file: Path) -> logging.FileHandler:
    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    return fh


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[Path] = None,
    name: str = LOGGER_NAME,
) -> logging.Logger:
    """Configure and return the package logger.

    Console output goes to stderr through rich. If ``log_file`` is given,
    everything (DEBUG+) is also written there in plain text.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.propagate = False

    console = next((h for h in logger.handlers if isinstance(h, RichHandler)), None)
    if console is None:
        console = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        logger.addHandler(console)
    console.setLevel(level)

    # ── File handler: captures everything (DEBUG+) ──
    if log_file is not None:
        target = os.path.abspath(str(log_file))
        known = {h.baseFilename for h in logger.handlers
                 if isinstance(h, logging.FileHandler)}
        if target not in known:
            logger.addHandler(_file_handler(log_file))

    has_file = any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    logger.setLevel(logging.DEBUG if has_file else level)
    return logger
