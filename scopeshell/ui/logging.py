#!/usr/bin/env python3
# scopeshell/ui/logging.py
from __future__ import annotations

"""
Logger setup for the REPL host.

Core modules only create module loggers under 'scopeshell' and log at debug
level; handlers are installed here, once, by the host.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from scopeshell.ui.console import ANSI, PRINT_MUTEX, enable_windows_vt, strip_ansi


class ColorizingStreamHandler(logging.StreamHandler):
    """StreamHandler that colours records by level when ANSI is available."""

    _LEVEL_COLORS = {
        logging.DEBUG: ANSI["bright_black"],
        logging.INFO: "",
        logging.WARNING: ANSI["yellow"],
        logging.ERROR: ANSI["red"],
        logging.CRITICAL: ANSI["magenta"],
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream)
        self._use_ansi = enable_windows_vt()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            color = self._LEVEL_COLORS.get(record.levelno, "")
            if self._use_ansi and color:
                message = f"{color}{message}{ANSI['reset']}"
            elif not self._use_ansi:
                message = strip_ansi(message)
            with PRINT_MUTEX:
                self.stream.write(message + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter that strips ANSI (good for log files)."""

    def format(self, record: logging.LogRecord) -> str:
        record.msg = strip_ansi(str(record.msg))
        return super().format(record)


def parse_level(level: str | int | None, default: int = logging.WARNING) -> int:
    """Map 'DEBUG'/'INFO'/... (or an int) to a logging level."""
    if level is None:
        return default
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), default)


def init_logger(
    name: str = "scopeshell",
    level: str | int | None = logging.WARNING,
    logfile: Optional[str | Path] = None,
) -> logging.Logger:
    """
    Initialize the application logger.

    Console: stderr, coloured by level when possible.
    File (optional): rotating, plain text, UTF-8, always at DEBUG.
    """
    logger = logging.getLogger(name)
    console_level = parse_level(level)
    logger.setLevel(logging.DEBUG if logfile else console_level)
    logger.propagate = False

    if not any(isinstance(h, ColorizingStreamHandler) for h in logger.handlers):
        console_handler = ColorizingStreamHandler(stream=sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(console_handler)

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        file_handler = RotatingFileHandler(
            logfile, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            PlainFormatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["init_logger", "parse_level", "ColorizingStreamHandler", "PlainFormatter"]
