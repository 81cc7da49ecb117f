#!/usr/bin/env python3
# scopeshell/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .console import (
    ANSI,
    PRINT_MUTEX,
    strip_ansi,
    enable_windows_vt,
    colorize,
    clear_screen,
    print_line,
)
from .logging import init_logger, parse_level, ColorizingStreamHandler, PlainFormatter
from .output import LineSink, OutputBuffer

__all__ = [
    "ANSI",
    "PRINT_MUTEX",
    "strip_ansi",
    "enable_windows_vt",
    "colorize",
    "clear_screen",
    "print_line",
    "init_logger",
    "parse_level",
    "ColorizingStreamHandler",
    "PlainFormatter",
    "LineSink",
    "OutputBuffer",
]
