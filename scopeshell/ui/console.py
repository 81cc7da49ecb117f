#!/usr/bin/env python3
# scopeshell/ui/console.py
from __future__ import annotations

"""
Terminal helpers: ANSI colour codes, colour stripping, thread-safe line printing.
"""

import os
import re
import sys
import threading
from typing import Optional, TextIO

# Foreground colours and the few styles the shell uses
ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "bright_black": "\x1b[90m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

# Single shared print mutex for all console output (lines + log records)
PRINT_MUTEX = threading.Lock()

_vt_enabled_cache: Optional[bool] = None


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def enable_windows_vt() -> bool:
    """
    Return True if ANSI escapes should render in this process.
    On Windows this only trusts terminals that advertise VT support.
    """
    global _vt_enabled_cache
    if _vt_enabled_cache is not None:
        return _vt_enabled_cache

    if os.name != "nt":
        _vt_enabled_cache = True
    else:
        _vt_enabled_cache = bool(
            os.environ.get("WT_SESSION")
            or os.environ.get("ANSICON")
            or os.environ.get("ConEmuANSI") == "ON"
            or os.environ.get("TERM", "").startswith(("xterm", "vt100"))
        )
    return _vt_enabled_cache


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more styles from ANSI (e.g. 'red', 'bold').
    Always auto-resets at the end.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text


def clear_screen() -> None:
    """Clear the terminal screen on Windows and POSIX."""
    sys.stdout.write("\x1b[2J\x1b[H" if enable_windows_vt() else "\n" * 3)
    sys.stdout.flush()


def print_line(text: str = "", *, file: TextIO | None = None, flush: bool = False) -> None:
    """Thread-safe single-line print."""
    target = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        target.write(f"{text}\n")
        if flush:
            target.flush()


__all__ = [
    "ANSI",
    "PRINT_MUTEX",
    "strip_ansi",
    "enable_windows_vt",
    "colorize",
    "clear_screen",
    "print_line",
]
