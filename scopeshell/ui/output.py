#!/usr/bin/env python3
# scopeshell/ui/output.py
from __future__ import annotations

"""
Line-oriented output sink.

Commands and help rendering write lines to a `LineSink`; the REPL host owns an
`OutputBuffer` and flushes it once per submitted line, applying the optional
`| pattern` filter.
"""

import logging
import re
from typing import Iterable, Protocol, TextIO, runtime_checkable

from scopeshell.errors import InvalidInput
from scopeshell.ui.console import colorize, print_line

logger = logging.getLogger(__name__)


@runtime_checkable
class LineSink(Protocol):
    """Append-only destination for output lines."""

    def append_line(self, line: object) -> None:  # pragma: no cover - signature only
        ...


class OutputBuffer:
    """Buffers lines, warnings and errors until `flush`."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self._filter: tuple[re.Pattern[str], bool] | None = None

    # ---------------- Writing ----------------

    def append_line(self, line: object) -> None:
        self.lines.append(str(line))

    def append_lines(self, lines: Iterable[object]) -> None:
        for line in lines:
            self.append_line(line)

    def add_warning(self, message: object) -> None:
        self.warnings.append(str(message))

    def add_error(self, message: object) -> None:
        self.errors.append(str(message))

    # ---------------- Filtering ----------------

    def set_filter(self, pattern: str, invert: bool = False) -> None:
        """Only print lines matching `pattern` (or not matching, if inverted)."""
        try:
            regex = re.compile(pattern)
        except re.error as exc:
            raise InvalidInput(f"Invalid filter pattern '{pattern}': {exc}") from exc
        logger.debug("Setting filter: pattern=%r, invert=%s", pattern, invert)
        self._filter = (regex, invert)

    def clear_filter(self) -> None:
        self._filter = None

    def visible_lines(self) -> list[str]:
        if self._filter is None:
            return list(self.lines)
        regex, invert = self._filter
        return [line for line in self.lines if bool(regex.search(line)) != invert]

    # ---------------- Flushing ----------------

    def flush(self, file: TextIO | None = None) -> None:
        """Print warnings, errors, then (filtered) lines; empty the buffer."""
        logger.debug("Flushing output buffer (%d lines)", len(self.lines))
        for warning in self.warnings:
            print_line(colorize(f"Warning: {warning}", "yellow"), file=file)
        for error in self.errors:
            print_line(colorize(f"Error: {error}", "red"), file=file)
        for line in self.visible_lines():
            print_line(line, file=file)
        self.warnings.clear()
        self.errors.clear()
        self.lines.clear()


__all__ = ["LineSink", "OutputBuffer"]
