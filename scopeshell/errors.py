#!/usr/bin/env python3
# scopeshell/errors.py
from __future__ import annotations

"""
Error taxonomy shared by the tokenizer, validation, dispatch and config layers.

Every error is plain data (kind + context). Nothing here prints; the REPL host
decides how to render an error.
"""

from typing import Iterable


class ShellError(Exception):
    """Base class for all errors raised by the shell core."""

    message: str = "Shell error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(self.__str__())

    def __str__(self) -> str:
        return f"{self.message}: {self.detail}" if self.detail else self.message


class InvalidInput(ShellError):
    """The line could not be split (e.g. unterminated quote)."""

    message = "Invalid input"


class InvalidOption(ShellError):
    """Malformed or unknown option syntax."""

    message = "Invalid option"


class OptionListError(ShellError):
    """Validation failure carrying the full list of offending options."""

    def __init__(self, options: Iterable[str]) -> None:
        self.options: list[str] = list(options)
        super().__init__(", ".join(self.options))

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.options == self.options  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(self.options)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options!r})"


class MissingOptions(OptionListError):
    message = "Missing required options"


class DuplicateOptions(OptionListError):
    message = "Duplicate options"


class PopulatedFlagOptions(OptionListError):
    message = "Boolean flag options with value"


class ParseError(ShellError):
    """An option value could not be coerced into the field's type."""

    message = "Error parsing arguments"

    def __init__(self, key: str, value: str, expected: str) -> None:
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(
            f"Option '{key}' has value '{value}' (expected type: {expected})")


class HttpError(ShellError):
    """Fetching an http:// or https:// option value failed."""

    message = "HTTP error"


class IoError(ShellError):
    """Reading a file:// option value failed."""

    message = "IO error"


class CommandNotFound(ShellError):
    """Dispatch-time tree walk hit an unknown segment."""

    message = "Command not found"

    def __init__(self, name: str, hint: str = "") -> None:
        self.name = name
        self.hint = hint
        super().__init__(f"{name}{hint}")


class CommandExecutionError(ShellError):
    """A command body raised something that is not a ShellError."""

    message = "Error executing command"


class ConfigError(ShellError):
    """Configuration could not be loaded or validated."""

    message = "Configuration error"


__all__ = [
    "ShellError",
    "InvalidInput",
    "InvalidOption",
    "OptionListError",
    "MissingOptions",
    "DuplicateOptions",
    "PopulatedFlagOptions",
    "ParseError",
    "HttpError",
    "IoError",
    "CommandNotFound",
    "CommandExecutionError",
    "ConfigError",
]
