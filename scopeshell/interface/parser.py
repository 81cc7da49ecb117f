#!/usr/bin/env python3
# scopeshell/interface/parser.py
from __future__ import annotations

"""
Line tokenizer for commands.

Responsibilities:
- Split a raw command line into shell-like tokens (POSIX quoting/escaping).
- Classify tokens into scope path, command name, option key/value pairs and
  positionals.
- Substitute http(s):// and file:// option values with the referenced text.
"""

import itertools
import logging
import shlex
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from scopeshell.errors import HttpError, InvalidInput, InvalidOption, IoError

if TYPE_CHECKING:
    from scopeshell.commands.options import CliOption

logger = logging.getLogger(__name__)

USER_AGENT = "scopeshell/1.0"


def split_line(command_line: str) -> list[str]:
    """Split a raw command line into tokens using POSIX rules."""
    try:
        return shlex.split(command_line, posix=True)
    except ValueError as exc:
        raise InvalidInput(str(exc)) from exc


def join_tokens(tokens: list[str]) -> str:
    """Inverse of split_line: re-quote tokens that need it."""
    return shlex.join(tokens)


def is_option_key(token: str) -> bool:
    return token.startswith("-")


class ValueResolver:
    """
    Remote value primitives used for option value substitution.

    - http:// and https:// values are fetched with a blocking GET.
    - file:// values are read from the local filesystem.
    Both results are right-trimmed.
    """

    def __init__(self, timeout_seconds: float = 10.0) -> None:
        self.timeout_seconds = timeout_seconds

    def resolve(self, value: str) -> str:
        if value.startswith(("http://", "https://")):
            return self.fetch_url(value)
        if value.startswith("file://"):
            return self.read_file(value[len("file://"):])
        return value

    def fetch_url(self, url: str) -> str:
        logger.debug("Fetching option value from %s", url)
        request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as response:
                body = response.read().decode("utf-8", errors="replace")
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise HttpError(str(exc)) from exc
        return body.rstrip()

    def read_file(self, path: str) -> str:
        logger.debug("Reading option value from %s", path)
        try:
            return Path(path).read_text(encoding="utf-8").rstrip()
        except (OSError, UnicodeDecodeError) as exc:
            raise IoError(str(exc)) from exc


@dataclass(slots=True)
class CommandTokens:
    """
    Structured view of one submitted line.

    Attributes:
        scopes: Scope names preceding the command, in order.
        command: Resolved command name.
        options: Dash-stripped option key -> value ("" for flags).
        positionals: Remaining non-option tokens, in order.
    """

    scopes: list[str] = field(default_factory=list)
    command: str = ""
    options: dict[str, str] = field(default_factory=dict)
    positionals: list[str] = field(default_factory=list)

    def get_scopes(self) -> list[str]:
        return self.scopes

    def get_command(self) -> str:
        return self.command

    def get_options(self) -> dict[str, str]:
        return self.options

    def get_positionals(self) -> list[str]:
        return self.positionals

    def has_option(self, *keys: str) -> bool:
        return any(key in self.options for key in keys)


def _strip_key(token: str) -> str:
    key = token[2:] if token.startswith("--") else token[1:]
    if not key or key.startswith("-"):
        raise InvalidOption(f"Malformed option '{token}'")
    return key


def _takes_next(
    key_token: str,
    next_token: str,
    options: Sequence[CliOption] | None,
) -> bool:
    """A flag leaves a following key alone; every other key consumes the next token."""
    if options is None:
        return True
    descriptor = next((opt for opt in options if opt.matches_alias(key_token)), None)
    if descriptor is not None and descriptor.flag:
        return not is_option_key(next_token)
    return True


def tokenize(
    command_line: str,
    command_name: str,
    *,
    scopes: Sequence[str] | None = None,
    options: Sequence[CliOption] | None = None,
    resolver: ValueResolver | None = None,
) -> CommandTokens:
    """
    Tokenize `command_line` for the already-resolved `command_name`.

    Tokens before the command name form the scope path. When the caller walked
    the tree already it passes that path as `scopes`, and tokens before the
    command that are not part of it are kept as positionals.

    After the command, a token starting with '-' or '--' is an option key that
    consumes exactly one following token as its value, even a '-'-prefixed one
    ('-c -1'). With the command's `options` at hand, a flag alias followed by
    another key does not consume it. A key with nothing after it gets ""
    (flag form). Everything else is a positional.
    """
    tokens = split_line(command_line)
    resolver = resolver or ValueResolver()
    result = CommandTokens(command=command_name)

    index = 0
    if scopes is not None:
        known = list(scopes)
        if tokens[:len(known)] == known:
            result.scopes.extend(known)
            index = len(known)
        while index < len(tokens) and not is_option_key(tokens[index]):
            token = tokens[index]
            index += 1
            if token == command_name:
                break
            result.positionals.append(token)
    else:
        # Scope path and command; without the command name there is no path
        head = list(itertools.takewhile(lambda token: not is_option_key(token), tokens))
        if command_name in head:
            index = head.index(command_name)
            result.scopes.extend(head[:index])
            index += 1

    # Options and positionals
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not is_option_key(token):
            result.positionals.append(token)
            continue
        key = _strip_key(token)
        value = ""
        if index < len(tokens) and _takes_next(token, tokens[index], options):
            value = resolver.resolve(tokens[index])
            index += 1
        result.options[key] = value

    logger.debug("Tokens: %s", result)
    return result


__all__ = [
    "CommandTokens",
    "ValueResolver",
    "split_line",
    "join_tokens",
    "is_option_key",
    "tokenize",
]
