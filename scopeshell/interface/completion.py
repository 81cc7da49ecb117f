#!/usr/bin/env python3
# scopeshell/interface/completion.py
from __future__ import annotations

"""
Command line completion.

Token-aware suggestions for:
- Scope and command names while the command path is being typed.
- Option aliases ('--name') once a command is resolved.
- Option values through the descriptor's autocomplete callable.

Completion never raises: malformed or partial input only narrows the result.
"""

import logging
import shlex

from scopeshell.commands import Candidate, CliCommand, CliOption, CommandTree

logger = logging.getLogger(__name__)


def current_word(line: str, cursor: int) -> tuple[int, str]:
    """
    Return (start_offset, word) for the word ending at `cursor`: everything
    after the last whitespace at or before the cursor.
    """
    text_before_cursor = line[:cursor]
    start = 0
    for index in range(len(text_before_cursor) - 1, -1, -1):
        if text_before_cursor[index].isspace():
            start = index + 1
            break
    return start, text_before_cursor[start:]


def _split_typed_tokens(text_before_cursor: str, word: str) -> list[str] | None:
    """
    Shell-split the text before the cursor and drop the word being completed.
    Returns None when the text cannot be split (inside an open quote).
    """
    try:
        parts = shlex.split(text_before_cursor, posix=True)
    except ValueError:
        return None
    if word and parts:
        parts = parts[:-1]
    return parts


def _find_option(options: list[CliOption], token: str) -> CliOption | None:
    return next((opt for opt in options if opt.matches_alias(token)), None)


def _autocomplete_values(
    tree: CommandTree,
    descriptor: CliOption,
    prefix: str,
    typed: list[str],
) -> list[str]:
    try:
        return list(descriptor.autocomplete(tree, prefix, typed))
    except Exception as exc:  # noqa: BLE001
        logger.warning("Autocomplete for %s failed: %s", descriptor.name, exc)
        return []


def _value_supplied(
    tree: CommandTree,
    options: list[CliOption],
    typed: list[str],
    option_tokens: list[str],
) -> bool:
    """True when the last typed token is a known value of the option before it."""
    if len(option_tokens) < 2:
        return False
    value, alias = option_tokens[-1], option_tokens[-2]
    descriptor = _find_option(options, alias)
    if descriptor is None or descriptor.flag or descriptor.autocomplete is None:
        return False
    return value in _autocomplete_values(tree, descriptor, value, typed)


def _option_candidates(
    tree: CommandTree,
    command: CliCommand,
    word: str,
    typed: list[str],
    option_tokens: list[str],
) -> list[Candidate]:
    options = command.options()
    seen = {opt.name for opt in options if any(alias in option_tokens for alias in opt.aliases())}

    if word.startswith("-"):
        return command.option_completions(word, seen)

    preceding = option_tokens[-1] if option_tokens else None
    descriptor = _find_option(options, preceding) if preceding else None

    if _value_supplied(tree, options, typed, option_tokens):
        logger.debug("Value for %s already supplied", option_tokens[-2])
        return command.option_completions(word, seen)

    if descriptor is None or descriptor.flag:
        return command.option_completions(word, seen)

    if descriptor.autocomplete is None:
        return []

    values = _autocomplete_values(tree, descriptor, word, typed)
    return [Candidate.plain(value) for value in values if value.startswith(word)]


def complete(tree: CommandTree, line: str, cursor: int) -> tuple[int, list[Candidate]]:
    """
    Compute completions for `line` with the cursor at byte offset `cursor`.

    Returns (replace_from_offset, candidates).
    """
    cursor = max(0, min(cursor, len(line)))
    start, word = current_word(line, cursor)
    logger.debug("Completing. Line: %r, Pos: %d, Start: %d, Word: %r", line, cursor, start, word)

    typed = _split_typed_tokens(line[:cursor], word)
    if typed is None:
        # Typically inside an unterminated quoted string
        return cursor, []

    walk = tree.walk(typed)
    if walk.command is None:
        return start, walk.scope.completions(word)

    option_tokens = typed[walk.consumed:]
    candidates = _option_candidates(tree, walk.command, word, typed, option_tokens)
    return start, candidates


def suggest(tree: CommandTree, text_before_cursor: str) -> list[str]:
    """Replacement strings only, for frontends without display labels."""
    _, candidates = complete(tree, text_before_cursor, len(text_before_cursor))
    return [candidate.replacement for candidate in candidates]


__all__ = ["complete", "current_word", "suggest"]
