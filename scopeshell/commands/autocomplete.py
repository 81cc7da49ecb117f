#!/usr/bin/env python3
# scopeshell/commands/autocomplete.py
from __future__ import annotations

"""
Reusable value completers for option descriptors.

Every completer has the shape `fn(tree, prefix, tokens) -> list[str]` and must
never raise: failures become an empty suggestion list.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence

if TYPE_CHECKING:
    from scopeshell.commands.options import AutocompleteFn
    from scopeshell.commands.tree import CommandTree

logger = logging.getLogger(__name__)


def bool_values(tree: CommandTree, prefix: str, tokens: Sequence[str]) -> list[str]:
    return ["true", "false"]


def choices(*values: str | type[Enum]) -> AutocompleteFn:
    """
    Completer over a fixed set of words. An Enum class contributes the string
    value of each member.
    """
    words: list[str] = []
    for value in values:
        if isinstance(value, type) and issubclass(value, Enum):
            words.extend(str(member.value) for member in value)
        else:
            words.append(str(value))

    def _complete(tree: CommandTree, prefix: str, tokens: Sequence[str]) -> list[str]:
        return [word for word in words if word.startswith(prefix)]

    return _complete


def value_after(tokens: Sequence[str], *aliases: str) -> str | None:
    """Return the token following the first occurrence of any of `aliases`."""
    for current, following in zip(tokens, tokens[1:]):
        if current in aliases:
            return following
    return None


def remote(lister: Callable[[Any, str, Sequence[str]], Iterable[str]]) -> AutocompleteFn:
    """
    Wrap a client-backed lister `lister(client, prefix, tokens)`.

    Returns no suggestions when the tree has no client or API completion is
    disabled; any exception raised by the lister is logged and swallowed so a
    completion request never fails.
    """

    def _complete(tree: CommandTree, prefix: str, tokens: Sequence[str]) -> list[str]:
        client = getattr(tree, "client", None)
        if client is None or not getattr(tree, "api_completion", True):
            return []
        logger.debug("Autocompleting via %s with prefix: %s",
                     getattr(lister, "__name__", "lister"), prefix)
        try:
            return [str(item) for item in lister(client, prefix, tokens)]
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to fetch completions: %s", exc)
            return []

    _complete.__name__ = getattr(lister, "__name__", "remote")
    return _complete


__all__ = ["bool_values", "choices", "value_after", "remote"]
