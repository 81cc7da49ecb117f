#!/usr/bin/env python3
# scopeshell/commands/tree.py
from __future__ import annotations

"""
Command tree: hierarchical registry of scopes and leaf commands.

This module provides:
- CommandTree: nested scopes (subcommand namespaces) and commands, with lookup,
  completion of child names, dispatch/completion walks and tree rendering.
"""

import difflib
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from scopeshell.commands.command_types import Candidate, CliCommand
from scopeshell.errors import CommandNotFound

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TreeWalk:
    """
    Result of walking tokens through the tree.

    Attributes:
        scope: Deepest scope reached.
        context: Scope names traversed, in order.
        command: Resolved command, if any.
        command_name: Name the command was registered under.
        consumed: Number of tokens used for scopes and the command.
    """

    scope: "CommandTree"
    context: list[str] = field(default_factory=list)
    command: CliCommand | None = None
    command_name: str | None = None
    consumed: int = 0


class CommandTree:
    """
    A node holding child commands and child scopes.

    The root node also carries the collaborator `client` handed to commands and
    autocomplete helpers, and the `api_completion` switch for remote lookups.
    """

    def __init__(self, *, client: Any = None, api_completion: bool = True) -> None:
        self._commands: dict[str, CliCommand] = {}
        self._scopes: dict[str, CommandTree] = {}
        self.client = client
        self.api_completion = api_completion

    def __str__(self) -> str:
        return (
            f"Commands: {', '.join(sorted(self._commands))}. "
            f"Scopes: {', '.join(sorted(self._scopes))}."
        )

    # ---------------- Registration ----------------

    def add_command(self, name: str, command: CliCommand) -> "CommandTree":
        """Register (or overwrite) a command on this node; returns this node."""
        if name in self._scopes:
            raise ValueError(f"Command '{name}' collides with an existing scope.")
        logger.debug("Adding command: %s", name)
        self._commands[name] = command
        return self

    def add_scope(self, name: str) -> "CommandTree":
        """Return the child scope `name`, creating an empty one if absent."""
        if name in self._commands:
            raise ValueError(f"Scope '{name}' collides with an existing command.")
        logger.debug("Adding scope: %s", name)
        return self._scopes.setdefault(name, CommandTree())

    # ---------------- Lookup ----------------

    def get_command(self, name: str) -> CliCommand | None:
        return self._commands.get(name)

    def get_scope(self, name: str) -> "CommandTree | None":
        return self._scopes.get(name)

    def command_names(self) -> list[str]:
        return sorted(self._commands)

    def scope_names(self) -> list[str]:
        return sorted(self._scopes)

    def names(self) -> list[str]:
        """All child names (commands and scopes) of this node."""
        return sorted({*self._commands, *self._scopes})

    def completions(self, prefix: str) -> list[Candidate]:
        """Child scope and command names starting with `prefix`."""
        return [Candidate.plain(name) for name in self.names() if name.startswith(prefix)]

    # ---------------- Walks ----------------

    def walk(self, parts: Sequence[str]) -> TreeWalk:
        """
        Descend through `parts` for completion: scopes extend the context, the
        first command stops the walk, an unknown part stops it silently.
        """
        result = TreeWalk(scope=self)
        for part in parts:
            scope = result.scope.get_scope(part)
            if scope is not None:
                result.scope = scope
                result.context.append(part)
                result.consumed += 1
                continue
            command = result.scope.get_command(part)
            if command is not None:
                result.command = command
                result.command_name = part
                result.consumed += 1
            else:
                logger.debug("Invalid part: %s", part)
            break
        return result

    def resolve(self, parts: Sequence[str]) -> TreeWalk:
        """
        Descend through `parts` for dispatch. Raises CommandNotFound on the first
        part that is neither a scope nor a command of the current node. An
        option token ('-x', '--x') ends the path.
        """
        result = TreeWalk(scope=self)
        for part in parts:
            if part.startswith("-"):
                break
            scope = result.scope.get_scope(part)
            if scope is not None:
                result.scope = scope
                result.context.append(part)
                result.consumed += 1
                continue
            command = result.scope.get_command(part)
            if command is None:
                raise CommandNotFound(part, _suggest_similar_names(part, result.scope.names()))
            result.command = command
            result.command_name = part
            result.consumed += 1
            break
        return result

    # ---------------- Rendering ----------------

    def _generate_tree(self, prefix: str) -> list[str]:
        lines: list[str] = []
        entries: list[tuple[str, CommandTree | None]] = [
            *((name, None) for name in self.command_names()),
            *((name, self._scopes[name]) for name in self.scope_names()),
        ]
        for index, (name, scope) in enumerate(entries):
            is_last = index == len(entries) - 1
            lines.append(f"{prefix}{'└─' if is_last else '├─'} {name}")
            if scope is not None:
                lines.extend(scope._generate_tree(prefix + ("   " if is_last else "│  ")))
        return lines

    def show_tree(self) -> str:
        """Render commands then scopes, recursively, with connector glyphs."""
        return "\n".join(self._generate_tree(""))


def _suggest_similar_names(name: str, universe: Sequence[str]) -> str:
    """Return a short suggestion string for misspelled commands."""
    matches = difflib.get_close_matches(name, list(universe), n=3, cutoff=0.6)
    return f". Did you mean: {', '.join(matches)}?" if matches else ""


__all__ = ["CommandTree", "TreeWalk"]
