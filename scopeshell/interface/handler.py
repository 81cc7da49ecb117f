#!/usr/bin/env python3
# scopeshell/interface/handler.py
from __future__ import annotations

"""
Command dispatch.

Flow for one submitted line:
  1) split off an optional trailing output filter ('| pattern' or '| !pattern')
  2) handle built-ins (exit/quit, clear/cls)
  3) walk the command tree to the command
  4) tokenize, then show help or validate + execute
"""

import logging
from typing import Any

from scopeshell.commands import CliCommand, CommandTree
from scopeshell.errors import CommandExecutionError, ShellError
from scopeshell.interface.parser import ValueResolver, split_line, tokenize
from scopeshell.ui import LineSink, OutputBuffer, clear_screen

logger = logging.getLogger(__name__)

# Short hint appended to unknown-command warnings
HELP_TEXT = "Type 'help' to list commands, or '<command> --help' for details."


def split_filter(line: str) -> tuple[str, str | None, bool]:
    """
    Return (command_text, pattern, invert).

    'class list | acme'  -> ('class list', 'acme', False)
    'class list | !acme' -> ('class list', 'acme', True)
    """
    command_text, sep, filter_text = line.partition("|")
    if not sep:
        return line, None, False
    pattern = filter_text.strip()
    invert = pattern.startswith("!")
    if invert:
        pattern = pattern[1:].strip()
    return command_text.strip(), pattern, invert


def execute_command(
    command: CliCommand,
    command_name: str,
    line: str,
    context: list[str],
    *,
    client: Any,
    sink: LineSink,
    resolver: ValueResolver | None = None,
) -> None:
    """Tokenize `line` for `command`, then show help or validate and execute."""
    logger.debug("Executing command: %s %s", context, command_name)
    tokens = tokenize(
        line, command_name, scopes=context, options=command.options(), resolver=resolver
    )

    if tokens.has_option("help", "h"):
        command.help(command_name, context, sink)
        return

    command.validate(tokens)
    try:
        command.execute(client, tokens)
    except ShellError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise CommandExecutionError(f"{type(exc).__name__}: {exc}") from exc


def handle_line(
    tree: CommandTree,
    input_line: str,
    sink: OutputBuffer,
    *,
    resolver: ValueResolver | None = None,
) -> None:
    """
    Parse and execute one input line, writing output to `sink`.

    Raises ShellError subclasses for the host to render; raises SystemExit on
    'exit'/'quit'.
    """
    line, pattern, invert = split_filter(input_line.strip())
    if pattern:
        sink.set_filter(pattern, invert)
    else:
        sink.clear_filter()

    if not line:
        return

    lowered = line.lower()
    if lowered in {"exit", "quit"}:
        raise SystemExit()
    if lowered in {"clear", "cls"}:
        clear_screen()
        return

    parts = split_line(line)
    if not parts:
        return

    walk = tree.resolve(parts)
    if walk.command is None or walk.command_name is None:
        if any(part in {"-h", "--help"} for part in parts[walk.consumed:]):
            summary = str(walk.scope)
            sink.append_line(f"{' '.join(walk.context)}: {summary}" if walk.context else summary)
            return
        sink.add_warning(f"Command not found: {' '.join(parts)}. {HELP_TEXT}")
        return

    execute_command(
        walk.command,
        walk.command_name,
        line,
        walk.context,
        client=tree.client,
        sink=sink,
        resolver=resolver,
    )


__all__ = ["HELP_TEXT", "split_filter", "execute_command", "handle_line"]
