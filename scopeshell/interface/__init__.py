#!/usr/bin/env python3
# scopeshell/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console interface and command dispatch.

Provides:
- Line tokenizer with option value substitution.
- Cursor-aware completion over the command tree.
- Command dispatcher with output filtering.
- Dynamic command loader for the plugins package.
- CLI frontends with history and completion (prompt_toolkit / readline / plain).
"""


# Parser utilities
from .parser import CommandTokens, ValueResolver, split_line, join_tokens, is_option_key, tokenize

# Completion FIRST (cli depends on it)
from .completion import complete, current_word, suggest

# Command dispatcher
from .handler import handle_line, execute_command, split_filter, HELP_TEXT

# Loader
from .loader import load_commands, DEFAULT_COMMANDS_PACKAGE

# CLI frontends (after completion is available)
from .cli import BaseCLI, PromptToolkitCLI, ReadlineCLI, make_cli, DEFAULT_PROMPT

__all__ = [
    # parser
    "CommandTokens",
    "ValueResolver",
    "split_line",
    "join_tokens",
    "is_option_key",
    "tokenize",
    # completion
    "complete",
    "current_word",
    "suggest",
    # handler
    "handle_line",
    "execute_command",
    "split_filter",
    "HELP_TEXT",
    # loader
    "load_commands",
    "DEFAULT_COMMANDS_PACKAGE",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
    "DEFAULT_PROMPT",
]
