#!/usr/bin/env python3
# scopeshell/commands/__init__.py
from __future__ import annotations

"""
Package for command metadata and registration.

Provides:
- Option descriptors and the declarative `option()` field helper.
- The command capability (`CliCommand`, `command_info`, `Candidate`).
- The hierarchical registry (`CommandTree`).
- Reusable value completers.

This package re-exports public APIs from:
- options.py
- command_types.py
- tree.py
- autocomplete.py
"""


# Re-export from submodules
from .options import CliOption, HELP_OPTION, option, options_for, coerce_value
from .command_types import Candidate, CliCommand, command_info
from .tree import CommandTree, TreeWalk
from .autocomplete import bool_values, choices, value_after, remote

__all__ = [
    "CliOption",
    "HELP_OPTION",
    "option",
    "options_for",
    "coerce_value",
    "Candidate",
    "CliCommand",
    "command_info",
    "CommandTree",
    "TreeWalk",
    "bool_values",
    "choices",
    "value_after",
    "remote",
]
