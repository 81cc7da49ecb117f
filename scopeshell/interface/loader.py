#!/usr/bin/env python3
# scopeshell/interface/loader.py
from __future__ import annotations

"""
Dynamic command loader.

Features:
- Imports all modules under a given package (default: 'scopeshell.plugins').
- Supports 'entrypoint.py' inside a subpackage.
- A module registers commands through either:
    SCOPE = "class"                      (optional, dotted for nesting)
    COMMANDS = {"create": ClassNew(), ...}
  or a `register(tree, sink)` function for commands that need collaborators.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import Mapping

from scopeshell.commands import CliCommand, CommandTree
from scopeshell.ui import LineSink

logger = logging.getLogger(__name__)

DEFAULT_COMMANDS_PACKAGE = "scopeshell.plugins"


def _scope_for(tree: CommandTree, dotted: str | None) -> CommandTree:
    node = tree
    for name in (dotted or "").split("."):
        if name:
            node = node.add_scope(name)
    return node


def _register_from_module(module: ModuleType, tree: CommandTree, sink: LineSink) -> int:
    """Register COMMANDS / call register() exported by a module; returns commands added."""
    registered_count = 0
    commands = getattr(module, "COMMANDS", None)
    if isinstance(commands, Mapping):
        node = _scope_for(tree, getattr(module, "SCOPE", None))
        for name, command_obj in commands.items():
            if isinstance(command_obj, CliCommand):
                node.add_command(name, command_obj)
                registered_count += 1
    register = getattr(module, "register", None)
    if callable(register):
        registered_count += register(tree, sink) or 0
    return registered_count


def load_commands(
    tree: CommandTree,
    sink: LineSink,
    commands_package: str = DEFAULT_COMMANDS_PACKAGE,
) -> int:
    """
    Import all modules under `commands_package` and register their commands.

    Supported layouts:
      1) Plain modules: plugins/foo.py -> import plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
         -> import plugins.bar.entrypoint

    Returns the number of modules loaded.
    """
    package = importlib.import_module(commands_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(
            f"'{commands_package}' must be a package (folder) with modules."
        )

    loaded_count = 0
    for base_path in package_paths:
        for modinfo in pkgutil.iter_modules([base_path]):
            module_name = modinfo.name
            if module_name.startswith("_"):
                # Ignore private modules
                continue

            target = f"{commands_package}.{module_name}"
            if modinfo.ispkg and (Path(base_path) / module_name / "entrypoint.py").exists():
                target = f"{target}.entrypoint"

            module = importlib.import_module(target)
            added = _register_from_module(module, tree, sink)
            logger.debug("Loaded %s (%d commands)", target, added)
            loaded_count += 1

    return loaded_count


__all__ = ["DEFAULT_COMMANDS_PACKAGE", "load_commands"]
