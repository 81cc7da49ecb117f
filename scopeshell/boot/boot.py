#!/usr/bin/env python3
# scopeshell/boot/boot.py
from __future__ import annotations
"""
Boot sequence for the shell.

Each step prints a status line; a failing step prints [FAILED] and re-raises.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable
import logging
import platform

from scopeshell.commands import CommandTree
from scopeshell.config import AppConfig
from scopeshell.interface.loader import load_commands
from scopeshell.paths import ensure_file, history_file
from scopeshell.ui import OutputBuffer, colorize, enable_windows_vt, init_logger, print_line


@dataclass(slots=True)
class BootState:
    tree: CommandTree
    sink: OutputBuffer
    config: AppConfig
    logger: logging.Logger
    history_path: Path
    loaded_count: int


def _step(label: str, fn: Callable[[], Any], *, quiet: bool = False) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    if not quiet:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def boot_sequence(config: AppConfig, *, quiet: bool = False) -> BootState:
    # ---------- console + env ----------
    _step("Enable ANSI sequences", enable_windows_vt, quiet=quiet)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        quiet=quiet,
    )

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "scopeshell",
            level=config.log_level,
            logfile=ensure_file(config.log_file_path) if config.log_file_path else None,
        ),
        quiet=quiet,
    )

    # ---------- commands ----------
    tree = CommandTree(
        client=None,
        api_completion=not config.completion.disable_api_related,
    )
    sink = OutputBuffer()
    loaded_count = _step(
        f"Load commands from '{config.commands_package}'",
        lambda: load_commands(tree, sink, config.commands_package),
        quiet=quiet,
    )
    logger.debug("Command tree:\n%s", tree.show_tree())

    # ---------- history ----------
    history_path = _step(
        "Prepare history file",
        lambda: ensure_file(config.history_file_path or history_file()),
        quiet=quiet,
    )
    _step("Boot complete", lambda: None, quiet=quiet)

    return BootState(
        tree=tree,
        sink=sink,
        config=config,
        logger=logger,
        history_path=history_path,
        loaded_count=loaded_count,
    )
