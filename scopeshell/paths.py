#!/usr/bin/env python3
# scopeshell/paths.py
from __future__ import annotations

"""
Well-known filesystem locations (per-user data dir, system config).
"""

import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

APP_DIR_NAME = "scopeshell"
HISTORY_FILE_NAME = "history.txt"


def data_dir() -> Path:
    """Per-user data directory (not created)."""
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
        return Path(base) / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    # POSIX
    base = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(base) / APP_DIR_NAME


def system_config_path() -> Path:
    if os.name == "nt":
        return Path(r"C:\ProgramData") / APP_DIR_NAME / "config.toml"
    if sys.platform == "darwin":
        return Path("/Library/Application Support") / APP_DIR_NAME / "config.toml"
    return Path("/etc") / APP_DIR_NAME / "config.toml"


def user_config_path() -> Path:
    return data_dir() / "config.toml"


def ensure_file(path: Path) -> Path:
    """Create `path` (and its parent directory) when missing; return it."""
    if not path.exists():
        logger.debug("Creating file: %s", path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
    return path


def history_file() -> Path:
    return data_dir() / HISTORY_FILE_NAME


__all__ = [
    "APP_DIR_NAME",
    "data_dir",
    "system_config_path",
    "user_config_path",
    "ensure_file",
    "history_file",
]
