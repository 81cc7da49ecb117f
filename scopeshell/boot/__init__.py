#!/usr/bin/env python3
# scopeshell/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: Startup pipeline with [ OK ] / [FAILED] lines.
- BootState: Dataclass holding the command tree, output sink, config and logger.
"""


from .boot import BootState, boot_sequence

__all__ = ["boot_sequence", "BootState"]
