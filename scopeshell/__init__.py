#!/usr/bin/env python3
# scopeshell/__init__.py
"""Interactive command shell core: scoped command tree, tokenizer and completion."""

__version__ = "0.1.0"
