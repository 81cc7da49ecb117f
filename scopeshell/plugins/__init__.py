# scopeshell/plugins/__init__.py
"""Command plugins loaded into the command tree at boot."""
