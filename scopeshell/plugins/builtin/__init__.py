# scopeshell/plugins/builtin/__init__.py
"""Built-in shell commands."""
