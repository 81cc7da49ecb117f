import textwrap

import pytest

from scopeshell.commands import CommandTree
from scopeshell.interface.loader import load_commands
from scopeshell.plugins.builtin.entrypoint import Help

PLUGIN_COMMAND = """
from dataclasses import dataclass
from scopeshell.commands import CliCommand


@dataclass
class Noop(CliCommand):
    def execute(self, client, tokens):
        pass
"""


@pytest.fixture
def plugin_package(tmp_path, monkeypatch):
    "A throwaway plugins package: a table module, an entrypoint package and a private module"
    root = tmp_path / "loader_sample_plugins"
    (root / "gamma").mkdir(parents=True)
    (root / "__init__.py").write_text("", encoding="utf-8")
    (root / "alpha.py").write_text(
        PLUGIN_COMMAND + 'SCOPE = "tools.net"\nCOMMANDS = {"noop": Noop(), "skipped": object()}\n',
        encoding="utf-8",
    )
    (root / "_private.py").write_text('raise RuntimeError("must not be imported")\n', encoding="utf-8")
    (root / "gamma" / "__init__.py").write_text("", encoding="utf-8")
    (root / "gamma" / "entrypoint.py").write_text(
        PLUGIN_COMMAND
        + textwrap.dedent(
            """
            def register(tree, sink):
                tree.add_command("noop", Noop())
                sink.append_line("gamma ready")
                return 1
            """
        ),
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    return "loader_sample_plugins"


def test_loads_tables_and_register_hooks(plugin_package, buffer):
    tree = CommandTree()
    assert load_commands(tree, buffer, plugin_package) == 2
    assert tree.get_scope("tools").get_scope("net").command_names() == ["noop"]
    assert tree.command_names() == ["noop"]
    assert buffer.lines == ["gamma ready"]


def test_default_package_provides_help(buffer):
    tree = CommandTree()
    assert load_commands(tree, buffer) == 1
    help_command = tree.get_command("help")
    assert isinstance(help_command, Help)
    assert help_command.commands is tree


def test_module_instead_of_package(buffer):
    with pytest.raises(RuntimeError, match="must be a package"):
        load_commands(CommandTree(), buffer, "scopeshell.errors")
