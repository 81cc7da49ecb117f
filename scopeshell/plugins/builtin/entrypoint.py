# scopeshell/plugins/builtin/entrypoint.py
from __future__ import annotations

"""
Built-in commands:
    - help: list commands, render the command tree, or show a command's help
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from scopeshell.commands import CliCommand, CommandTree, command_info, option
from scopeshell.interface.handler import HELP_TEXT
from scopeshell.interface.parser import CommandTokens
from scopeshell.ui import LineSink


@command_info(
    about="Show available commands",
    long_about="Without arguments, list top-level commands and scopes. "
    "Give a command path to show that command's help.",
    examples="""--tree
class create""",
)
@dataclass
class Help(CliCommand):
    tree: Optional[bool] = option(short="t", long="tree", help="Command tree", flag=True)

    commands: CommandTree | None = field(default=None, repr=False, compare=False)
    sink: LineSink | None = field(default=None, repr=False, compare=False)

    def execute(self, client: Any, tokens: CommandTokens) -> None:
        query = self.from_tokens(tokens)
        if self.commands is None or self.sink is None:
            raise RuntimeError("help is not attached to a command tree")

        if query.tree:
            for line in self.commands.show_tree().splitlines():
                self.sink.append_line(line)
            return

        path = tokens.get_positionals()
        if not path:
            self.sink.append_line(str(self.commands))
            self.sink.append_line(HELP_TEXT)
            return

        walk = self.commands.resolve(path)
        if walk.command is None or walk.command_name is None:
            self.sink.append_line(f"{' '.join(walk.context)}: {walk.scope}")
            return
        walk.command.help(walk.command_name, walk.context, self.sink)


def register(tree: CommandTree, sink: LineSink) -> int:
    tree.add_command("help", Help(commands=tree, sink=sink))
    return 1
