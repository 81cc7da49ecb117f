import pytest

from scopeshell import config as config_module
from scopeshell import main as main_module
from scopeshell.boot import boot_sequence
from scopeshell.config import load_config
from scopeshell.interface.cli import BaseCLI
from scopeshell.ui import strip_ansi


class ScriptedCLI(BaseCLI):
    "Feeds prepared lines to the REPL, then signals EOF"

    def __init__(self, lines):
        super().__init__()
        self._lines = list(lines)

    def get_line(self):
        if not self._lines:
            raise EOFError
        line = self._lines.pop(0)
        if line is KeyboardInterrupt:
            raise KeyboardInterrupt
        return line


@pytest.fixture
def no_config_files(monkeypatch):
    monkeypatch.setattr(config_module, "_find_config_files", lambda: [])
    for name in list(config_module.os.environ):
        if name.startswith("SCOPESHELL_"):
            monkeypatch.delenv(name)


def test_flags_become_config_overrides(no_config_files):
    args = main_module.build_parser().parse_args(
        ["--hostname", "api.example.com", "--port", "443", "--completion-api-disable", "true", "--timeout", "3"]
    )
    conf = load_config(args.config, main_module.config_overrides(args))
    assert conf.server.hostname == "api.example.com"
    assert conf.server.port == 443
    assert conf.completion.disable_api_related is True
    assert conf.timeout == 3
    assert main_module.prompt_for(conf) == "default_user@api.example.com:443 > "


def test_invalid_config_exits_with_status_2(no_config_files, capsys):
    assert main_module.main(["--port", "0"]) == 2
    assert "SERVER_PORT" in capsys.readouterr().err


def test_boot_loads_builtin_commands(no_config_files, tmp_path, capsys, scopeshell_logger):
    conf = load_config(overrides={"HISTORY_FILE_PATH": str(tmp_path / "history.txt")})
    state = boot_sequence(conf)
    assert state.loaded_count == 1
    assert state.tree.get_command("help") is not None
    assert state.history_path.exists()
    assert "[  OK  ] Boot complete" in strip_ansi(capsys.readouterr().out)


def test_repl_dispatches_and_reports_errors(no_config_files, tmp_path, monkeypatch, capsys, scopeshell_logger):
    conf = load_config(overrides={"HISTORY_FILE_PATH": str(tmp_path / "history.txt")})
    state = boot_sequence(conf, quiet=True)
    capsys.readouterr()

    script = ["help", KeyboardInterrupt, "bogus", "help --tree | !zzz", "exit", "never reached"]
    monkeypatch.setattr(main_module, "make_cli", lambda tree, history, prompt: ScriptedCLI(script))

    assert main_module.run_repl(state) == 0
    out = strip_ansi(capsys.readouterr().out).splitlines()
    assert out == [
        "Commands: help. Scopes: .",
        "Type 'help' to list commands, or '<command> --help' for details.",
        "Error: Command not found: bogus",
        "└─ help",
    ]
