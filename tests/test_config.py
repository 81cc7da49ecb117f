import pytest

from scopeshell import config as config_module
from scopeshell.config import load_config
from scopeshell.errors import ConfigError


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    "Only look for config files inside a temporary directory"
    monkeypatch.setattr(
        config_module,
        "_find_config_files",
        lambda: [tmp_path / "system.toml", tmp_path / ".env", tmp_path / "config.toml"],
    )
    return tmp_path


def test_defaults(config_dir):
    conf = load_config(environ={})
    assert conf.server.hostname == "localhost"
    assert conf.server.port == 8080
    assert conf.server.username == "default_user"
    assert conf.completion.disable_api_related is False
    assert conf.commands_package == "scopeshell.plugins"
    assert conf.log_level is None
    assert conf.timeout == 10


def test_nested_toml_tables(config_dir):
    (config_dir / "config.toml").write_text(
        '[server]\nhostname = "api.example.com"\nport = 443\n\n[completion]\ndisable_api_related = "on"\n',
        encoding="utf-8",
    )
    conf = load_config(environ={})
    assert conf.server.hostname == "api.example.com"
    assert conf.server.port == 443
    assert conf.completion.disable_api_related is True


def test_later_files_win(config_dir):
    (config_dir / "system.toml").write_text('[server]\nusername = "system"\nport = 1\n', encoding="utf-8")
    (config_dir / "config.toml").write_text('[server]\nusername = "local"\n', encoding="utf-8")
    conf = load_config(environ={})
    assert conf.server.username == "local"
    assert conf.server.port == 1


def test_dotenv_file(config_dir):
    (config_dir / ".env").write_text(
        "# local overrides\n"
        "export SCOPESHELL_COMPLETION_DISABLE_API_RELATED=yes\n"
        'TIMEOUT = "30"\n'
        "LOG_LEVEL='debug'\n",
        encoding="utf-8",
    )
    conf = load_config(environ={})
    assert conf.completion.disable_api_related is True
    assert conf.timeout == 30
    assert conf.log_level == "DEBUG"


def test_explicit_config_file(config_dir):
    custom = config_dir / "custom.toml"
    custom.write_text("[completion]\ndisable_api_related = true\n", encoding="utf-8")
    conf = load_config(custom, environ={})
    assert conf.completion.disable_api_related is True


def test_missing_explicit_config_file(config_dir):
    with pytest.raises(ConfigError, match="not found"):
        load_config(config_dir / "absent.toml", environ={})


def test_environment_beats_files(config_dir):
    (config_dir / "config.toml").write_text("[server]\nport = 443\n", encoding="utf-8")
    conf = load_config(
        environ={
            "SCOPESHELL_SERVER_PORT": "9000",
            "SCOPESHELL_SERVER__HOSTNAME": "env-host",
            "UNRELATED": "ignored",
        }
    )
    assert conf.server.port == 9000
    assert conf.server.hostname == "env-host"
    assert "UNRELATED" not in conf.extra


def test_overrides_beat_environment(config_dir):
    conf = load_config(
        overrides={"SERVER_PORT": "7000", "SERVER_USERNAME": None},
        environ={"SCOPESHELL_SERVER_PORT": "9000", "SCOPESHELL_SERVER_USERNAME": "env-user"},
    )
    assert conf.server.port == 7000
    assert conf.server.username == "env-user"


@pytest.mark.parametrize(
    "key,value",
    [
        ("SERVER_PORT", "70000"),
        ("SERVER_PORT", "eighty"),
        ("SERVER_PORT", "0"),
        ("COMPLETION_DISABLE_API_RELATED", "maybe"),
        ("LOG_LEVEL", "loud"),
        ("TIMEOUT", "0"),
    ],
)
def test_invalid_values(config_dir, key, value):
    with pytest.raises(ConfigError):
        load_config(overrides={key: value}, environ={})


def test_broken_toml(config_dir):
    (config_dir / "config.toml").write_text("[server\nport = ", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(environ={})


def test_unknown_keys_are_kept_as_extra(config_dir):
    (config_dir / "config.toml").write_text('[theme]\nname = "dark"\n', encoding="utf-8")
    conf = load_config(environ={})
    assert conf.extra == {"THEME_NAME": "dark"}
