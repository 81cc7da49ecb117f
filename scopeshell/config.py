#!/usr/bin/env python3
# scopeshell/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) System config.toml
  3) User config.toml (in the data dir)
  4) Files in CWD: .env, config.toml
  5) Explicit config file (--config), which must exist
  6) Environment variables prefixed with SCOPESHELL_
  7) Overrides passed by the caller (command-line flags)

Nested TOML tables flatten to SECTION_KEY, so
    [server]
    hostname = "api.example.com"
and SCOPESHELL_SERVER_HOSTNAME=api.example.com set the same value.

Validation:
  - SERVER_PORT: int in 1..65535
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - TIMEOUT: int >= 1
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
import os
import tomllib

from scopeshell.errors import ConfigError
from scopeshell.interface.loader import DEFAULT_COMMANDS_PACKAGE
from scopeshell.paths import system_config_path, user_config_path

ENV_PREFIX = "SCOPESHELL_"

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "SERVER_HOSTNAME": "localhost",
    "SERVER_PORT": 8080,
    "SERVER_USERNAME": "default_user",
    "COMPLETION_DISABLE_API_RELATED": False,
    "LOG_LEVEL": None,              # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
    "HISTORY_FILE_PATH": None,
    "COMMANDS_PACKAGE": DEFAULT_COMMANDS_PACKAGE,
    "TIMEOUT": 10,                  # seconds, for http(s):// option values
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------- data model ----------

@dataclass(frozen=True)
class ServerConfig:
    """Identity shown in the prompt: user@hostname:port."""
    hostname: str
    port: int
    username: str


@dataclass(frozen=True)
class CompletionConfig:
    disable_api_related: bool


@dataclass(frozen=True)
class AppConfig:
    server: ServerConfig
    completion: CompletionConfig

    log_level: str | None
    log_file_path: Path | None
    history_file_path: Path | None
    commands_package: str
    timeout: int

    # Keys no section claims
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- sources ----------

def _read_env_file(path: Path) -> dict[str, str]:
    """KEY=VALUE lines; '#' comments and blank lines are skipped, one pair of quotes is stripped."""
    if not path.is_file():
        return {}
    pairs: dict[str, str] = {}
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or not key or key.startswith("#"):
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        pairs[key] = value
    return pairs


def _read_toml_file(path: Path, *, required: bool = False) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        if required:
            raise ConfigError(f"Config file not found: {path}") from None
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc


def _flatten(table: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """{'server': {'port': 443}} -> {'SERVER_PORT': 443}"""
    flat: dict[str, Any] = {}
    for name, value in table.items():
        key = f"{prefix}_{name}" if prefix else str(name)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, key))
        else:
            flat[key] = value
    return _canonical(flat)


def _canonical(values: Mapping[str, Any]) -> dict[str, Any]:
    """Upper-case keys, drop the SCOPESHELL_ prefix and fold '__' separators."""
    out: dict[str, Any] = {}
    for name, value in values.items():
        key = str(name).upper().removeprefix(ENV_PREFIX)
        out[key.replace("__", "_")] = value
    return out


def _from_environ(environ: Mapping[str, str]) -> dict[str, str]:
    return _canonical({k: v for k, v in environ.items() if k.upper().startswith(ENV_PREFIX)})


def _find_config_files() -> list[Path]:
    cwd = Path.cwd()
    return [
        system_config_path(),
        user_config_path(),
        cwd / ".env",
        cwd / "config.toml",
    ]


def _merge_sources(
    config_path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files():
        if file.name == ".env":
            merged.update(_canonical(_read_env_file(file)))
        elif file.suffix == ".toml":
            merged.update(_flatten(_read_toml_file(file)))

    if config_path is not None:
        merged.update(_flatten(_read_toml_file(config_path, required=True)))

    merged.update(_from_environ(os.environ if environ is None else environ))

    if overrides:
        merged.update(_canonical({k: v for k, v in overrides.items() if v is not None}))
    return merged


# ---------- coercion ----------

_BOOLS = {
    "1": True, "true": True, "yes": True, "y": True, "on": True,
    "0": False, "false": False, "no": False, "n": False, "off": False,
}


def _to_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    try:
        return _BOOLS[str(val).strip().lower()]
    except KeyError:
        raise ValueError(f"{key} must be a boolean, got {val!r}") from None


def _to_int(key: str, val: Any, *, low: int, high: int | None = None) -> int:
    try:
        number = val if isinstance(val, int) and not isinstance(val, bool) else int(str(val).strip())
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {val!r}") from None
    if number < low or (high is not None and number > high):
        bounds = f"{low}..{high}" if high is not None else f">= {low}"
        raise ValueError(f"{key} must be {bounds}, got {number}")
    return number


def _to_opt_str(val: Any) -> str | None:
    text = "" if val is None else str(val).strip()
    return None if text.lower() in {"", "none"} else text


def _to_log_level(val: Any) -> str | None:
    level = _to_opt_str(val)
    if level is None:
        return None
    if level.upper() not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {level!r}")
    return level.upper()


def _to_opt_path(val: Any) -> Path | None:
    text = _to_opt_str(val)
    if text is None:
        return None
    # expand both ~ and env vars
    return Path(os.path.expandvars(os.path.expanduser(text))).resolve()


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any]) -> AppConfig:
    def get(key: str) -> Any:
        return config.get(key, DEFAULTS[key])

    server = ServerConfig(
        hostname=str(get("SERVER_HOSTNAME")),
        port=_to_int("SERVER_PORT", get("SERVER_PORT"), low=1, high=65535),
        username=str(get("SERVER_USERNAME")),
    )
    completion = CompletionConfig(
        disable_api_related=_to_bool(
            "COMPLETION_DISABLE_API_RELATED", get("COMPLETION_DISABLE_API_RELATED")),
    )

    return AppConfig(
        server=server,
        completion=completion,
        log_level=_to_log_level(get("LOG_LEVEL")),
        log_file_path=_to_opt_path(get("LOG_FILE_PATH")),
        history_file_path=_to_opt_path(get("HISTORY_FILE_PATH")),
        commands_package=_to_opt_str(get("COMMANDS_PACKAGE")) or DEFAULT_COMMANDS_PACKAGE,
        timeout=_to_int("TIMEOUT", get("TIMEOUT"), low=1),
        extra={k: v for k, v in config.items() if k not in DEFAULTS},
    )


# ---------- public API ----------

def load_config(
    config_path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Load, merge, normalize, and validate configuration.

    `overrides` uses flat keys (e.g. {"SERVER_PORT": 443}); None values are
    ignored so unset command-line flags fall through.
    No filesystem side-effects (no directory creation).
    """
    path = Path(config_path) if config_path is not None else None
    raw = _merge_sources(path, overrides, environ)
    try:
        return _validate_and_build(raw)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "DEFAULTS",
    "ENV_PREFIX",
    "LOG_LEVELS",
    "AppConfig",
    "ServerConfig",
    "CompletionConfig",
    "load_config",
]
