#!/usr/bin/env python3
# scopeshell/main.py
from __future__ import annotations

"""
REPL entrypoint: parse startup flags, load config, boot, then read/dispatch/flush
until EOF or 'exit'.
"""

import argparse
import sys
from typing import Sequence

from scopeshell import __version__
from scopeshell.boot import BootState, boot_sequence
from scopeshell.config import AppConfig, load_config
from scopeshell.errors import ConfigError, ShellError
from scopeshell.interface import ValueResolver, handle_line, make_cli
from scopeshell.ui import colorize, print_line


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scopeshell",
        description="Interactive shell with scoped commands and completion.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", metavar="FILE", help="Specify a custom configuration file")
    parser.add_argument("--hostname", metavar="HOST", help="Set the server hostname")
    parser.add_argument("--port", metavar="PORT", help="Set the server port")
    parser.add_argument("--username", metavar="NAME", help="Set the username")
    parser.add_argument(
        "--completion-api-disable",
        metavar="BOOL",
        help="Disable API-related completions",
    )
    parser.add_argument("--log-level", metavar="LEVEL", help="Console log level (DEBUG, INFO, ...)")
    parser.add_argument(
        "--timeout", metavar="SECONDS", help="Timeout for http(s):// option values"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Hide boot status lines")
    return parser


def config_overrides(args: argparse.Namespace) -> dict[str, str | None]:
    """Map parsed flags to flat config keys; unset flags stay None."""
    return {
        "SERVER_HOSTNAME": args.hostname,
        "SERVER_PORT": args.port,
        "SERVER_USERNAME": args.username,
        "COMPLETION_DISABLE_API_RELATED": args.completion_api_disable,
        "LOG_LEVEL": args.log_level,
        "TIMEOUT": args.timeout,
    }


def prompt_for(config: AppConfig) -> str:
    return f"{config.server.username}@{config.server.hostname}:{config.server.port} > "


def run_repl(state: BootState) -> int:
    resolver = ValueResolver(timeout_seconds=state.config.timeout)
    sink = state.sink

    with make_cli(state.tree, state.history_path, prompt_for(state.config)) as cli:
        while True:
            try:
                line = cli.get_line()
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            try:
                handle_line(state.tree, line, sink, resolver=resolver)
            except SystemExit:
                sink.flush()
                break
            except ShellError as err:
                state.logger.debug("Command failed: %r", err)
                sink.add_error(err)
            sink.flush()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config, config_overrides(args))
    except ConfigError as err:
        print_line(colorize(f"[FAILED] {err}", "red"), file=sys.stderr)
        return 2

    state = boot_sequence(config, quiet=args.quiet)
    return run_repl(state)


if __name__ == "__main__":
    raise SystemExit(main())
