from __future__ import annotations

import argparse
import curses
import locale
import logging as py_logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from lazyfile.app import LazyFileApp
from lazyfile.config import RcConfig, config_from_env, parse_port
from lazyfile.errors import ApiError, ExitCode, user_facing_error
from lazyfile.logging import configure_logging, default_log_path
from lazyfile.rclone import RcloneClient

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _port_type(value: str) -> int:
    try:
        return parse_port(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--port must be an integer between 1 and 65535") from exc


def _timeout_type(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--timeout must be a number of seconds") from exc
    if timeout <= 0:
        raise argparse.ArgumentTypeError("--timeout must be positive")
    return timeout


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lazyfile", description="lazyfile: browse rclone remotes")
    parser.add_argument("--host", default=None, help="rclone rc host (default: localhost)")
    parser.add_argument("--port", type=_port_type, default=None, help="rclone rc port (default: 5572)")
    parser.add_argument("--user", default=None, help="rc basic auth user (default: $RCLONE_RC_USER)")
    parser.add_argument("--password", default=None, help="rc basic auth password (default: $RCLONE_RC_PASS)")
    parser.add_argument("--timeout", type=_timeout_type, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--log-level", type=_log_level_type, default="INFO")
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def resolve_config(namespace: argparse.Namespace, environ: dict[str, str] | None = None) -> RcConfig:
    config = config_from_env(environ)
    if namespace.host:
        config.host = namespace.host
    if namespace.port is not None:
        config.port = namespace.port
    if namespace.user:
        config.user = namespace.user
    if namespace.password:
        config.password = namespace.password
    config.timeout = namespace.timeout
    return config


def main(argv: Sequence[str] | None = None) -> int:
    try:
        namespace = parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    log_path = namespace.log_file.expanduser() if namespace.log_file is not None else default_log_path()
    logger = configure_logging(level=namespace.log_level, log_file=log_path)

    try:
        config = resolve_config(namespace)
    except ValueError as exc:
        print(user_facing_error(str(exc), hint="check LAZYFILE_RC_PORT"), file=sys.stderr)
        return int(ExitCode.INVALID_ARGS)

    logger.debug("Starting lazyfile against %s", config.base_url)
    app = LazyFileApp(stdscr=None, client=RcloneClient(config))
    try:
        app.load_remotes()
    except ApiError as exc:
        logger.error("Startup listing failed: %s", exc, exc_info=logger.isEnabledFor(py_logging.DEBUG))
        hint = f"start the daemon with `rclone rcd` on {config.base_url}"
        print(user_facing_error(str(exc), hint=hint), file=sys.stderr)
        return int(ExitCode.DAEMON_ERROR)

    locale.setlocale(locale.LC_ALL, "")
    # Escape must close modals without curses' default one second delay.
    os.environ.setdefault("ESCDELAY", "25")

    def wrapped(stdscr: curses.window) -> None:
        app.stdscr = stdscr
        app.run()

    try:
        curses.wrapper(wrapped)
    except Exception:
        logger.exception("Unhandled exception in event loop")
        print(user_facing_error("Unexpected runtime failure", hint=f"Inspect logs: {log_path}"), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)
    return int(ExitCode.SUCCESS)


def run() -> None:
    raise SystemExit(main())
