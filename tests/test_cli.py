import contextlib
import io
import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from lazyfile.cli import build_parser, main, resolve_config
from lazyfile.config import RcConfig, config_from_env
from lazyfile.errors import ApiError, ExitCode, user_facing_error
from lazyfile.logging import configure_logging


class _FailingClient:
    def __init__(self, config: RcConfig) -> None:
        self.config = config

    def list_remotes(self) -> list[str]:
        raise ApiError(f"Failed to list remotes: cannot reach rclone at {self.config.base_url}", unreachable=True)


class _OkClient(_FailingClient):
    def list_remotes(self) -> list[str]:
        return ["gdrive"]


class TestParser(unittest.TestCase):
    def test_defaults(self) -> None:
        ns = build_parser().parse_args([])
        self.assertIsNone(ns.host)
        self.assertIsNone(ns.port)
        self.assertIsNone(ns.timeout)
        self.assertEqual(ns.log_level, "INFO")

    def test_log_level_is_normalized(self) -> None:
        ns = build_parser().parse_args(["--log-level", "warning"])
        self.assertEqual(ns.log_level, "WARN")

    def test_invalid_port_exits_with_usage_error(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            self.assertEqual(main(["--port", "70000"]), 2)


class TestResolveConfig(unittest.TestCase):
    def test_env_fallbacks(self) -> None:
        ns = build_parser().parse_args([])
        config = resolve_config(
            ns,
            {"LAZYFILE_RC_HOST": "nas", "LAZYFILE_RC_PORT": "5573", "RCLONE_RC_USER": "u", "RCLONE_RC_PASS": "p"},
        )
        self.assertEqual(config.base_url, "http://nas:5573")
        self.assertEqual(config.auth, ("u", "p"))

    def test_flags_override_env(self) -> None:
        ns = build_parser().parse_args(["--host", "127.0.0.1", "--port", "6000", "--timeout", "2.5"])
        config = resolve_config(ns, {"LAZYFILE_RC_HOST": "nas"})
        self.assertEqual(config.base_url, "http://127.0.0.1:6000")
        self.assertEqual(config.timeout, 2.5)
        self.assertIsNone(config.auth)

    def test_default_config(self) -> None:
        config = config_from_env({})
        self.assertEqual(config.base_url, "http://localhost:5572")

    def test_bad_env_port(self) -> None:
        with self.assertRaises(ValueError):
            config_from_env({"LAZYFILE_RC_PORT": "abc"})


class TestMain(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.log_file = str(Path(self.tmp.name) / "lazyfile.log")

    def tearDown(self) -> None:
        logging.getLogger("lazyfile").handlers.clear()
        self.tmp.cleanup()

    def test_unreachable_daemon_at_startup_is_fatal(self) -> None:
        err = io.StringIO()
        with patch("lazyfile.cli.RcloneClient", _FailingClient), patch("lazyfile.cli.curses.wrapper") as wrapper:
            with contextlib.redirect_stderr(err):
                code = main(["--log-file", self.log_file])

        self.assertEqual(code, int(ExitCode.DAEMON_ERROR))
        wrapper.assert_not_called()
        self.assertIn("cannot reach rclone at http://localhost:5572", err.getvalue())
        self.assertIn("rclone rcd", err.getvalue())

    def test_successful_startup_enters_curses(self) -> None:
        with patch("lazyfile.cli.RcloneClient", _OkClient), patch("lazyfile.cli.curses.wrapper") as wrapper:
            code = main(["--log-file", self.log_file])

        self.assertEqual(code, int(ExitCode.SUCCESS))
        wrapper.assert_called_once()


class TestErrorsAndLogging(unittest.TestCase):
    def tearDown(self) -> None:
        logging.getLogger("lazyfile").handlers.clear()

    def test_user_facing_error(self) -> None:
        self.assertEqual(user_facing_error("boom"), "Error: boom.")
        self.assertEqual(user_facing_error("boom", hint="retry"), "Error: boom. Next step: retry")

    def test_api_error_str_is_message(self) -> None:
        self.assertEqual(str(ApiError("Failed to list files: 500", status=500)), "Failed to list files: 500")

    def test_no_log_file_means_null_handler(self) -> None:
        logger = configure_logging("DEBUG")
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)
        self.assertFalse(logger.propagate)

    def test_level_filters_file_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "lazyfile.log"
            logger = configure_logging("warn", log_file=path)
            logger.warning("daemon gone")
            logger.info("hidden")
            for handler in logger.handlers:
                handler.flush()
                handler.close()
            text = path.read_text(encoding="utf-8")
        self.assertIn("daemon gone", text)
        self.assertNotIn("hidden", text)

    def test_file_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "lazyfile.log"
            logger = configure_logging("INFO", log_file=path)
            logger.info("loaded remotes")
            for handler in logger.handlers:
                handler.flush()
                handler.close()
            self.assertIn("loaded remotes", path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
