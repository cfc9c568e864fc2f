"""Tests for CLI parsing and command dispatch."""

from __future__ import annotations

import contextlib
import io
import unittest
from unittest import mock

from zeno import cli
from zeno.config import Settings
from zeno.errors import ZenoError


class MainDispatchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = Settings(database_url="sqlite://")
        patches = [
            mock.patch("zeno.cli.load_settings", return_value=self.settings),
            mock.patch("zeno.cli.configure_logging"),
            mock.patch("zeno.cli.save_ui_preferences"),
        ]
        self.load_settings, self.configure_logging, self.save_prefs = [p.start() for p in patches]
        for patcher in patches:
            self.addCleanup(patcher.stop)

    def _main(self, argv: list[str]) -> int:
        with self.assertRaises(SystemExit) as ctx:
            cli.main(argv)
        return ctx.exception.code

    def test_default_command_is_search(self) -> None:
        with mock.patch("zeno.cli.run_search", return_value=0) as run_search:
            self.assertEqual(self._main([]), 0)
        run_search.assert_called_once_with(self.settings)
        self.configure_logging.assert_called_once_with(self.settings.log_file, self.settings.log_level)

    def test_search_exit_code_is_propagated(self) -> None:
        with mock.patch("zeno.cli.run_search", return_value=1):
            self.assertEqual(self._main(["search"]), 1)

    def test_add_dispatches_to_add_command(self) -> None:
        with mock.patch("zeno.cli.run_add_command", return_value=0) as run_add_command, mock.patch(
            "zeno.cli.run_search"
        ) as run_search:
            self.assertEqual(self._main(["add", "--no-ai"]), 0)
        run_add_command.assert_called_once_with(self.settings)
        run_search.assert_not_called()
        self.assertTrue(self.load_settings.call_args.kwargs["no_ai"])

    def test_flags_are_forwarded_to_settings(self) -> None:
        with mock.patch("zeno.cli.run_search", return_value=0):
            self._main(["--style", "native", "--theme", "plain", "--no-color", "--log-level", "debug"])
        kwargs = self.load_settings.call_args.kwargs
        self.assertEqual(kwargs["style"], "native")
        self.assertEqual(kwargs["theme"], "plain")
        self.assertTrue(kwargs["no_color"])
        self.assertEqual(kwargs["log_level"], "debug")
        self.save_prefs.assert_called_once_with(style="native", theme="plain")

    def test_help_prints_usage_and_exits_zero(self) -> None:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), mock.patch("zeno.cli.run_search") as run_search:
            self.assertEqual(self._main(["help"]), 0)
        self.assertIn("usage: zeno", stdout.getvalue())
        run_search.assert_not_called()
        self.load_settings.assert_not_called()

    def test_unknown_command_exits_one(self) -> None:
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), mock.patch("zeno.cli.run_search") as run_search:
            self.assertEqual(self._main(["frobnicate"]), 1)
        self.assertIn("unknown command 'frobnicate'", stderr.getvalue())
        run_search.assert_not_called()


class RunAddCommandTests(unittest.TestCase):
    def test_errors_print_and_close_store(self) -> None:
        store = mock.Mock()
        stderr = io.StringIO()
        with mock.patch("zeno.store.SqlItemStore", return_value=store), mock.patch(
            "zeno.add.run_add", side_effect=ZenoError("no languages found in database")
        ), contextlib.redirect_stderr(stderr):
            code = cli.run_add_command(Settings(database_url="sqlite://"))
        self.assertEqual(code, 1)
        self.assertIn("Error: no languages found in database", stderr.getvalue())
        store.close.assert_called_once_with()

    def test_success_passes_ai_switch(self) -> None:
        store = mock.Mock()
        with mock.patch("zeno.store.SqlItemStore", return_value=store), mock.patch(
            "zeno.add.run_add", return_value=5
        ) as run_add:
            code = cli.run_add_command(Settings(database_url="sqlite://", ai_enabled=False))
        self.assertEqual(code, 0)
        run_add.assert_called_once_with(store, ai_enabled=False)
        store.close.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
