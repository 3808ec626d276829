"""Tests for the console module."""

import unittest
from unittest.mock import patch

from rich.console import Console

from eol_check import console as c
from eol_check._evaluation import Category, EvaluationResult, LifecycleCycle, Status
from eol_check._lifecycle import DEFAULT_TABLES


def _recording_console():
    return Console(record=True, width=160, color_system=None, theme=c.custom_theme)


class TestCIDetection(unittest.TestCase):
    def test_ci_detection_constants_exist(self):
        """Test that CI detection constants are booleans."""
        self.assertIsInstance(c.IS_GITHUB_ACTIONS, bool)
        self.assertIsInstance(c.IS_CI, bool)


class TestBanner(unittest.TestCase):
    def test_print_banner_version(self):
        recorder = _recording_console()
        with patch.object(c, "console", recorder):
            c.print_banner("1.4.0")
        self.assertIn("eol-check v1.4.0", recorder.export_text())

    def test_print_banner_unknown_version(self):
        recorder = _recording_console()
        with patch.object(c, "console", recorder):
            c.print_banner("unknown")
        self.assertIn("eol-check unknown", recorder.export_text())


class TestGHAAnnotations(unittest.TestCase):
    """Tests for GitHub Actions workflow commands."""

    def test_gha_warning_gha_mode(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", True), patch("builtins.print") as mock_print:
            c.gha_warning("Could not fetch EOL data")
        mock_print.assert_called_with("::warning::Could not fetch EOL data")

    def test_gha_error_with_title(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", True), patch("builtins.print") as mock_print:
            c.gha_error("bad config", title="Configuration Error")
        mock_print.assert_called_with("::error title=Configuration Error::bad config")

    def test_gha_notice_gha_mode(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", True), patch("builtins.print") as mock_print:
            c.gha_notice("done")
        mock_print.assert_called_with("::notice::done")

    def test_local_mode_goes_to_stderr_console(self):
        """Test that outside GitHub Actions annotations are printed by the stderr console."""
        recorder = _recording_console()
        with patch.object(c, "IS_GITHUB_ACTIONS", False), patch.object(c, "err_console", recorder), patch(
            "builtins.print"
        ) as mock_print:
            c.gha_warning("Test warning", title="Fetch")
        mock_print.assert_not_called()
        self.assertIn("Warning (Fetch): Test warning", recorder.export_text())

    def test_gha_group_gha_mode(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", True), patch("builtins.print") as mock_print:
            with c.gha_group("Checking components"):
                pass
        self.assertEqual(
            [call.args[0] for call in mock_print.call_args_list],
            ["::group::Checking components", "::endgroup::"],
        )

    def test_gha_group_closes_on_error(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", True), patch("builtins.print") as mock_print:
            with self.assertRaises(RuntimeError):
                with c.gha_group("Checking components"):
                    raise RuntimeError("boom")
        mock_print.assert_called_with("::endgroup::")


class TestResultOutput(unittest.TestCase):
    def setUp(self):
        self.results = [
            EvaluationResult("Node.js", "16.20.0", Status.ERR, "Version 16 is EOL (ended 2023-09-11)", Category.RUNTIME),
            EvaluationResult("react", "18.2.0", Status.OK, "Version 18 is supported (ends unknown)", Category.DEPENDENCY),
        ]

    def test_format_result_line(self):
        line = c.format_result_line(self.results[0])
        self.assertIn("\\[ERR]", line)
        self.assertIn("[bold]Node.js[/bold] 16.20.0", line)
        self.assertTrue(line.endswith("Version 16 is EOL (ended 2023-09-11)"))

    def test_format_result_line_escapes_markup(self):
        result = EvaluationResult("[red]x[/red]", "1", Status.WARN, "odd")
        self.assertIn("\\[red]x", c.format_result_line(result))

    def test_print_result_line(self):
        recorder = _recording_console()
        with patch.object(c, "console", recorder):
            c.print_result_line(self.results[1])
        self.assertIn("[OK] react 18.2.0 - Version 18 is supported", recorder.export_text())

    def test_print_results_table(self):
        recorder = _recording_console()
        with patch.object(c, "console", recorder):
            c.print_results_table(self.results)
        text = recorder.export_text()
        self.assertIn("EOL Check Results", text)
        self.assertIn("Runtime Environment", text)
        self.assertIn("Project Dependencies", text)

    def test_print_results_table_empty(self):
        recorder = _recording_console()
        with patch.object(c, "console", recorder):
            c.print_results_table([])
        self.assertIn("No components to check.", recorder.export_text())

    def test_print_check_summary_shows_zeros(self):
        recorder = _recording_console()
        with patch.object(c, "console", recorder):
            c.print_check_summary({"total": 2, "ok": 2, "warn": 0, "err": 0})
        text = recorder.export_text()
        self.assertIn("Warnings", text)
        self.assertIn("EOL", text)


class TestSummaryTable(unittest.TestCase):
    def test_summary_table_filters_zeros(self):
        recorder = _recording_console()
        with patch.object(c, "console", recorder):
            c.print_summary_table("Summary", [("Metric 1", 10), ("Metric 2", 0)])
        text = recorder.export_text()
        self.assertIn("Metric 1", text)
        self.assertNotIn("Metric 2", text)

    def test_summary_table_empty_prints_nothing(self):
        recorder = _recording_console()
        with patch.object(c, "console", recorder):
            c.print_summary_table("Summary", [])
        self.assertEqual(recorder.export_text(), "")


class TestCycleTables(unittest.TestCase):
    def test_print_cycle_table(self):
        recorder = _recording_console()
        cycles = [
            LifecycleCycle(cycle="22", release_date="2024-04-24", eol="2027-04-30", lts="2024-10-29"),
            LifecycleCycle(cycle="0.10", eol=True),
        ]
        with patch.object(c, "console", recorder):
            c.print_cycle_table("nodejs", cycles)
        text = recorder.export_text()
        self.assertIn("EOL Data for nodejs", text)
        self.assertIn("2027-04-30", text)
        self.assertIn("yes", text)

    def test_print_ai_models_table(self):
        recorder = _recording_console()
        with patch.object(c, "console", recorder):
            c.print_ai_models_table("OpenAI", DEFAULT_TABLES["openai"])
        text = recorder.export_text()
        self.assertIn("OpenAI", text)
        self.assertIn("gpt-4o", text)


if __name__ == "__main__":
    unittest.main()
