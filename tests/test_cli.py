"""Tests for the Click CLI interface.

These tests verify that:
1. Scan flags and environment variables reach the checker configuration
2. The failure policy decides the exit code
3. JSON and HTML outputs are produced on request
4. The query and ai-models subcommands report results and errors
"""

import json
import os
import tempfile
import unittest
from importlib import import_module
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from eol_check import __version__
from eol_check._evaluation import Category, EvaluationResult, LifecycleCycle, Status
from eol_check._lifecycle import RefreshSummary
from eol_check.checker import CheckFailure, CheckReport
from eol_check.cli.main import PRODUCT_INDEX_URL, build_config, cli
from eol_check.exceptions import APIError, ConfigurationError, ProductNotFoundError

# eol_check.cli re-exports the `main` function, so import the module object explicitly
cli_main_module = import_module("eol_check.cli.main")
console_module = import_module("eol_check.console")


def _report(*statuses):
    return CheckReport(
        results=[
            EvaluationResult(f"component-{i}", "1.0", status, f"{status.value} message", Category.DEPENDENCY)
            for i, status in enumerate(statuses)
        ]
    )


class CLITestCase(unittest.TestCase):
    """Runs the CLI outside GitHub Actions against an empty project directory."""

    def setUp(self):
        self.runner = CliRunner()
        self._tmp = tempfile.TemporaryDirectory()
        self.project = Path(self._tmp.name)
        for patcher in (
            patch.object(cli_main_module, "IS_GITHUB_ACTIONS", False),
            patch.object(cli_main_module, "IS_CI", True),
            patch.object(console_module, "IS_GITHUB_ACTIONS", False),
            patch.object(cli_main_module, "initialize_sentry"),
            # Rich reads COLUMNS on every print; keep messages on one line
            patch.dict(os.environ, {"COLUMNS": "200"}),
        ):
            patcher.start()
            self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def invoke_check(self, report, *args, env=None):
        with patch.object(cli_main_module, "EolChecker") as checker_cls:
            checker_cls.return_value.run.return_value = report
            result = self.runner.invoke(cli, ["-C", str(self.project), *args], env=env)
        return result, checker_cls


class TestCLIHelp(CLITestCase):
    def test_help_option(self):
        result = self.runner.invoke(cli, ["--help"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Check End of Life (EOL) status", result.output)
        self.assertIn("--scan-ai", result.output)

    def test_short_help_option(self):
        result = self.runner.invoke(cli, ["-h"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("query", result.output)
        self.assertIn("ai-models", result.output)

    def test_version_option(self):
        result = self.runner.invoke(cli, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), f"eol-check {__version__}")


class TestCLIVerboseQuiet(CLITestCase):
    def test_verbose_and_quiet_mutually_exclusive(self):
        result = self.runner.invoke(cli, ["--verbose", "--quiet", "-C", str(self.project)])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Cannot use both --verbose and --quiet", result.output)


class TestCLIExitCodes(CLITestCase):
    """Test the failure policy applied to the check report."""

    def test_clean_report_exits_zero(self):
        result, _ = self.invoke_check(_report(Status.OK, Status.WARN))
        self.assertEqual(result.exit_code, 0, result.output)

    def test_eol_fails_by_default(self):
        result, _ = self.invoke_check(_report(Status.OK, Status.ERR))
        self.assertEqual(result.exit_code, 1)

    def test_no_fail_on_eol(self):
        result, _ = self.invoke_check(_report(Status.ERR), "--no-fail-on-eol")
        self.assertEqual(result.exit_code, 0, result.output)

    def test_fail_on_warning(self):
        result, _ = self.invoke_check(_report(Status.WARN), "--fail-on-warning")
        self.assertEqual(result.exit_code, 1)

    def test_action_input_disables_fail_on_eol(self):
        result, _ = self.invoke_check(_report(Status.ERR), env={"INPUT_FAIL-ON-EOL": "false"})
        self.assertEqual(result.exit_code, 0, result.output)

    def test_failures_do_not_fail_the_run(self):
        report = CheckReport(failures=[CheckFailure("go", "go", "Timeout")])
        result, _ = self.invoke_check(report)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Could not fetch EOL data for go (mapped to go)", result.output)

    def test_checker_error_exits_one(self):
        with patch.object(cli_main_module, "EolChecker") as checker_cls:
            checker_cls.return_value.run.side_effect = APIError("boom")
            result = self.runner.invoke(cli, ["-C", str(self.project)])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("EOL Check failed: boom", result.output)

    def test_missing_working_directory(self):
        result = self.runner.invoke(cli, ["-C", str(self.project / "missing")])
        self.assertEqual(result.exit_code, 2)


class TestCLIConfiguration(CLITestCase):
    """Test that flags, environment variables and the config file combine."""

    def test_scan_flags(self):
        _, checker_cls = self.invoke_check(_report(), "--scan-ai", "--scan-docker", "--refresh-cache")
        config = checker_cls.call_args[0][0]
        self.assertTrue(config.scan_ai)
        self.assertTrue(config.scan_docker)
        self.assertFalse(config.scan_infra)
        self.assertTrue(config.refresh_cache)

    def test_env_var_fallback(self):
        _, checker_cls = self.invoke_check(_report(), env={"SCAN_INFRA": "true"})
        self.assertTrue(checker_cls.call_args[0][0].scan_infra)

    def test_config_file_used_when_flag_absent(self):
        (self.project / ".eolrc.json").write_text(json.dumps({"scanAi": True, "failOnEol": False}))
        result, checker_cls = self.invoke_check(_report(Status.ERR))
        config = checker_cls.call_args[0][0]
        self.assertTrue(config.scan_ai)
        self.assertEqual(result.exit_code, 0, result.output)

    def test_flag_overrides_config_file(self):
        (self.project / ".eolrc.json").write_text(json.dumps({"failOnEol": False}))
        result, _ = self.invoke_check(_report(Status.ERR), "--fail-on-eol")
        self.assertEqual(result.exit_code, 1)

    def test_invalid_config_file(self):
        (self.project / ".eolrc.json").write_text(json.dumps({"failOnEol": "sometimes"}))
        result, checker_cls = self.invoke_check(_report())
        self.assertEqual(result.exit_code, 1)
        checker_cls.assert_not_called()
        self.assertIn("failOnEol must be true or false", result.output)

    def test_build_config(self):
        (self.project / ".eolrc.json").write_text(json.dumps({"scanAi": True, "excludes": ["react"]}))
        self.assertTrue(build_config(str(self.project)).scan_ai)
        config = build_config(str(self.project), scan_ai=False)
        self.assertFalse(config.scan_ai)
        self.assertEqual(config.excludes, ["react"])

    def test_build_config_invalid(self):
        (self.project / ".eolrc.json").write_text(json.dumps({"excludes": "react"}))
        with self.assertRaises(ConfigurationError):
            build_config(str(self.project))


class TestCLIOutputs(CLITestCase):
    def test_json_output(self):
        result, _ = self.invoke_check(_report(Status.ERR, Status.OK), "--json")
        data = json.loads(result.stdout)
        self.assertEqual([r["status"] for r in data], ["ERR", "OK"])
        self.assertEqual(result.exit_code, 1)

    def test_text_output(self):
        result, _ = self.invoke_check(_report(Status.OK))
        self.assertIn("eol-check", result.output)
        self.assertIn("component-0", result.output)

    def test_html_report(self):
        html_path = self.project / "report.html"
        with patch.object(cli_main_module.webbrowser, "open") as mock_open:
            result, _ = self.invoke_check(_report(Status.OK), "--html", str(html_path))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("component-0", html_path.read_text(encoding="utf-8"))
        mock_open.assert_not_called()

    def test_action_outputs_written_in_github_actions(self):
        with patch.object(cli_main_module, "IS_GITHUB_ACTIONS", True), patch.object(
            cli_main_module, "write_action_outputs"
        ) as mock_outputs:
            self.invoke_check(_report(Status.OK))
        mock_outputs.assert_called_once()


class TestQueryCommand(CLITestCase):
    def invoke_query(self, *args, answer=None, error=None):
        with patch.object(cli_main_module, "EolChecker") as checker_cls:
            if error is not None:
                checker_cls.return_value.query.side_effect = error
            else:
                checker_cls.return_value.query.return_value = answer
            result = self.runner.invoke(cli, list(args))
        return result, checker_cls

    def test_query_version(self):
        answer = EvaluationResult("nodejs", "16", Status.ERR, "Version 16 is EOL (ended 2023-09-11)")
        result, checker_cls = self.invoke_query("query", "nodejs", "16", answer=answer)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("[ERR] nodejs 16 - Version 16 is EOL", result.output)
        checker_cls.return_value.query.assert_called_once_with("nodejs", "16")

    def test_query_cycles(self):
        answer = (LifecycleCycle(cycle="22", eol="2027-04-30"),)
        result, checker_cls = self.invoke_query("query", "nodejs", answer=answer)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("EOL Data for nodejs", result.output)
        checker_cls.return_value.query.assert_called_once_with("nodejs", None)

    def test_query_not_found(self):
        result, _ = self.invoke_query("query", "nope", error=ProductNotFoundError("nope"))
        self.assertEqual(result.exit_code, 1)
        self.assertIn('The product "nope" was not found on endoflife.date.', result.output)
        self.assertIn(PRODUCT_INDEX_URL, result.output)

    def test_query_api_error(self):
        result, _ = self.invoke_query("query", "nodejs", error=APIError("Timeout after 30s"))
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error: Timeout after 30s", result.output)

    def test_refresh_cache_flag(self):
        _, checker_cls = self.invoke_query("query", "nodejs", "--refresh-cache", answer=())
        self.assertTrue(checker_cls.call_args[0][0].refresh_cache)

    def test_group_refresh_cache_flag(self):
        _, checker_cls = self.invoke_query("--refresh-cache", "query", "nodejs", answer=())
        self.assertTrue(checker_cls.call_args[0][0].refresh_cache)


class TestAIModelsCommand(CLITestCase):
    def test_lists_providers(self):
        result = self.runner.invoke(cli, ["ai-models"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("OpenAI", result.output)
        self.assertIn("Anthropic", result.output)

    def test_refresh(self):
        repository = MagicMock()
        repository.refresh.return_value = RefreshSummary(succeeded=["Google AI"], failed={"AWS Bedrock": "down"})
        repository.snapshot = {}
        with patch.object(cli_main_module, "AIModelRepository", return_value=repository):
            result = self.runner.invoke(cli, ["ai-models", "--refresh"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Failed to fetch from AWS Bedrock: down", result.output)
        self.assertIn("Refreshed from 1/2 sources", result.output)


class TestInitializeSentry(unittest.TestCase):
    @patch.dict(os.environ, {"SENTRY_DSN": "https://key@sentry.invalid/1"}, clear=False)
    def test_initializes_with_dsn(self):
        os.environ.pop("TELEMETRY", None)
        with patch.object(cli_main_module.sentry_sdk, "init") as mock_init:
            cli_main_module.initialize_sentry()
        mock_init.assert_called_once()
        self.assertEqual(mock_init.call_args.kwargs["dsn"], "https://key@sentry.invalid/1")

    @patch.dict(os.environ, {"SENTRY_DSN": "https://key@sentry.invalid/1", "TELEMETRY": "false"}, clear=False)
    def test_telemetry_opt_out(self):
        with patch.object(cli_main_module.sentry_sdk, "init") as mock_init:
            cli_main_module.initialize_sentry()
        mock_init.assert_not_called()

    def test_no_dsn(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("SENTRY_DSN", None)
            with patch.object(cli_main_module.sentry_sdk, "init") as mock_init:
                cli_main_module.initialize_sentry()
        mock_init.assert_not_called()

    @patch.dict(os.environ, {"SENTRY_DSN": "https://key@sentry.invalid/1", "TELEMETRY": "true"}, clear=False)
    def test_configuration_errors_are_filtered(self):
        with patch.object(cli_main_module.sentry_sdk, "init") as mock_init:
            cli_main_module.initialize_sentry()
        before_send = mock_init.call_args.kwargs["before_send"]

        config_error = ConfigurationError("bad")
        self.assertIsNone(before_send({"id": 1}, {"exc_info": (ConfigurationError, config_error, None)}))
        api_error = APIError("down")
        self.assertEqual(before_send({"id": 2}, {"exc_info": (APIError, api_error, None)}), {"id": 2})
        self.assertEqual(before_send({"id": 3}, {}), {"id": 3})


if __name__ == "__main__":
    unittest.main()
