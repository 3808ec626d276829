"""Command line interface for eol-check.

Every scan option can also be supplied through an environment variable, and
when running as a GitHub Action through the action's ``INPUT_*`` variables.
Command line arguments take precedence over environment variables, which
take precedence over the project config file.
"""

import os
import sys
import webbrowser
from typing import Optional

import click
import sentry_sdk

from eol_check import __version__
from eol_check._evaluation import EvaluationResult, Status
from eol_check._lifecycle import PROVIDER_NAMES, AIModelRepository
from eol_check._reporting import generate_html_report, render_json, write_action_outputs
from eol_check.checker import CheckReport, EolChecker
from eol_check.config import EolCheckConfig, evaluate_boolean, load_config
from eol_check.console import (
    IS_CI,
    IS_GITHUB_ACTIONS,
    console,
    err_console,
    gha_error,
    gha_group,
    gha_warning,
    print_ai_models_table,
    print_banner,
    print_check_summary,
    print_cycle_table,
    print_result_line,
    print_results_table,
)
from eol_check.exceptions import ConfigurationError, EolCheckError, ProductNotFoundError
from eol_check.http_client import create_session
from eol_check.logging_config import logger, set_log_level

DEFAULT_HTML_FILENAME = "eol-report.html"
PRODUCT_INDEX_URL = "https://endoflife.date/api/all.json"

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def initialize_sentry() -> None:
    """Initialize Sentry for error tracking when SENTRY_DSN is set and telemetry is allowed."""
    sentry_dsn = os.getenv("SENTRY_DSN")
    telemetry = os.getenv("TELEMETRY")
    if not sentry_dsn or (telemetry is not None and not evaluate_boolean(telemetry)):
        return

    def before_send(event, hint):
        """Don't report configuration errors, they are user errors."""
        if "exc_info" in hint:
            exc_type, exc_value, tb = hint["exc_info"]
            if isinstance(exc_value, ConfigurationError):
                return None
        return event

    sentry_sdk.init(
        dsn=sentry_dsn,
        send_default_pii=False,
        traces_sample_rate=0.0,
        before_send=before_send,
    )


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        set_log_level("DEBUG")
    elif quiet:
        set_log_level("ERROR")


def _action_html_path() -> Optional[str]:
    """HTML report path requested through the GitHub Action inputs, if any."""
    if not evaluate_boolean(os.getenv("INPUT_GENERATE-HTML")):
        return None
    return os.getenv("INPUT_HTML-FILENAME") or DEFAULT_HTML_FILENAME


def build_config(
    working_directory: str,
    fail_on_eol: Optional[bool] = None,
    fail_on_warning: Optional[bool] = None,
    scan_ai: Optional[bool] = None,
    scan_docker: Optional[bool] = None,
    scan_infra: Optional[bool] = None,
    verbose: Optional[bool] = None,
    refresh_cache: Optional[bool] = None,
) -> EolCheckConfig:
    """
    Load the project config file and apply command line overrides.

    Flags that were not given (None) keep the config file value.

    Raises:
        ConfigurationError: If the resulting configuration is invalid
    """
    config = load_config(working_directory).merged(
        fail_on_eol=fail_on_eol,
        fail_on_warning=fail_on_warning,
        scan_ai=scan_ai,
        scan_docker=scan_docker,
        scan_infra=scan_infra,
        verbose=verbose,
        refresh_cache=refresh_cache,
    )
    config.validate()
    return config


def _print_failures(report: CheckReport) -> None:
    for failure in report.failures:
        gha_warning(
            f"Could not fetch EOL data for {failure.component} (mapped to {failure.product}). Skipping...",
            title="EOL data unavailable",
        )


def _print_report(report: CheckReport) -> None:
    console.print()
    print_results_table(report.results)
    print_check_summary(report.summary)
    if IS_GITHUB_ACTIONS:
        for result in report.results:
            if result.status is Status.ERR:
                gha_error(f"{result.component} {result.version}: {result.message}", title="End of Life")


def _write_html(report: CheckReport, html: str, browser: bool) -> Optional[str]:
    try:
        path = generate_html_report(report.results, html)
    except EolCheckError as e:
        gha_error(f"Failed to generate HTML report: {e}")
        return None
    err_console.print(f"[success]✓ HTML report generated: {path}[/success]")
    if browser and not IS_CI:
        logger.info("Opening report in default browser...")
        webbrowser.open(path.resolve().as_uri())
    return str(path)


def run_check(
    config: EolCheckConfig,
    working_directory: str,
    output_json: bool = False,
    html: Optional[str] = None,
    browser: bool = True,
) -> CheckReport:
    """Run a full scan and emit every requested output."""
    checker = EolChecker(config)

    with gha_group("Scanning environment and project"):
        report = checker.run(working_directory)

    _print_failures(report)

    html_path = _write_html(report, html, browser) if html else None

    if IS_GITHUB_ACTIONS:
        write_action_outputs(report, html_path)

    if output_json:
        click.echo(render_json(report))
    else:
        _print_report(report)

    return report


@click.group(
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Check End of Life (EOL) status of your development environment, project dependencies and AI models.",
)
@click.version_option(__version__, "--version", prog_name="eol-check", message="%(prog)s %(version)s")
@click.option("--json", "output_json", is_flag=True, envvar="JSON_OUTPUT", help="Output results as JSON.")
@click.option(
    "--html",
    metavar="FILE",
    envvar="HTML_REPORT",
    default=None,
    help="Generate an HTML report to FILE.",
)
@click.option("--browser/--no-browser", default=True, help="Open the HTML report in a browser (never in CI).")
@click.option("--verbose", is_flag=True, envvar=["VERBOSE", "INPUT_VERBOSE"], help="Show verbose output.")
@click.option("--quiet", "-q", is_flag=True, envvar="QUIET", help="Only show errors.")
@click.option("--refresh-cache", is_flag=True, default=None, envvar="REFRESH_CACHE", help="Force refresh of cached EOL data.")
@click.option(
    "--fail-on-eol/--no-fail-on-eol",
    default=None,
    envvar=["FAIL_ON_EOL", "INPUT_FAIL-ON-EOL"],
    help="Exit with status 1 when an EOL component is found (default: on).",
)
@click.option(
    "--fail-on-warning",
    is_flag=True,
    default=None,
    envvar="FAIL_ON_WARNING",
    help="Exit with status 1 when a component is approaching EOL.",
)
@click.option("--scan-ai", is_flag=True, default=None, envvar="SCAN_AI", help="Scan for AI SDKs and model references.")
@click.option("--scan-docker", is_flag=True, default=None, envvar="SCAN_DOCKER", help="Scan Dockerfile base images.")
@click.option(
    "--scan-infra",
    is_flag=True,
    default=None,
    envvar="SCAN_INFRA",
    help="Scan Serverless, SAM/CloudFormation and Terraform runtimes.",
)
@click.option(
    "--working-directory",
    "-C",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    envvar=["WORKING_DIRECTORY", "INPUT_WORKING-DIRECTORY"],
    help="Project directory to scan.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    output_json: bool,
    html: Optional[str],
    browser: bool,
    verbose: bool,
    quiet: bool,
    refresh_cache: Optional[bool],
    fail_on_eol: Optional[bool],
    fail_on_warning: Optional[bool],
    scan_ai: Optional[bool],
    scan_docker: Optional[bool],
    scan_infra: Optional[bool],
    working_directory: str,
) -> None:
    if verbose and quiet:
        raise click.UsageError("Cannot use both --verbose and --quiet")
    _configure_logging(verbose, quiet)

    ctx.ensure_object(dict)
    ctx.obj["refresh_cache"] = bool(refresh_cache)

    if ctx.invoked_subcommand is not None:
        return

    initialize_sentry()

    try:
        config = build_config(
            working_directory,
            fail_on_eol=fail_on_eol,
            fail_on_warning=fail_on_warning,
            scan_ai=scan_ai,
            scan_docker=scan_docker,
            scan_infra=scan_infra,
            verbose=True if verbose else None,
            refresh_cache=refresh_cache,
        )
    except ConfigurationError as e:
        gha_error(str(e), title="Configuration error")
        sys.exit(1)

    if config.verbose and not quiet:
        set_log_level("DEBUG")

    if not output_json:
        print_banner(__version__)

    html = html or _action_html_path()

    try:
        report = run_check(config, working_directory, output_json=output_json, html=html, browser=browser)
    except EolCheckError as e:
        gha_error(f"EOL Check failed: {e}")
        sys.exit(1)

    if report.should_fail(config.fail_on_eol, config.fail_on_warning):
        summary = report.summary
        if not output_json:
            err_console.print(
                f"[error]Found {summary['err']} EOL and {summary['warn']} approaching-EOL component(s)[/error]"
            )
        sys.exit(1)


def _print_query_error(product: str, error: EolCheckError) -> None:
    err_console.print("\n[error]✗ Failed to fetch EOL data[/error]")
    err_console.print(f"[warning]Product: [bold]{product}[/bold][/warning]")
    if isinstance(error, ProductNotFoundError):
        err_console.print(f'\nThe product "{product}" was not found on {error.source}.')
        err_console.print("Please check the product name and try again.")
        err_console.print(f"\nSearch for available products at: [info]{PRODUCT_INDEX_URL}[/info]")
    else:
        err_console.print(f"\nError: {error}")


@cli.command()
@click.argument("product")
@click.argument("version", required=False)
@click.option("--refresh-cache", is_flag=True, help="Force refresh of cached EOL data.")
@click.pass_context
def query(ctx: click.Context, product: str, version: Optional[str], refresh_cache: bool) -> None:
    """Query EOL status for a specific PRODUCT, optionally at VERSION.

    PRODUCT is an endoflife.date slug (nodejs, python, ubuntu) or an AI model
    as provider/model (openai/gpt-4).
    """
    config = EolCheckConfig(refresh_cache=refresh_cache or ctx.obj.get("refresh_cache", False))
    checker = EolChecker(config)
    try:
        answer = checker.query(product, version)
    except EolCheckError as e:
        _print_query_error(product, e)
        sys.exit(1)

    if isinstance(answer, EvaluationResult):
        print_result_line(answer)
    else:
        print_cycle_table(product, answer)


@cli.command("ai-models")
@click.option("--refresh", is_flag=True, help="Refresh EOL dates from provider documentation pages first.")
def ai_models(refresh: bool) -> None:
    """List the known AI models and their lifecycle dates."""
    repository = AIModelRepository()
    if refresh:
        with console.status("Fetching AI model lifecycle data..."):
            summary = repository.refresh(create_session())
        for source, error in summary.failed.items():
            gha_warning(f"Failed to fetch from {source}: {error}")
        console.print(f"[info]Refreshed from {len(summary.succeeded)}/{summary.total} sources[/info]")

    for provider, models in repository.snapshot.items():
        print_ai_models_table(PROVIDER_NAMES.get(provider, provider), models)


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
