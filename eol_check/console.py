"""Rich console utilities for eol-check.

This module provides the shared Rich Console instance and helpers for
terminal output, with GitHub Actions annotations when running in CI.
"""

import os
from contextlib import contextmanager
from typing import Any, Generator, Iterable, List, Mapping, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from ._evaluation import EvaluationResult, LifecycleCycle, Status

# Detect CI environments
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"
IS_CI = os.getenv("CI") == "true" or IS_GITHUB_ACTIONS

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
        "status.ok": "green",
        "status.warn": "yellow",
        "status.err": "bold red",
    }
)

# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may disable them)
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)

# Diagnostics go to stderr so --json output on stdout stays parseable
err_console = Console(theme=custom_theme, stderr=True)

STATUS_STYLES = {
    Status.OK: "status.ok",
    Status.WARN: "status.warn",
    Status.ERR: "status.err",
}

STATUS_ICONS = {
    Status.OK: "✓",
    Status.WARN: "!",
    Status.ERR: "✗",
}


def print_banner(version: str = "unknown") -> None:
    """Print the eol-check name and version."""
    banner = Text()
    banner.append("eol-check", style="bold blue")
    version_display = f"v{version}" if version and version[0:1].isdigit() else version
    banner.append(f" {version_display}", style="highlight")
    banner.append(" - End of Life checks for runtimes, dependencies and AI models", style="info")
    console.print(banner)


@contextmanager
def gha_group(title: str) -> Generator[None, None, None]:
    """
    Context manager for GitHub Actions collapsible groups.

    Usage:
        with gha_group("Scanning project"):
            ...
    """
    if IS_GITHUB_ACTIONS:
        print(f"::group::{title}")
    try:
        yield
    finally:
        if IS_GITHUB_ACTIONS:
            print("::endgroup::")


def _annotate(kind: str, style: str, label: str, message: str, title: Optional[str]) -> None:
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::{kind} title={title}::{message}")
        else:
            print(f"::{kind}::{message}")
    elif title:
        err_console.print(f"[{style}]{label} ({title}):[/{style}] {message}")
    else:
        err_console.print(f"[{style}]{label}:[/{style}] {message}")


def gha_warning(message: str, title: Optional[str] = None) -> None:
    """Emit a warning annotation (plain warning line outside GitHub Actions)."""
    _annotate("warning", "warning", "Warning", message, title)


def gha_error(message: str, title: Optional[str] = None) -> None:
    """Emit an error annotation (plain error line outside GitHub Actions)."""
    _annotate("error", "error", "Error", message, title)


def gha_notice(message: str, title: Optional[str] = None) -> None:
    """Emit a notice annotation (plain notice line outside GitHub Actions)."""
    _annotate("notice", "info", "Notice", message, title)


def format_result_line(result: EvaluationResult) -> str:
    """Rich markup for ``[STATUS] component version - message``."""
    style = STATUS_STYLES[result.status]
    return (
        f"[{style}]\\[{result.status.value}][/{style}] "
        f"[bold]{escape(result.component)}[/bold] {escape(result.version)} - {escape(result.message)}"
    )


def print_result_line(result: EvaluationResult) -> None:
    console.print(format_result_line(result))


def print_results_table(results: Sequence[EvaluationResult], title: str = "EOL Check Results") -> None:
    """
    Print evaluation results as a table, one row per component.

    Args:
        results: Results in display order
        title: Table title
    """
    if not results:
        console.print("[info]No components to check.[/info]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Status", no_wrap=True)
    table.add_column("Component", style="bold")
    table.add_column("Version")
    table.add_column("Category", style="cyan")
    table.add_column("Details")

    for result in results:
        style = STATUS_STYLES[result.status]
        table.add_row(
            Text(f"{STATUS_ICONS[result.status]} {result.status.value}", style=style),
            result.component,
            result.version,
            result.category.value if result.category else "",
            result.message,
        )

    console.print(table)


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a two-column metric table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to show rows whose value is 0/empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value]

    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def print_check_summary(summary: Mapping[str, int]) -> None:
    """Print total/OK/WARN/ERR counts."""
    print_summary_table(
        "Summary",
        [
            ("Total checks", summary.get("total", 0)),
            ("Supported", summary.get("ok", 0)),
            ("Warnings", summary.get("warn", 0)),
            ("EOL", summary.get("err", 0)),
        ],
        show_if_empty=True,
    )


def print_cycle_table(product: str, cycles: Iterable[LifecycleCycle]) -> None:
    """Print a product's release cycles (Cycle / Release Date / EOL Date / LTS)."""
    table = Table(title=f"EOL Data for {product}", show_header=True, header_style="bold")
    table.add_column("Cycle", style="bold")
    table.add_column("Release Date")
    table.add_column("EOL Date")
    table.add_column("LTS")

    for cycle in cycles:
        table.add_row(cycle.cycle, cycle.release_date or "", _flag(cycle.eol), _flag(cycle.lts))

    console.print(table)


def print_ai_models_table(provider_name: str, models: Mapping[str, Sequence[Any]]) -> None:
    """Print every model and cycle for one AI provider."""
    table = Table(title=provider_name, show_header=True, header_style="bold")
    table.add_column("Model", style="bold")
    table.add_column("Version")
    table.add_column("Released")
    table.add_column("EOL")
    table.add_column("Recommended")

    for model, cycles in models.items():
        for cycle in cycles:
            table.add_row(model, cycle.cycle, cycle.release_date or "", _flag(cycle.eol), _flag(cycle.lts))

    console.print(table)


def _flag(value: Any) -> str:
    if value is True:
        return "yes"
    if value is False or value is None:
        return "no"
    return str(value)
