"""GitHub Actions step outputs and job summary."""

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Union

from eol_check.logging_config import logger

if TYPE_CHECKING:
    from eol_check.checker import CheckReport


def _append(path: str, text: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)


def format_step_summary(summary: Dict[str, int], html_path: Union[str, Path, None] = None) -> str:
    """Markdown section for ``$GITHUB_STEP_SUMMARY``."""
    lines = [
        "",
        "## EOL Check Results",
        "",
        f"- **Total Checks**: {summary['total']}",
        f"- **Supported**: {summary['ok']}",
        f"- **Warnings**: {summary['warn']}",
        f"- **EOL/Errors**: {summary['err']}",
        "",
    ]
    if html_path:
        lines.append(f"📄 [View Full HTML Report]({html_path})")
    return "\n".join(lines) + "\n"


def write_action_outputs(report: "CheckReport", html_path: Union[str, Path, None] = None) -> bool:
    """
    Publish results to the GitHub Actions runner.

    Appends ``results``, ``has-eol`` and ``summary`` to ``$GITHUB_OUTPUT``
    and a markdown summary to ``$GITHUB_STEP_SUMMARY``. Either file is
    skipped when its variable is unset.

    Returns:
        True if anything was written
    """
    written = False
    summary = report.summary

    output_file: Optional[str] = os.getenv("GITHUB_OUTPUT")
    if output_file:
        results_json = json.dumps([r.to_dict() for r in report.results])
        _append(
            output_file,
            f"results={results_json}\n"
            f"has-eol={'true' if report.has_eol else 'false'}\n"
            f"summary={json.dumps(summary)}\n",
        )
        logger.debug(f"Wrote step outputs to {output_file}")
        written = True

    summary_file: Optional[str] = os.getenv("GITHUB_STEP_SUMMARY")
    if summary_file:
        _append(summary_file, format_step_summary(summary, html_path))
        logger.debug(f"Wrote job summary to {summary_file}")
        written = True

    return written
