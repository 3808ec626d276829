"""
Self-contained HTML report.

The page is rendered from ``templates/report.html.j2`` with Jinja2
autoescaping, so component names, versions and messages are always escaped.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Sequence, Union

from jinja2 import Environment, PackageLoader, select_autoescape

from eol_check._evaluation import Category, EvaluationResult, Status
from eol_check.exceptions import FileProcessingError
from eol_check.logging_config import logger

OTHER_CATEGORY = "Other"

_CATEGORY_ORDER = [c.value for c in Category] + [OTHER_CATEGORY]

_env = Environment(
    loader=PackageLoader("eol_check", "_reporting/templates"),
    autoescape=select_autoescape(["html", "j2"], default_for_string=True, default=True),
    trim_blocks=True,
    lstrip_blocks=True,
)


def group_by_category(results: Sequence[EvaluationResult]) -> Dict[str, List[EvaluationResult]]:
    """Group results by category label in a fixed category order, dropping empty groups."""
    groups: Dict[str, List[EvaluationResult]] = {label: [] for label in _CATEGORY_ORDER}
    for result in results:
        label = result.category.value if result.category else OTHER_CATEGORY
        groups[label].append(result)
    return {label: items for label, items in groups.items() if items}


def _stats(results: Sequence[EvaluationResult]) -> Dict[str, int]:
    return {
        "total": len(results),
        "ok": sum(1 for r in results if r.status is Status.OK),
        "warn": sum(1 for r in results if r.status is Status.WARN),
        "err": sum(1 for r in results if r.status is Status.ERR),
    }


def render_html(
    results: Sequence[EvaluationResult],
    title: str = "EOL Check Report",
    include_timestamp: bool = True,
) -> str:
    """Render the report page to a string."""
    template = _env.get_template("report.html.j2")
    timestamp = datetime.now().strftime("%A, %B %d, %Y at %I:%M %p") if include_timestamp else None
    return template.render(
        title=title,
        timestamp=timestamp,
        stats=_stats(results),
        groups=group_by_category(results),
    )


def generate_html_report(
    results: Sequence[EvaluationResult],
    path: Union[str, Path],
    title: str = "EOL Check Report",
    include_timestamp: bool = True,
) -> Path:
    """
    Write the HTML report to ``path``.

    Returns:
        The path written

    Raises:
        FileProcessingError: If the file cannot be written
    """
    output = Path(path)
    html = render_html(results, title=title, include_timestamp=include_timestamp)
    try:
        output.write_text(html, encoding="utf-8")
    except OSError as e:
        raise FileProcessingError(f"Failed to write HTML report to {output}: {e}") from e
    logger.debug(f"Wrote HTML report with {len(results)} results to {output}")
    return output
