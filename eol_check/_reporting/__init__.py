"""Report writers for check results: JSON, HTML and GitHub Action outputs."""

from .github import write_action_outputs
from .html import generate_html_report, group_by_category
from .json_report import render_json

__all__ = [
    "generate_html_report",
    "group_by_category",
    "render_json",
    "write_action_outputs",
]
