"""JSON rendering of evaluation results."""

import json
from typing import TYPE_CHECKING, Sequence, Union

from eol_check._evaluation import EvaluationResult

if TYPE_CHECKING:
    from eol_check.checker import CheckReport


def render_json(report: Union["CheckReport", Sequence[EvaluationResult]], indent: int = 2) -> str:
    """
    Render results as a JSON array of result objects.

    Accepts a CheckReport or a plain sequence of results.
    """
    results = getattr(report, "results", report)
    return json.dumps([r.to_dict() for r in results], indent=indent)
