"""Version-to-lifecycle evaluation engine.

Stateless and side-effect free: callers resolve which product or model to
look up and fetch its lifecycle records; this package only decides.

Example:
    from eol_check._evaluation import LifecycleCycle, evaluate_version

    cycles = [LifecycleCycle(cycle="18", eol="2025-04-30")]
    result = evaluate_version("Node.js", "v18.16.0", cycles)
"""

from .classifier import APPROACHING_EOL_MONTHS, months_until, parse_eol_date
from .evaluator import evaluate_ai_model, evaluate_version
from .matcher import available_versions_hint, match_ai_cycle, match_cycle
from .models import AIModelCycle, Category, EvaluationResult, LifecycleCycle, Status
from .normalizer import NormalizedVersion, normalize_version

__all__ = [
    "APPROACHING_EOL_MONTHS",
    "AIModelCycle",
    "Category",
    "EvaluationResult",
    "LifecycleCycle",
    "NormalizedVersion",
    "Status",
    "available_versions_hint",
    "evaluate_ai_model",
    "evaluate_version",
    "match_ai_cycle",
    "match_cycle",
    "months_until",
    "normalize_version",
    "parse_eol_date",
]
