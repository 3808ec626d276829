"""Public evaluation boundary: normalize, match, classify and assemble a result.

Both entry points are pure: they never raise, never perform I/O and never
mutate their inputs. The only implicit input is "now", which callers may pin
through the ``now`` keyword for reproducible results.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence

from .classifier import Classification, classify_ai_cycle, classify_cycle
from .matcher import available_versions_hint, match_ai_cycle, match_cycle
from .models import AIModelCycle, Category, EvaluationResult, LifecycleCycle, Status
from .normalizer import normalize_version


def evaluate_version(
    component: str,
    raw_version: str,
    cycles: Sequence[LifecycleCycle],
    *,
    category: Optional[Category] = None,
    source: Optional[str] = None,
    now: Optional[datetime] = None,
) -> EvaluationResult:
    """
    Evaluate a product version against its lifecycle records.

    Args:
        component: Display label for the component (e.g. "Node.js")
        raw_version: Version as found, e.g. "v18.16.0", "22.04", "18"
        cycles: Lifecycle records for the product, in provider order
        category: Optional category tag copied onto the result
        source: Optional provenance (e.g. the file the version came from)
        now: Reference time, defaults to the current UTC time

    Returns:
        EvaluationResult; an unmatched version is a WARN, never an exception
    """
    normalized = normalize_version(raw_version)
    cycle = match_cycle(normalized, cycles)

    if cycle is None:
        if cycles:
            message = (
                f"Version {normalized.version} not found. "
                f"Available versions include: {available_versions_hint(cycles)}"
            )
        else:
            message = f"Version {normalized.version} not found. No lifecycle data available"
        classification = Classification(Status.WARN, message)
    else:
        classification = classify_cycle(cycle, _now(now))

    return _assemble(component, normalized.version, classification, category, source)


def evaluate_ai_model(
    provider: str,
    model: str,
    version: str,
    cycles: Sequence[AIModelCycle],
    source: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> EvaluationResult:
    """
    Evaluate an AI model version against its curated lifecycle records.

    The result component is ``provider/model`` and the category is always
    AI_MODEL. On a match the result version is the matched cycle identifier.
    """
    component = f"{provider}/{model}"
    cycle = match_ai_cycle(version, cycles)

    if cycle is None:
        classification = Classification(
            Status.WARN,
            f"Model version {version} not found in EOL data. Known versions: {available_versions_hint(cycles)}",
        )
        return _assemble(component, version, classification, Category.AI_MODEL, source)

    return _assemble(component, cycle.cycle, classify_ai_cycle(cycle, _now(now)), Category.AI_MODEL, source)


def _assemble(
    component: str,
    version: str,
    classification: Classification,
    category: Optional[Category],
    source: Optional[str],
) -> EvaluationResult:
    return EvaluationResult(
        component=component,
        version=version,
        status=classification.status,
        message=classification.message,
        category=category,
        source=source,
    )


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)
