"""Select the lifecycle record that best matches a version.

Lifecycle providers are inconsistent about whether a product is tracked at
major, major.minor or build-tag granularity, so matching walks a fixed
fallback chain instead of parsing semantic versions. The first rule that
finds a record wins:

1. Exact: the identifier equals the full version.
2. Major.minor: the identifier equals ``major.minor`` ("4.2.0" -> "4.2").
3. Major: the identifier equals ``major`` ("18.14.0" -> "18").
4. Coarse input: for a major-only version, the identifier is ``major.0``
   or starts with ``major.`` ("4" -> "4.0" or "4.2").
5. Fine input: the version starts with ``identifier.`` or equals it
   ("4.0.1" -> "4").
"""

from typing import Optional, Sequence

from .models import AIModelCycle, LifecycleCycle
from .normalizer import NormalizedVersion

HINT_LIMIT = 5


def match_cycle(normalized: NormalizedVersion, cycles: Sequence[LifecycleCycle]) -> Optional[LifecycleCycle]:
    """Return the best matching cycle for a normalized version, or None."""
    version = normalized.version

    cycle = _find(cycles, lambda c: c.cycle == version)

    if cycle is None and normalized.major_minor is not None:
        cycle = _find(cycles, lambda c: c.cycle == normalized.major_minor)

    if cycle is None:
        cycle = _find(cycles, lambda c: c.cycle == normalized.major)

    if cycle is None and not normalized.has_dot:
        major = normalized.major
        cycle = _find(cycles, lambda c: c.cycle == f"{major}.0" or c.cycle.startswith(f"{major}."))

    if cycle is None:
        cycle = _find(cycles, lambda c: version.startswith(f"{c.cycle}.") or version == c.cycle)

    return cycle


def match_ai_cycle(version: str, cycles: Sequence[AIModelCycle]) -> Optional[AIModelCycle]:
    """
    Return the matching AI model cycle, or None.

    Tries an exact identifier, then the ``latest`` record for the literal
    version ``latest``, then the first identifier that prefixes the version
    (date-stamped identifiers such as ``20240620``).
    """
    cycle = _find(cycles, lambda c: c.cycle == version)

    if version == "latest":
        cycle = _find(cycles, lambda c: c.cycle == "latest")

    if cycle is None:
        cycle = _find(cycles, lambda c: version.startswith(c.cycle))

    return cycle


def available_versions_hint(cycles: Sequence) -> str:
    """Render up to the first five identifiers, with an ellipsis marker if more exist."""
    hint = ", ".join(c.cycle for c in cycles[:HINT_LIMIT])
    if len(cycles) > HINT_LIMIT:
        hint += ", ..."
    return hint


def _find(cycles, predicate):
    return next((c for c in cycles if predicate(c)), None)
