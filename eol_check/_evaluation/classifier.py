"""Turn a matched lifecycle record and the current time into a status and message."""

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from .models import AIModelCycle, EolValue, LifecycleCycle, Status

# Calendar months (not days) before EOL at which a release is reported as approaching EOL
APPROACHING_EOL_MONTHS = 6

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_ISO_MONTH = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True)
class Classification:
    """Status plus human-readable message for one matched record."""

    status: Status
    message: str


def parse_eol_date(value: str) -> Optional[date]:
    """
    Parse an EOL date string.

    Accepts ``YYYY-MM-DD`` (optionally followed by a time part) and
    ``YYYY-MM``, which is read as the first day of that month. Returns None
    for anything else.
    """
    match = _ISO_DATE.match(value)
    if match:
        year, month, day = (int(g) for g in match.groups())
    else:
        match = _ISO_MONTH.match(value)
        if not match:
            return None
        year, month, day = int(match.group(1)), int(match.group(2)), 1
    try:
        return date(year, month, day)
    except ValueError:
        return None


def eol_as_text(value: EolValue) -> Optional[str]:
    """Return the EOL date as text, or None for the boolean and empty forms."""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str) and value:
        return value
    return None


def months_until(eol: date, now: datetime) -> int:
    """
    Whole calendar months between ``now`` and ``eol``.

    Day-of-month is ignored: Dec 31 to Jan 1 counts as one month.
    """
    return (eol.year - now.year) * 12 + (eol.month - now.month)


def is_past(eol: date, now: datetime) -> bool:
    """True once ``now`` is after midnight UTC of the EOL day."""
    return _as_utc(now) > datetime(eol.year, eol.month, eol.day, tzinfo=timezone.utc)


def classify_cycle(cycle: LifecycleCycle, now: datetime) -> Classification:
    """Classify a general product cycle."""
    label = f"Version {cycle.cycle}"
    eol_text = eol_as_text(cycle.eol)

    if cycle.eol is True:
        return Classification(Status.ERR, f"{label} is EOL")

    if eol_text:
        eol_date = parse_eol_date(eol_text)
        if eol_date is None:
            return Classification(Status.WARN, f"{label} has an unrecognized EOL date ({eol_text})")
        if is_past(eol_date, now):
            return Classification(Status.ERR, f"{label} is EOL (ended {eol_text})")
        if months_until(eol_date, now) <= APPROACHING_EOL_MONTHS:
            return Classification(Status.WARN, f"{label} is approaching EOL (ends {eol_text})")
        return Classification(Status.OK, f"{label} is supported (ends {eol_text})")

    return Classification(Status.OK, f"{label} is supported (ends unknown)")


def classify_ai_cycle(cycle: AIModelCycle, now: datetime) -> Classification:
    """
    Classify an AI model cycle.

    Deprecation is checked first and short-circuits, so a deprecated model is
    a WARN even when its EOL is already set.
    """
    eol_text = eol_as_text(cycle.eol)

    if cycle.deprecated:
        message = "Model is deprecated"
        if cycle.replacement:
            message += f". Use {cycle.replacement} instead"
        if eol_text:
            message += f" (EOL {eol_text})"
        return Classification(Status.WARN, message)

    upgrade = f". Upgrade to {cycle.replacement}" if cycle.replacement else ""

    if cycle.eol is True:
        return Classification(Status.ERR, f"Model is EOL{upgrade}")

    if eol_text:
        eol_date = parse_eol_date(eol_text)
        if eol_date is None:
            return Classification(Status.WARN, f"Model has an unrecognized EOL date ({eol_text})")
        if is_past(eol_date, now):
            return Classification(Status.ERR, f"Model is EOL (ended {eol_text}){upgrade}")
        if months_until(eol_date, now) <= APPROACHING_EOL_MONTHS:
            return Classification(Status.WARN, f"Model is approaching EOL (ends {eol_text})")

    message = "Model is supported"
    if cycle.lts:
        message += " (LTS)"
    if eol_text:
        message += f" (ends {eol_text})"
    return Classification(Status.OK, message)


def _as_utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)
