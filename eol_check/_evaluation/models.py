"""Value objects shared by the evaluation engine and its callers."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

EolValue = Union[str, bool, date]


class Status(Enum):
    """Evaluation outcome with a total severity order ERR > WARN > OK."""

    OK = "OK"
    WARN = "WARN"
    ERR = "ERR"

    @property
    def severity(self) -> int:
        """Numeric severity, higher is worse."""
        return _SEVERITY[self]


_SEVERITY = {Status.OK: 0, Status.WARN: 1, Status.ERR: 2}


class Category(Enum):
    """Caller-assigned classification of a checked component."""

    RUNTIME = "Runtime Environment"
    OS = "Operating System"
    SERVICE = "System Services"
    DEPENDENCY = "Project Dependencies"
    AI_MODEL = "AI/ML Models"
    INFRASTRUCTURE = "Infrastructure"


@dataclass(frozen=True)
class LifecycleCycle:
    """
    One release line of a product as published by a lifecycle provider.

    ``eol`` is either an ISO date string or ``date``, ``True`` (already EOL, no date known)
    or ``False`` (no known EOL).
    """

    cycle: str
    release_date: Optional[str] = None
    eol: EolValue = False
    lts: Union[bool, str] = False
    support: EolValue = False
    discontinued: Union[bool, str] = False
    latest: Optional[str] = None
    link: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LifecycleCycle":
        """Build a cycle from an endoflife.date API object."""
        latest = data.get("latest")
        return cls(
            cycle=str(data.get("cycle", "")),
            release_date=data.get("releaseDate"),
            eol=_coerce_flag(data.get("eol")),
            lts=_coerce_flag(data.get("lts")),
            support=_coerce_flag(data.get("support")),
            discontinued=_coerce_flag(data.get("discontinued")),
            latest=str(latest) if latest is not None else None,
            link=data.get("link"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the endoflife.date field names."""
        return {
            "cycle": self.cycle,
            "releaseDate": self.release_date,
            "eol": _serialize_flag(self.eol),
            "lts": self.lts,
            "support": _serialize_flag(self.support),
            "discontinued": self.discontinued,
            "latest": self.latest,
            "link": self.link,
        }


@dataclass(frozen=True)
class AIModelCycle:
    """
    One version/variant of a generative AI model.

    ``deprecated`` is independent of ``eol``: a model may be deprecated while
    its hard cutoff is still in the future (or unknown).
    """

    cycle: str
    release_date: Optional[str] = None
    eol: EolValue = False
    lts: bool = False
    deprecated: bool = False
    replacement: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "cycle": self.cycle,
            "releaseDate": self.release_date,
            "eol": _serialize_flag(self.eol),
            "lts": self.lts,
        }
        if self.deprecated:
            data["deprecated"] = True
        if self.replacement:
            data["replacement"] = self.replacement
        return data


@dataclass(frozen=True)
class EvaluationResult:
    """Classified outcome for one component instance."""

    component: str
    version: str
    status: Status
    message: str
    category: Optional[Category] = None
    source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON report shape, omitting unset optional fields."""
        data: Dict[str, Any] = {
            "component": self.component,
            "version": self.version,
            "status": self.status.value,
            "message": self.message,
        }
        if self.category is not None:
            data["category"] = self.category.value
        if self.source is not None:
            data["source"] = self.source
        return data


def _coerce_flag(value: Any) -> Union[str, bool]:
    # endoflife.date mixes booleans, dates and the occasional null
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value)


def _serialize_flag(value: EolValue) -> Union[str, bool]:
    if isinstance(value, date):
        return value.isoformat()
    return value
