"""Derive candidate match keys from a raw version string."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NormalizedVersion:
    """A version string reduced to the prefixes used for cycle matching."""

    version: str
    major: str
    major_minor: Optional[str]

    @property
    def has_dot(self) -> bool:
        return "." in self.version


def normalize_version(raw: str) -> NormalizedVersion:
    """
    Trim surrounding whitespace, strip one leading ``v`` and derive the major
    and major.minor prefixes.

    Strings that are not numeric are not rejected; they simply go through
    matching literally.

    Examples:
        "v18.16.0" -> version="18.16.0", major="18", major_minor="18.16"
        "22.04"    -> version="22.04",   major="22", major_minor="22.04"
        "18"       -> version="18",      major="18", major_minor=None
    """
    version = (raw or "").strip()
    if version.startswith("v"):
        version = version[1:]

    parts = version.split(".")
    major_minor = f"{parts[0]}.{parts[1]}" if len(parts) >= 2 else None
    return NormalizedVersion(version=version, major=parts[0], major_minor=major_minor)
