"""Scan Dockerfiles for base image references."""

import re
from pathlib import Path
from typing import List, Optional, Set, Tuple, Union

from eol_check.logging_config import logger

from .models import Dependency, DependencyType

_FROM = re.compile(r"^FROM\s+(.*)$", re.IGNORECASE)
_STAGE_ALIAS = re.compile(r"\s+AS\s+(\S+)\s*$", re.IGNORECASE)


def parse_image_reference(reference: str) -> Tuple[str, str]:
    """
    Split ``registry/name:tag@digest`` into ``(name, tag)``.

    The digest is dropped and a missing tag becomes ``latest``. A colon in the
    registry host (``localhost:5000/app``) is not mistaken for a tag.
    """
    reference = reference.split("@", 1)[0]
    slash = reference.rfind("/")
    colon = reference.rfind(":")
    if colon > slash:
        return reference[:colon], reference[colon + 1 :] or "latest"
    return reference, "latest"


def _parse_from(line: str, stages: Set[str]) -> Optional[Tuple[str, str]]:
    match = _FROM.match(line.strip())
    if not match:
        return None
    rest = match.group(1).strip()

    alias = _STAGE_ALIAS.search(rest)
    if alias:
        stages.add(alias.group(1).lower())
        rest = rest[: alias.start()]

    tokens = [t for t in rest.split() if not t.startswith("--")]
    if not tokens:
        return None
    image = tokens[0]
    if image.lower() == "scratch" or image.lower() in stages:
        return None
    return parse_image_reference(image)


def _dockerfiles(directory: Path) -> List[Path]:
    candidates = [directory / "Dockerfile"]
    candidates.extend(sorted(directory.glob("Dockerfile.*")))
    candidates.extend(sorted(directory.glob("*.Dockerfile")))
    return [p for p in candidates if p.is_file()]


def scan_dockerfiles(directory: Union[str, Path]) -> List[Dependency]:
    """
    Extract base images from ``FROM`` instructions.

    Handles ``--platform=...`` flags and ``AS <stage>`` aliases; later
    ``FROM <stage>`` lines and ``scratch`` are not images and are skipped.
    """
    directory = Path(directory)
    dependencies: List[Dependency] = []

    for path in _dockerfiles(directory):
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            logger.warning(f"Failed to parse {path.name}: {e}")
            continue

        stages: Set[str] = set()
        for line in lines:
            parsed = _parse_from(line, stages)
            if parsed:
                name, tag = parsed
                dependencies.append(Dependency(name=name, version=tag, type=DependencyType.DOCKER, file=path.name))

    return dependencies
