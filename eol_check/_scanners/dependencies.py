"""Scan project manifests for declared dependency versions."""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Union

import tomllib

from eol_check.logging_config import logger

from .models import Dependency, DependencyType

_VERSION_RUN = re.compile(r"(\d+(\.\d+)*)")
_REQUIREMENT = re.compile(r"^([A-Za-z0-9_.-]+)(?:\[[^\]]*\])?\s*[=<>!~]+\s*([0-9A-Za-z.*]+)")
_PEP508_NAME = re.compile(r"^([A-Za-z0-9_.-]+)(?:\[[^\]]*\])?\s*(.*)$")
_QUOTED = re.compile(r"'([^']+)'|\"([^\"]+)\"")
_GO_DIRECTIVES = ("module", "toolchain", "exclude", "retract", "replace")


def clean_version(version: str) -> str:
    """
    Extract the first dotted number run from a version specifier.

    ``"^1.2.3"`` -> ``"1.2.3"``, ``">=3.9"`` -> ``"3.9"``, ``"18-alpine"`` ->
    ``"18"``. Specifiers without digits (``"latest"``) are returned as-is.
    """
    match = _VERSION_RUN.search(version)
    return match.group(0) if match else version


def _read_json(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("top-level JSON value is not an object")
    return data


def _from_mapping(sections: List[Any], dep_type: DependencyType, file: str) -> List[Dependency]:
    merged: Dict[str, Any] = {}
    for section in sections:
        if isinstance(section, dict):
            merged.update(section)
    return [Dependency(name=name, version=str(version), type=dep_type, file=file) for name, version in merged.items()]


def scan_package_json(directory: Path) -> List[Dependency]:
    """npm dependencies and devDependencies."""
    path = directory / "package.json"
    if not path.exists():
        return []
    try:
        pkg = _read_json(path)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to parse package.json: {e}")
        return []
    return _from_mapping([pkg.get("dependencies"), pkg.get("devDependencies")], DependencyType.NPM, "package.json")


def scan_composer_json(directory: Path) -> List[Dependency]:
    """Composer require and require-dev."""
    path = directory / "composer.json"
    if not path.exists():
        return []
    try:
        pkg = _read_json(path)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to parse composer.json: {e}")
        return []
    return _from_mapping([pkg.get("require"), pkg.get("require-dev")], DependencyType.COMPOSER, "composer.json")


def scan_requirements_txt(directory: Path) -> List[Dependency]:
    """Pinned or constrained entries in requirements.txt; bare names are skipped."""
    path = directory / "requirements.txt"
    if not path.exists():
        return []
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.warning(f"Failed to parse requirements.txt: {e}")
        return []

    dependencies = []
    for line in lines:
        stripped = line.split("#", 1)[0].strip()
        if not stripped or stripped.startswith("-"):
            continue
        match = _REQUIREMENT.match(stripped)
        if match:
            dependencies.append(
                Dependency(name=match.group(1), version=match.group(2), type=DependencyType.PYTHON, file="requirements.txt")
            )
    return dependencies


def scan_pyproject_toml(directory: Path) -> List[Dependency]:
    """PEP 621 ``[project] dependencies`` plus ``requires-python`` reported as ``python``."""
    path = directory / "pyproject.toml"
    if not path.exists():
        return []
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Failed to parse pyproject.toml: {e}")
        return []

    project = data.get("project", {})
    if not isinstance(project, dict):
        return []

    dependencies = []
    requires_python = project.get("requires-python")
    if isinstance(requires_python, str) and requires_python.strip():
        dependencies.append(
            Dependency(name="python", version=requires_python.strip(), type=DependencyType.PYTHON, file="pyproject.toml")
        )

    for requirement in project.get("dependencies", []) or []:
        if not isinstance(requirement, str):
            continue
        # Drop environment markers
        spec = requirement.split(";", 1)[0].strip()
        match = _PEP508_NAME.match(spec)
        if not match or not match.group(2):
            continue
        dependencies.append(
            Dependency(name=match.group(1), version=match.group(2).strip(), type=DependencyType.PYTHON, file="pyproject.toml")
        )
    return dependencies


def scan_go_mod(directory: Path) -> List[Dependency]:
    """The ``go`` directive and ``module vX.Y.Z`` requirements from go.mod."""
    path = directory / "go.mod"
    if not path.exists():
        return []
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.warning(f"Failed to parse go.mod: {e}")
        return []

    dependencies = []
    for line in lines:
        stripped = line.split("//", 1)[0].strip()
        if stripped.startswith("require "):
            stripped = stripped[len("require ") :].strip()
        parts = stripped.split()
        if len(parts) >= 2 and parts[0] == "go":
            dependencies.append(Dependency(name="go", version=parts[1], type=DependencyType.GO, file="go.mod"))
        elif len(parts) >= 2 and parts[1].startswith("v") and parts[0] not in _GO_DIRECTIVES:
            dependencies.append(Dependency(name=parts[0], version=parts[1][1:], type=DependencyType.GO, file="go.mod"))
    return dependencies


def scan_gemfile(directory: Path) -> List[Dependency]:
    """``gem 'name', 'constraint'`` and ``ruby 'x.y'`` lines; gems without a constraint are ``latest``."""
    path = directory / "Gemfile"
    if not path.exists():
        return []
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.warning(f"Failed to parse Gemfile: {e}")
        return []

    dependencies = []
    for line in lines:
        stripped = line.strip()
        if stripped.startswith("gem "):
            parts = stripped.split(",")
            name_match = _QUOTED.search(parts[0])
            version_match = _QUOTED.search(parts[1]) if len(parts) > 1 else None
            if name_match:
                name = name_match.group(1) or name_match.group(2)
                version = (version_match.group(1) or version_match.group(2)) if version_match else "latest"
                dependencies.append(Dependency(name=name, version=version, type=DependencyType.RUBY, file="Gemfile"))
        elif stripped.startswith("ruby "):
            match = _QUOTED.search(stripped)
            if match:
                dependencies.append(
                    Dependency(name="ruby", version=match.group(1) or match.group(2), type=DependencyType.RUBY, file="Gemfile")
                )
    return dependencies


_MANIFEST_SCANNERS = (
    scan_package_json,
    scan_composer_json,
    scan_requirements_txt,
    scan_pyproject_toml,
    scan_go_mod,
    scan_gemfile,
)


def scan_dependencies(directory: Union[str, Path]) -> List[Dependency]:
    """
    Collect declared dependencies from every supported manifest in a directory.

    Only the top level of ``directory`` is inspected. Missing manifests are
    skipped silently; unreadable or malformed ones are logged and skipped.
    """
    directory = Path(directory)
    dependencies: List[Dependency] = []
    for scanner in _MANIFEST_SCANNERS:
        dependencies.extend(scanner(directory))
    logger.debug(f"Found {len(dependencies)} declared dependencies in {directory}")
    return dependencies
