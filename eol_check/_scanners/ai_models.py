"""
Detect AI SDK dependencies and model identifiers used by a project.

SDKs come from package manifests; model identifiers come from string
literals, ``model=...`` style assignments and ``*MODEL=`` variables in
``.env`` files, within a bounded directory walk.
"""

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Set, Union

import tomllib

from eol_check._lifecycle.ai_models import MODEL_PATTERNS, PYTHON_SDK_TO_PROVIDER, SDK_TO_PROVIDER
from eol_check.logging_config import logger

from .models import AISDKDetection, DetectedAIModel

MAX_SCAN_DEPTH = 3
MAX_FILE_CHARS = 500_000
SKIP_DIRS = frozenset({"node_modules", ".git", "dist", "build", "__pycache__", ".next", "venv", ".venv"})
SCAN_EXTENSIONS = frozenset({".ts", ".tsx", ".js", ".jsx", ".py", ".env", ".yaml", ".yml", ".json"})

_REQUIREMENT = re.compile(r"^([A-Za-z0-9_.-]+)(?:\[[^\]]*\])?\s*([=<>!~]*)\s*(.*)$")
_ENV_MODEL = re.compile(r"^\s*(?:export\s+)?[A-Z0-9_]*MODEL\s*=\s*['\"]?([^'\"\n#]+)", re.MULTILINE)


@dataclass
class AIScanResult:
    """SDKs and models detected in a project."""

    sdks: List[AISDKDetection] = field(default_factory=list)
    models: List[DetectedAIModel] = field(default_factory=list)


def _normalize_pypi(name: str) -> str:
    return re.sub(r"[-_.]+", "-", name).lower()


def _scan_package_json(directory: Path) -> List[AISDKDetection]:
    path = directory / "package.json"
    if not path.exists():
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            pkg = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to parse package.json for AI SDKs: {e}")
        return []

    deps: Dict[str, object] = {}
    for section in ("dependencies", "devDependencies"):
        if isinstance(pkg.get(section), dict):
            deps.update(pkg[section])
    return [
        AISDKDetection(sdk=name, provider=SDK_TO_PROVIDER[name], version=str(version), file="package.json")
        for name, version in deps.items()
        if name in SDK_TO_PROVIDER
    ]


def _scan_requirements_txt(directory: Path) -> List[AISDKDetection]:
    path = directory / "requirements.txt"
    if not path.exists():
        return []
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.warning(f"Failed to parse requirements.txt for AI SDKs: {e}")
        return []

    sdks = []
    for line in lines:
        stripped = line.split("#", 1)[0].strip()
        if not stripped or stripped.startswith("-"):
            continue
        match = _REQUIREMENT.match(stripped)
        if not match:
            continue
        name = _normalize_pypi(match.group(1))
        provider = PYTHON_SDK_TO_PROVIDER.get(name)
        if provider:
            version = match.group(3).strip() or "unknown"
            sdks.append(AISDKDetection(sdk=name, provider=provider, version=version, file="requirements.txt"))
    return sdks


def _scan_pyproject_toml(directory: Path) -> List[AISDKDetection]:
    path = directory / "pyproject.toml"
    if not path.exists():
        return []
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Failed to parse pyproject.toml for AI SDKs: {e}")
        return []

    project = data.get("project", {})
    requirements = list(project.get("dependencies", []) or [])
    for extra in (project.get("optional-dependencies", {}) or {}).values():
        requirements.extend(extra or [])

    sdks = []
    seen: Set[str] = set()
    for requirement in requirements:
        if not isinstance(requirement, str):
            continue
        match = _REQUIREMENT.match(requirement.split(";", 1)[0].strip())
        if not match:
            continue
        name = _normalize_pypi(match.group(1))
        provider = PYTHON_SDK_TO_PROVIDER.get(name)
        if provider and name not in seen:
            seen.add(name)
            version = (match.group(2) + match.group(3)).strip() or "unknown"
            sdks.append(AISDKDetection(sdk=name, provider=provider, version=version, file="pyproject.toml"))
    return sdks


def scan_ai_sdks(directory: Union[str, Path]) -> List[AISDKDetection]:
    """AI provider SDKs declared in package.json, requirements.txt and pyproject.toml."""
    directory = Path(directory)
    return _scan_package_json(directory) + _scan_requirements_txt(directory) + _scan_pyproject_toml(directory)


def _iter_source_files(directory: Path) -> Iterator[Path]:
    root_depth = len(directory.parts)
    for current, dirnames, filenames in os.walk(directory, onerror=lambda e: logger.debug(f"Skipping {e.filename}: {e}")):
        depth = len(Path(current).parts) - root_depth
        if depth >= MAX_SCAN_DEPTH:
            dirnames[:] = []
        else:
            dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        for filename in sorted(filenames):
            path = Path(current) / filename
            if path.suffix.lower() in SCAN_EXTENSIONS or _is_env_file(filename):
                yield path


def _is_env_file(filename: str) -> bool:
    return filename == ".env" or filename.startswith(".env.")


def _usage_patterns(identifier: str) -> List[re.Pattern]:
    escaped = re.escape(identifier)
    suffix = r"(?:[-_]?(?P<version>\d{8}|latest|preview))?"
    return [
        re.compile(rf"['\"`]{escaped}{suffix}['\"`]", re.IGNORECASE),
        re.compile(rf"model['\":= \t]+['\"`]?{escaped}{suffix}(?![A-Za-z0-9._-])", re.IGNORECASE),
    ]


_COMPILED_PATTERNS = {identifier: _usage_patterns(identifier) for identifier in MODEL_PATTERNS}


def scan_for_model_usage(directory: Union[str, Path]) -> List[DetectedAIModel]:
    """
    Find model identifiers referenced by project files.

    Walks at most MAX_SCAN_DEPTH directory levels below ``directory``,
    skipping vendored and build directories and files larger than
    MAX_FILE_CHARS. Each provider/model pair is reported once, at the first
    file it was found in. The version is the ``YYYYMMDD`` snapshot, ``latest``
    or ``preview`` suffix next to the identifier, defaulting to ``latest``.
    """
    directory = Path(directory)
    models: List[DetectedAIModel] = []
    seen: Set[str] = set()

    for path in _iter_source_files(directory):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping unreadable file {path}: {e}")
            continue
        if len(content) > MAX_FILE_CHARS:
            logger.debug(f"Skipping large file {path}")
            continue

        relative = path.relative_to(directory).as_posix()

        for identifier, (provider, model) in MODEL_PATTERNS.items():
            key = f"{provider}:{model}"
            if key in seen:
                continue
            match = next((m for m in (p.search(content) for p in _COMPILED_PATTERNS[identifier]) if m), None)
            if match:
                seen.add(key)
                version = match.group("version") or "latest"
                models.append(DetectedAIModel(provider=provider, model=model, version=version, source=relative))

        if _is_env_file(path.name):
            for value in _ENV_MODEL.findall(content):
                value = value.strip().lower()
                for identifier, (provider, model) in MODEL_PATTERNS.items():
                    if identifier in value:
                        key = f"{provider}:{model}"
                        if key not in seen:
                            seen.add(key)
                            models.append(DetectedAIModel(provider=provider, model=model, version="latest", source=relative))
                        break

    return models


def scan_ai_models(directory: Union[str, Path]) -> AIScanResult:
    """Full AI scan: SDK dependencies plus model identifiers."""
    return AIScanResult(sdks=scan_ai_sdks(directory), models=scan_for_model_usage(directory))
