"""Project configuration for eol-check.

Settings are read from the first of these that exists in the working
directory:

1. ``.eolrc.json``
2. the ``"eol-check"`` key of ``package.json``
3. the ``[tool.eol-check]`` table of ``pyproject.toml``

Keys may be camelCase (``failOnEol``) or snake_case (``fail_on_eol``).
Command line flags and GitHub Action inputs are applied on top by the CLI.
"""

import json
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import tomllib

from .exceptions import ConfigurationError
from .logging_config import logger

RC_FILENAME = ".eolrc.json"


@dataclass
class EolCheckConfig:
    """Effective settings for a check run."""

    fail_on_eol: bool = True
    fail_on_warning: bool = False
    scan_ai: bool = False
    scan_docker: bool = False
    scan_infra: bool = False
    verbose: bool = False
    excludes: List[str] = field(default_factory=list)
    refresh_cache: bool = False

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If a setting has the wrong type
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "excludes":
                if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
                    raise ConfigurationError("excludes must be a list of glob patterns")
            elif not isinstance(value, bool):
                raise ConfigurationError(f"{_camel(f.name)} must be true or false, got {value!r}")

    def merged(self, **overrides: Any) -> "EolCheckConfig":
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


_FIELD_NAMES = {f.name for f in fields(EolCheckConfig)}


def _snake(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).replace("-", "_").lower()


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def evaluate_boolean(value: Optional[str]) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate (environment variable or action input)

    Returns:
        Boolean result; None and unrecognized values are False
    """
    if value is None:
        return False
    return value.strip().lower() in ["true", "yes", "yeah", "1", "on"]


def config_from_mapping(data: Mapping[str, Any], source: str = "configuration") -> EolCheckConfig:
    """
    Build a validated config from a raw settings mapping.

    Unknown keys are ignored with a warning.

    Raises:
        ConfigurationError: If a known key has the wrong type
    """
    values: Dict[str, Any] = {}
    for key, value in data.items():
        name = _snake(str(key))
        if name not in _FIELD_NAMES:
            logger.warning(f"Ignoring unknown key '{key}' in {source}")
            continue
        values[name] = value

    config = EolCheckConfig(**values)
    try:
        config.validate()
    except ConfigurationError as e:
        raise ConfigurationError(f"Invalid {source}: {e}") from e
    return config


def _read_rc(path: Path) -> Optional[Dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to parse {RC_FILENAME}: {e}")
        return None
    if not isinstance(data, dict):
        logger.warning(f"Failed to parse {RC_FILENAME}: expected a JSON object")
        return None
    return data


def _read_package_json(path: Path) -> Optional[Dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            pkg = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug(f"Ignoring unreadable package.json: {e}")
        return None
    section = pkg.get("eol-check") if isinstance(pkg, dict) else None
    return section if isinstance(section, dict) else None


def _read_pyproject(path: Path) -> Optional[Dict[str, Any]]:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug(f"Ignoring unreadable pyproject.toml: {e}")
        return None
    section = data.get("tool", {}).get("eol-check")
    return section if isinstance(section, dict) else None


def load_config(cwd: Union[str, Path, None] = None) -> EolCheckConfig:
    """
    Load project configuration from ``cwd`` (default: current directory).

    A malformed ``.eolrc.json`` is reported and the defaults are used; it
    does not fall through to package.json.

    Raises:
        ConfigurationError: If a config file has a setting of the wrong type
    """
    directory = Path(cwd) if cwd is not None else Path.cwd()

    rc_path = directory / RC_FILENAME
    if rc_path.exists():
        data = _read_rc(rc_path)
        if data is None:
            return EolCheckConfig()
        logger.debug(f"Loaded configuration from {rc_path}")
        return config_from_mapping(data, RC_FILENAME)

    pkg_path = directory / "package.json"
    if pkg_path.exists():
        data = _read_package_json(pkg_path)
        if data is not None:
            logger.debug(f"Loaded configuration from {pkg_path}")
            return config_from_mapping(data, "package.json eol-check")

    pyproject_path = directory / "pyproject.toml"
    if pyproject_path.exists():
        data = _read_pyproject(pyproject_path)
        if data is not None:
            logger.debug(f"Loaded configuration from {pyproject_path}")
            return config_from_mapping(data, "pyproject.toml [tool.eol-check]")

    return EolCheckConfig()
