"""eol-check package for end-of-life checks of runtimes, dependencies and AI models."""

from ._evaluation import (
    AIModelCycle,
    Category,
    EvaluationResult,
    LifecycleCycle,
    Status,
    evaluate_ai_model,
    evaluate_version,
)


def _get_version() -> str:
    """Get package version, falling back to pyproject.toml for source checkouts."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("eol-check")
    except PackageNotFoundError:
        pass

    from pathlib import Path

    import tomllib

    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            pyproject_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return "unknown"
    return pyproject_data.get("project", {}).get("version", "unknown")


__version__ = _get_version()

__all__ = [
    "__version__",
    "AIModelCycle",
    "Category",
    "EvaluationResult",
    "LifecycleCycle",
    "Status",
    "evaluate_ai_model",
    "evaluate_version",
]
