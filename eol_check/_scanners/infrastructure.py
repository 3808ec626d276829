"""Scan serverless, SAM/CloudFormation and Terraform files for AWS Lambda runtimes."""

import re
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple, Union

import yaml

from eol_check.logging_config import logger

from .models import Dependency, DependencyType

_TF_RUNTIME = re.compile(r"""^\s*runtime\s*=\s*["']([^"']+)["']""")


class _CloudFormationLoader(yaml.SafeLoader):
    """SafeLoader that accepts CloudFormation short-form tags (!Ref, !Sub, ...)."""


def _construct_tagged(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> Any:
    if isinstance(node, yaml.ScalarNode):
        return loader.construct_scalar(node)
    if isinstance(node, yaml.SequenceNode):
        return loader.construct_sequence(node)
    return loader.construct_mapping(node)


_CloudFormationLoader.add_multi_constructor("!", _construct_tagged)


def parse_aws_runtime(runtime: str) -> Optional[Tuple[str, str]]:
    """
    Split an AWS Lambda runtime identifier into ``(family, version)``.

    Examples:
        nodejs18.x    -> ("nodejs", "18")
        python3.9     -> ("python", "3.9")
        java8.al2     -> ("java", "8")
        dotnetcore3.1 -> ("dotnet", "3.1")
        ruby3.2       -> ("ruby", "3.2")
        go1.x         -> ("go", "1")

    Returns None for unknown families (``provided.al2`` and friends).
    """
    r = runtime.strip().lower()

    if r.startswith("nodejs"):
        return "nodejs", r[len("nodejs") :].replace(".x", "")
    if r.startswith("python"):
        return "python", r[len("python") :]
    if r.startswith("java"):
        return "java", r[len("java") :].split(".", 1)[0]
    if r.startswith("dotnet"):
        return "dotnet", r[len("dotnet") :].replace("core", "")
    if r.startswith("ruby"):
        return "ruby", r[len("ruby") :]
    if r.startswith("go"):
        return "go", "1"
    return None


def _runtime_dependency(runtime: Any, file: str) -> Optional[Dependency]:
    if not isinstance(runtime, str):
        return None
    parsed = parse_aws_runtime(runtime)
    if parsed is None or not parsed[1]:
        logger.debug(f"Skipping unrecognized runtime {runtime!r} in {file}")
        return None
    family, version = parsed
    return Dependency(name=family, version=version, type=DependencyType.INFRASTRUCTURE, file=file)


def _find_key(node: Any, key: str) -> Iterator[Any]:
    if isinstance(node, dict):
        for k, v in node.items():
            if k == key:
                yield v
            else:
                yield from _find_key(v, key)
    elif isinstance(node, list):
        for item in node:
            yield from _find_key(item, key)


def _load_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.load(f, Loader=_CloudFormationLoader)


def scan_serverless(directory: Path) -> List[Dependency]:
    """``provider.runtime`` and ``functions.<name>.runtime`` from serverless.yml."""
    dependencies = []
    for name in ("serverless.yml", "serverless.yaml"):
        path = directory / name
        if not path.exists():
            continue
        try:
            data = _load_yaml(path)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to parse {name}: {e}")
            continue
        if not isinstance(data, dict):
            continue

        runtimes = []
        provider = data.get("provider")
        if isinstance(provider, dict):
            runtimes.append(provider.get("runtime"))
        functions = data.get("functions")
        if isinstance(functions, dict):
            runtimes.extend(fn.get("runtime") for fn in functions.values() if isinstance(fn, dict))

        for runtime in runtimes:
            dep = _runtime_dependency(runtime, name)
            if dep:
                dependencies.append(dep)
    return dependencies


def scan_sam_templates(directory: Path) -> List[Dependency]:
    """Every ``Runtime`` property in template.yaml / template.yml."""
    dependencies = []
    for name in ("template.yaml", "template.yml"):
        path = directory / name
        if not path.exists():
            continue
        try:
            data = _load_yaml(path)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to parse {name}: {e}")
            continue

        for runtime in _find_key(data, "Runtime"):
            dep = _runtime_dependency(runtime, name)
            if dep:
                dependencies.append(dep)
    return dependencies


def scan_terraform(directory: Path) -> List[Dependency]:
    """``runtime = "..."`` attributes in top-level *.tf files."""
    dependencies = []
    for path in sorted(directory.glob("*.tf")):
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            logger.warning(f"Failed to parse {path.name}: {e}")
            continue
        for line in lines:
            match = _TF_RUNTIME.match(line)
            if match:
                dep = _runtime_dependency(match.group(1), path.name)
                if dep:
                    dependencies.append(dep)
    return dependencies


def scan_infrastructure(directory: Union[str, Path]) -> List[Dependency]:
    """Collect Lambda runtimes declared by infrastructure-as-code files."""
    directory = Path(directory)
    return scan_serverless(directory) + scan_sam_templates(directory) + scan_terraform(directory)
