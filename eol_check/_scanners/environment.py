"""Detect runtime, OS and service versions installed on the host.

Every probe is optional: a missing binary, a timeout or unexpected output
simply leaves that field unset.
"""

import platform
import re
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from eol_check.logging_config import logger

from .models import EnvironmentInfo, ServiceVersion

PROBE_TIMEOUT = 5  # seconds
OS_RELEASE_PATHS = (Path("/etc/os-release"), Path("/usr/lib/os-release"))

_VERSION = re.compile(r"(\d+\.\d+(?:\.\d+)?)")


@dataclass(frozen=True)
class ServiceProbe:
    """How to ask a locally installed service for its version."""

    name: str
    command: str
    args: Sequence[str]
    product: str


SERVICE_PROBES = (
    ServiceProbe("Docker", "docker", ("--version",), "docker-engine"),
    ServiceProbe("PostgreSQL", "postgres", ("--version",), "postgresql"),
    ServiceProbe("PostgreSQL", "psql", ("--version",), "postgresql"),
    ServiceProbe("Redis", "redis-server", ("--version",), "redis"),
    ServiceProbe("Nginx", "nginx", ("-v",), "nginx"),
    ServiceProbe("MySQL", "mysql", ("--version",), "mysql"),
    ServiceProbe("Git", "git", ("--version",), "git"),
)


def run_version_command(command: str, args: Sequence[str] = ("--version",)) -> Optional[str]:
    """
    Run ``command args`` and return its combined output, or None.

    The binary is resolved with shutil.which and executed without a shell.
    """
    executable = shutil.which(command)
    if executable is None:
        return None
    try:
        completed = subprocess.run(
            [executable, *args],
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Version probe failed for {command}: {e}")
        return None
    # nginx -v writes to stderr
    return (completed.stdout + completed.stderr).strip() or None


def extract_version(output: Optional[str]) -> Optional[str]:
    """First ``X.Y`` or ``X.Y.Z`` number in command output."""
    if not output:
        return None
    match = _VERSION.search(output)
    return match.group(1) if match else None


def detect_python_version() -> str:
    """Version of the interpreter running eol-check."""
    return platform.python_version()


def detect_node_version() -> Optional[str]:
    """Node.js version from ``node --version`` (``v20.11.0`` -> ``20.11.0``)."""
    output = run_version_command("node")
    if not output:
        return None
    return output.splitlines()[0].strip().lstrip("v") or None


def parse_os_release(content: str) -> Dict[str, str]:
    """Parse os-release ``KEY=value`` lines, unquoting values."""
    fields: Dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        fields[key.strip()] = value.strip().strip("\"'")
    return fields


def detect_os_name(paths: Sequence[Path] = OS_RELEASE_PATHS) -> Optional[str]:
    """
    OS pretty name such as ``"Ubuntu 22.04.5 LTS"``.

    Falls back to ``NAME VERSION_ID`` when PRETTY_NAME is absent. Returns
    None on hosts without os-release (macOS, Windows).
    """
    for path in paths:
        try:
            fields = parse_os_release(path.read_text(encoding="utf-8"))
        except OSError:
            continue
        if fields.get("PRETTY_NAME"):
            return fields["PRETTY_NAME"]
        if fields.get("NAME"):
            return " ".join(filter(None, [fields["NAME"], fields.get("VERSION_ID")]))
    return None


def detect_services(probes: Sequence[ServiceProbe] = SERVICE_PROBES) -> List[ServiceVersion]:
    """Run each probe; the first successful probe per service name wins."""
    services: List[ServiceVersion] = []
    found = set()
    for probe in probes:
        if probe.name in found:
            continue
        version = extract_version(run_version_command(probe.command, probe.args))
        if version:
            found.add(probe.name)
            services.append(ServiceVersion(name=probe.name, version=version, product=probe.product))
            logger.debug(f"Detected {probe.name} {version}")
    return services


def scan_environment() -> EnvironmentInfo:
    """Collect interpreter, Node.js, OS and service versions."""
    return EnvironmentInfo(
        python_version=detect_python_version(),
        node_version=detect_node_version(),
        os_name=detect_os_name(),
        services=tuple(detect_services()),
    )
