"""Data models for project scanners."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from packageurl import PackageURL


class DependencyType(Enum):
    """Ecosystem a dependency was found in."""

    NPM = "npm"
    COMPOSER = "composer"
    PYTHON = "python"
    GO = "go"
    RUBY = "ruby"
    DOCKER = "docker"
    INFRASTRUCTURE = "infrastructure"


# DependencyType -> purl type
_PURL_TYPES = {
    DependencyType.NPM: "npm",
    DependencyType.COMPOSER: "composer",
    DependencyType.PYTHON: "pypi",
    DependencyType.GO: "golang",
    DependencyType.RUBY: "gem",
    DependencyType.DOCKER: "docker",
    DependencyType.INFRASTRUCTURE: "generic",
}


@dataclass(frozen=True)
class Dependency:
    """A component version declared in a project file."""

    name: str
    version: str
    type: DependencyType
    file: str

    @property
    def purl(self) -> Optional[str]:
        """
        Package URL for this dependency, or None if it cannot be expressed.

        Scoped npm names, composer vendors, Go module paths and image
        registries become the purl namespace.
        """
        namespace = None
        name = self.name
        if "/" in name:
            namespace, name = name.rsplit("/", 1)
        if not name:
            return None
        version = self.version if self.version and self.version != "latest" else None
        try:
            return PackageURL(type=_PURL_TYPES[self.type], namespace=namespace, name=name, version=version).to_string()
        except ValueError:
            return None


@dataclass(frozen=True)
class AISDKDetection:
    """An AI provider SDK declared as a project dependency."""

    sdk: str
    provider: str
    version: str
    file: str


@dataclass(frozen=True)
class DetectedAIModel:
    """A model identifier found in project sources or configuration."""

    provider: str
    model: str
    version: str
    source: str


@dataclass(frozen=True)
class EnvironmentInfo:
    """Runtime, OS and service versions detected on the host."""

    python_version: Optional[str] = None
    node_version: Optional[str] = None
    os_name: Optional[str] = None
    services: tuple = ()


@dataclass(frozen=True)
class ServiceVersion:
    """A locally installed service and the product slug it maps to."""

    name: str
    version: str
    product: str
