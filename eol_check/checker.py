"""
Check orchestration: discover components, fetch lifecycle data, evaluate.

The checker turns scanner output into checks (label, product slug, version,
category), fetches each distinct product once on a thread pool, and runs the
evaluation engine over the results. A failed fetch only affects the checks
that needed that product.
"""

import fnmatch
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import requests

from ._evaluation import (
    AIModelCycle,
    Category,
    EvaluationResult,
    LifecycleCycle,
    Status,
    evaluate_ai_model,
    evaluate_version,
)
from ._lifecycle import (
    AIModelRepository,
    LifecycleRepository,
    SourceRegistry,
    StaticAIModelSource,
    map_docker_image,
    map_os_name,
    map_package_to_product,
    map_runtime_family,
)
from ._scanners import (
    EnvironmentInfo,
    clean_version,
    scan_ai_sdks,
    scan_dependencies,
    scan_dockerfiles,
    scan_environment,
    scan_for_model_usage,
    scan_infrastructure,
)
from .config import EolCheckConfig
from .http_client import create_session
from .logging_config import logger

MAX_FETCH_WORKERS = 8


@dataclass(frozen=True)
class Check:
    """One component version to evaluate against a product's lifecycle."""

    component: str
    product: str
    version: str
    category: Category
    source: Optional[str] = None


@dataclass(frozen=True)
class AIModelCheck:
    """One AI model reference to evaluate against the curated model tables."""

    provider: str
    model: str
    version: str
    source: Optional[str] = None

    @property
    def component(self) -> str:
        return f"{self.provider}/{self.model}"


@dataclass(frozen=True)
class CheckFailure:
    """A component that could not be evaluated because its data was unavailable."""

    component: str
    product: str
    error: str


@dataclass
class CheckReport:
    """Results of a check run."""

    results: List[EvaluationResult] = field(default_factory=list)
    failures: List[CheckFailure] = field(default_factory=list)

    @property
    def summary(self) -> Dict[str, int]:
        counts = {status: 0 for status in Status}
        for result in self.results:
            counts[result.status] += 1
        return {
            "total": len(self.results),
            "ok": counts[Status.OK],
            "warn": counts[Status.WARN],
            "err": counts[Status.ERR],
        }

    @property
    def has_eol(self) -> bool:
        return any(r.status is Status.ERR for r in self.results)

    @property
    def has_warnings(self) -> bool:
        return any(r.status is Status.WARN for r in self.results)

    def should_fail(self, fail_on_eol: bool = True, fail_on_warning: bool = False) -> bool:
        """Apply the failure policy: EOL fails when fail_on_eol, warnings when fail_on_warning."""
        return (fail_on_eol and self.has_eol) or (fail_on_warning and self.has_warnings)


def sort_by_severity(results: Sequence[EvaluationResult]) -> List[EvaluationResult]:
    """ERR first, then WARN, then OK; discovery order kept within a status."""
    return sorted(results, key=lambda r: -r.status.severity)


class EolChecker:
    """
    Discover components in a project and evaluate their lifecycle status.

    Example:
        checker = EolChecker(load_config("."))
        report = checker.run(".")
        if report.should_fail(config.fail_on_eol, config.fail_on_warning):
            ...
    """

    def __init__(
        self,
        config: Optional[EolCheckConfig] = None,
        repository: Optional[LifecycleRepository] = None,
        ai_repository: Optional[AIModelRepository] = None,
        environment_scanner: Callable[[], EnvironmentInfo] = scan_environment,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or EolCheckConfig()
        self._session = session or create_session()
        self._repository = repository or LifecycleRepository(session=self._session)
        self._ai_repository = ai_repository or AIModelRepository()
        self._environment_scanner = environment_scanner

    # Discovery

    def collect_checks(self, directory: Union[str, Path]) -> Tuple[List[Check], List[AIModelCheck]]:
        """Build the list of checks for a project directory, honoring excludes."""
        directory = Path(directory)
        checks: List[Check] = []
        checks.extend(self._environment_checks())
        checks.extend(self._dependency_checks(directory))
        if self.config.scan_docker:
            checks.extend(self._docker_checks(directory))
        if self.config.scan_infra:
            checks.extend(self._infrastructure_checks(directory))

        ai_checks: List[AIModelCheck] = []
        if self.config.scan_ai:
            ai_checks = self._ai_checks(directory)

        checks = [c for c in _unique(checks) if not self._is_excluded(c.component, c.product)]
        ai_checks = [c for c in ai_checks if not self._is_excluded(c.component, c.model)]
        return checks, ai_checks

    def _is_excluded(self, *names: str) -> bool:
        for pattern in self.config.excludes:
            if any(fnmatch.fnmatch(name, pattern) for name in names):
                logger.debug(f"Excluding {names[0]} (matches {pattern!r})")
                return True
        return False

    def _environment_checks(self) -> List[Check]:
        env = self._environment_scanner()
        checks = []
        if env.python_version:
            checks.append(Check("Python", "python", env.python_version, Category.RUNTIME, "environment"))
        if env.node_version:
            checks.append(Check("Node.js", "nodejs", env.node_version, Category.RUNTIME, "environment"))
        if env.os_name:
            mapped = map_os_name(env.os_name)
            if mapped:
                product, version = mapped
                checks.append(Check(env.os_name, product, version, Category.OS, "environment"))
            else:
                logger.debug(f"No lifecycle product for OS {env.os_name}")
        for service in env.services:
            checks.append(Check(service.name, service.product, service.version, Category.SERVICE, "environment"))
        return checks

    def _dependency_checks(self, directory: Path) -> List[Check]:
        checks = []
        for dep in scan_dependencies(directory):
            product = map_package_to_product(dep.name)
            if product is None:
                continue
            logger.debug(f"Checking dependency {dep.purl or dep.name} (mapped to {product})")
            checks.append(Check(dep.name, product, clean_version(dep.version), Category.DEPENDENCY, dep.file))
        return checks

    def _docker_checks(self, directory: Path) -> List[Check]:
        checks = []
        for dep in scan_dockerfiles(directory):
            product = map_docker_image(dep.name)
            version = clean_version(dep.version)
            if product is None:
                continue
            if not any(ch.isdigit() for ch in version):
                logger.debug(f"Skipping {dep.name}:{dep.version}, tag has no version number")
                continue
            checks.append(Check(f"{dep.name}:{dep.version}", product, version, Category.INFRASTRUCTURE, dep.file))
        return checks

    def _infrastructure_checks(self, directory: Path) -> List[Check]:
        checks = []
        for dep in scan_infrastructure(directory):
            product = map_runtime_family(dep.name)
            if product is None:
                continue
            checks.append(Check(f"AWS Lambda {dep.name}", product, dep.version, Category.INFRASTRUCTURE, dep.file))
        return checks

    def _ai_checks(self, directory: Path) -> List[AIModelCheck]:
        for sdk in scan_ai_sdks(directory):
            logger.info(f"Detected AI SDK {sdk.sdk} ({sdk.provider}) in {sdk.file}")
        return [
            AIModelCheck(m.provider, m.model, m.version, m.source) for m in scan_for_model_usage(directory)
        ]

    # Evaluation

    def fetch_all(self, products: Sequence[str]) -> Tuple[Dict[str, Tuple[LifecycleCycle, ...]], Dict[str, str]]:
        """
        Fetch lifecycle records for each distinct product concurrently.

        Returns:
            (records by product, error message by product)
        """
        records: Dict[str, Tuple[LifecycleCycle, ...]] = {}
        errors: Dict[str, str] = {}
        distinct = list(dict.fromkeys(products))
        if not distinct:
            return records, errors

        refresh = self.config.refresh_cache
        with ThreadPoolExecutor(max_workers=min(MAX_FETCH_WORKERS, len(distinct))) as executor:
            futures = {executor.submit(self._repository.get, product, refresh): product for product in distinct}
            for future in as_completed(futures):
                product = futures[future]
                try:
                    records[product] = future.result()
                except Exception as e:
                    logger.warning(f"Could not fetch EOL data for {product}: {e}")
                    errors[product] = str(e)
        return records, errors

    def evaluate(self, checks: Sequence[Check], ai_checks: Sequence[AIModelCheck] = ()) -> CheckReport:
        """Fetch data for and evaluate already collected checks."""
        records, errors = self.fetch_all([c.product for c in checks])
        report = CheckReport()

        results: List[EvaluationResult] = []
        for check in checks:
            if check.product in errors:
                report.failures.append(CheckFailure(check.component, check.product, errors[check.product]))
                continue
            results.append(
                evaluate_version(
                    check.component,
                    check.version,
                    records[check.product],
                    category=check.category,
                    source=check.source,
                )
            )

        for ai_check in ai_checks:
            cycles = self._ai_repository.get(ai_check.provider, ai_check.model)
            if cycles is None:
                logger.debug(f"No lifecycle data for AI model {ai_check.component}")
                continue
            results.append(evaluate_ai_model(ai_check.provider, ai_check.model, ai_check.version, cycles, ai_check.source))

        report.results = sort_by_severity(results)
        return report

    def run(self, directory: Union[str, Path] = ".") -> CheckReport:
        """Discover and evaluate every component in ``directory``."""
        checks, ai_checks = self.collect_checks(directory)
        logger.info(f"Checking {len(checks)} components and {len(ai_checks)} AI models")
        return self.evaluate(checks, ai_checks)

    # Ad-hoc queries

    def query(
        self, product: str, version: Optional[str] = None
    ) -> Union[EvaluationResult, Tuple[Union[LifecycleCycle, AIModelCycle], ...]]:
        """
        Look up a single product, or a ``provider/model`` AI model key.

        Returns the product's cycles when ``version`` is None, otherwise the
        evaluation of that version.

        Raises:
            ProductNotFoundError: If the product or model is unknown
            APIError: If fetching failed
        """
        if "/" in product:
            registry = SourceRegistry()
            registry.register(StaticAIModelSource(self._ai_repository.snapshot))
            cycles = registry.fetch_records(product, self._session)
            if version is None:
                return cycles
            provider, _, model = product.partition("/")
            return evaluate_ai_model(provider, model, version, cycles)

        records = self._repository.get(product, refresh=self.config.refresh_cache)
        if version is None:
            return records
        return evaluate_version(product, version, records)


def _unique(checks: Sequence[Check]) -> List[Check]:
    return list(dict.fromkeys(checks))
