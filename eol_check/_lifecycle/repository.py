"""
Caller-owned lifecycle data repositories.

Both repositories publish immutable snapshots: a reader grabs the current
snapshot once and keeps a consistent view even while another thread fetches
more products or a refresh completes. Writers build a new mapping and swap
the reference; the previous snapshot is never modified.
"""

import threading
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import requests

from eol_check._evaluation import AIModelCycle, LifecycleCycle
from eol_check.http_client import create_session
from eol_check.logging_config import logger

from .ai_models import DEFAULT_TABLES, ModelTable, get_ai_model_cycles
from .cache import DiskCache
from .registry import SourceRegistry
from .sources.ai_scraper import DEFAULT_SCRAPERS
from .sources.endoflife import EndOfLifeSource

LifecycleSnapshot = Mapping[str, Tuple[LifecycleCycle, ...]]


def _default_registry() -> SourceRegistry:
    registry = SourceRegistry()
    registry.register(EndOfLifeSource())
    return registry


class LifecycleRepository:
    """
    Product lifecycle records, fetched once per product and shared.

    Lookup order for ``get``: current snapshot, disk cache, then the source
    registry. Fetch errors propagate to the caller (ProductNotFoundError,
    APIError) and leave the snapshot untouched.

    Example:
        repo = LifecycleRepository()
        cycles = repo.get("nodejs")
        snapshot = repo.refresh()
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        registry: Optional[SourceRegistry] = None,
        disk_cache: Optional[DiskCache] = None,
        use_disk_cache: bool = True,
    ):
        self._session = session or create_session()
        self._registry = registry or _default_registry()
        self._disk_cache = disk_cache if disk_cache is not None else (DiskCache() if use_disk_cache else None)
        self._snapshot: LifecycleSnapshot = MappingProxyType({})
        self._write_lock = threading.Lock()

    @property
    def snapshot(self) -> LifecycleSnapshot:
        """The currently published, read-only snapshot."""
        return self._snapshot

    def get(self, product: str, refresh: bool = False) -> Tuple[LifecycleCycle, ...]:
        """
        Return the lifecycle records for a product.

        Args:
            product: endoflife.date product slug
            refresh: Skip the snapshot and disk cache and refetch

        Raises:
            ProductNotFoundError: If the product is unknown to every source
            APIError: If fetching failed
        """
        cached = None if refresh else self._snapshot.get(product)
        if cached is not None:
            return cached

        if self._disk_cache is not None and not refresh:
            from_disk = self._disk_cache.get(product)
            if from_disk:
                records = tuple(from_disk)
                self._publish({product: records})
                return records

        records = self._fetch(product)
        self._publish({product: records})
        return records

    def refresh(self, products: Optional[Iterable[str]] = None) -> LifecycleSnapshot:
        """
        Refetch products from the sources, bypassing the disk cache.

        Args:
            products: Products to refetch, defaults to every product in the
                current snapshot

        Returns:
            The newly published snapshot. Products that fail to refetch keep
            their previous records.
        """
        targets = list(products) if products is not None else list(self._snapshot)
        updates: Dict[str, Tuple[LifecycleCycle, ...]] = {}
        for product in targets:
            try:
                updates[product] = self._fetch(product)
            except Exception as e:
                logger.warning(f"Failed to refresh lifecycle data for {product}: {e}")
        return self._publish(updates)

    def _fetch(self, product: str) -> Tuple[LifecycleCycle, ...]:
        records = self._registry.fetch_records(product, self._session)
        if self._disk_cache is not None:
            self._disk_cache.set(product, list(records))
        return records

    def _publish(self, updates: Mapping[str, Tuple[LifecycleCycle, ...]]) -> LifecycleSnapshot:
        with self._write_lock:
            merged = dict(self._snapshot)
            merged.update(updates)
            self._snapshot = MappingProxyType(merged)
            return self._snapshot


@dataclass
class RefreshSummary:
    """Outcome of an AI model data refresh."""

    succeeded: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    updated: Dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)


def _with_latest_eol(cycles: Sequence[AIModelCycle], eol: str) -> Tuple[AIModelCycle, ...]:
    return tuple(replace(c, eol=eol) if c.cycle == "latest" else c for c in cycles)


class AIModelRepository:
    """
    AI model lifecycle tables with optional refresh from provider pages.

    Starts from the curated tables. ``refresh`` runs every scraper; failing
    scrapers are logged and skipped, and the scraped dates replace the EOL of
    each matching model's ``latest`` cycle in a new snapshot.
    """

    def __init__(self, tables: Optional[Mapping[str, ModelTable]] = None, scrapers: Optional[Sequence] = None):
        self._snapshot: Mapping[str, ModelTable] = tables if tables is not None else DEFAULT_TABLES
        self._scrapers = list(scrapers) if scrapers is not None else [cls() for cls in DEFAULT_SCRAPERS]
        self._write_lock = threading.Lock()

    @property
    def snapshot(self) -> Mapping[str, ModelTable]:
        return self._snapshot

    def get(self, provider: str, model: str) -> Optional[Tuple[AIModelCycle, ...]]:
        """Cycles for a provider/model pair from the current snapshot."""
        return get_ai_model_cycles(provider, model, self._snapshot)

    def refresh(self, session: Optional[requests.Session] = None) -> RefreshSummary:
        """
        Refresh model EOL dates from the provider pages.

        Returns:
            RefreshSummary listing which scrapers succeeded or failed and
            which "provider/model" keys received a new EOL date
        """
        session = session or create_session()
        summary = RefreshSummary()
        scraped: Dict[str, Dict[str, str]] = {}

        for scraper in self._scrapers:
            try:
                found = scraper.scrape(session)
            except Exception as e:
                logger.warning(f"Failed to fetch from {scraper.name}: {e}")
                summary.failed[scraper.name] = str(e)
                continue
            summary.succeeded.append(scraper.name)
            scraped.setdefault(scraper.provider, {}).update(found)

        with self._write_lock:
            tables: Dict[str, ModelTable] = dict(self._snapshot)
            for provider, dates in scraped.items():
                models = dict(tables.get(provider, {}))
                for model, eol in dates.items():
                    cycles = models.get(model)
                    if not cycles or not any(c.cycle == "latest" for c in cycles):
                        continue
                    models[model] = _with_latest_eol(cycles, eol)
                    summary.updated[f"{provider}/{model}"] = eol
                    logger.info(f"Updated {model}: EOL {eol}")
                tables[provider] = MappingProxyType(models)
            self._snapshot = MappingProxyType(tables)

        logger.info(f"AI model data refreshed from {len(summary.succeeded)}/{summary.total} sources")
        return summary
