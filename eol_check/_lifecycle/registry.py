"""Source registry for managing lifecycle source plugins."""

from typing import Any, Dict, List, Optional, Tuple

import requests

from eol_check.exceptions import ProductNotFoundError
from eol_check.logging_config import logger

from .protocol import LifecycleSource


class SourceRegistry:
    """
    Registry for managing and querying lifecycle source plugins.

    The registry keeps a list of sources and asks the applicable ones for a
    product in priority order; the first non-empty answer wins.

    Example:
        registry = SourceRegistry()
        registry.register(StaticAIModelSource())
        registry.register(EndOfLifeSource())

        records = registry.fetch_records("nodejs", session)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._sources: List[LifecycleSource] = []

    def register(self, source: LifecycleSource) -> None:
        """
        Register a lifecycle source.

        Args:
            source: LifecycleSource implementation to register
        """
        self._sources.append(source)
        logger.debug(f"Registered lifecycle source: {source.name} (priority={source.priority})")

    def get_sources_for(self, product: str) -> List[LifecycleSource]:
        """
        Get all applicable sources for a product, sorted by priority.

        Args:
            product: Product key

        Returns:
            Sources that support the product, highest priority first
        """
        applicable = [s for s in self._sources if s.supports(product)]
        return sorted(applicable, key=lambda s: s.priority)

    def fetch_records(self, product: str, session: requests.Session) -> Tuple[Any, ...]:
        """
        Fetch lifecycle records using the priority chain of sources.

        Args:
            product: Product key
            session: requests.Session with configured headers

        Returns:
            Tuple of records from the first source that had any

        Raises:
            ProductNotFoundError: If no source knows the product
            APIError: If the only answering sources failed in transport
        """
        sources = self.get_sources_for(product)
        if not sources:
            raise ProductNotFoundError(product, source="any registered lifecycle source")

        last_error: Optional[Exception] = None
        for source in sources:
            try:
                records = source.fetch(product, session)
            except ProductNotFoundError as e:
                logger.debug(f"{source.name} does not know {product}")
                last_error = e
                continue
            except Exception as e:
                logger.warning(f"Error fetching from {source.name} for {product}: {e}")
                last_error = e
                continue

            if records:
                logger.debug(f"Fetched {len(records)} lifecycle records from {source.name} for {product}")
                return tuple(records)

        if last_error is not None:
            raise last_error
        raise ProductNotFoundError(product, source=", ".join(s.name for s in sources))

    def list_sources(self) -> List[Dict[str, Any]]:
        """
        List all registered sources with their priorities.

        Returns:
            List of dicts with 'name' and 'priority' keys
        """
        return [{"name": s.name, "priority": s.priority} for s in sorted(self._sources, key=lambda s: s.priority)]

    def clear(self) -> None:
        """Remove all registered sources."""
        self._sources.clear()
