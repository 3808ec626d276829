"""LifecycleSource protocol for lifecycle data plugins."""

from typing import Optional, Protocol, Sequence

import requests


class LifecycleSource(Protocol):
    """
    Protocol defining the interface for lifecycle data source plugins.

    Each source returns the ordered lifecycle records for a product key.
    Sources have priorities - lower numbers are tried first.

    Example:
        class EndOfLifeSource:
            name = "endoflife.date"
            priority = 50

            def supports(self, product: str) -> bool:
                return "/" not in product

            def fetch(self, product: str, session: requests.Session) -> Optional[List[LifecycleCycle]]:
                # GET https://endoflife.date/api/<product>.json
                ...
    """

    @property
    def name(self) -> str:
        """
        Human-readable name of this source.

        Used for logging and error messages.
        Examples: "endoflife.date", "curated-ai-models"
        """
        ...

    @property
    def priority(self) -> int:
        """
        Priority of this source (lower = higher priority).

        Recommended priority ranges:
        - 1-20: Local curated tables (no network)
        - 21-80: Remote APIs
        - 81-100: Fallback sources
        """
        ...

    def supports(self, product: str) -> bool:
        """
        Check if this source can answer for the given product key.

        Args:
            product: Product slug ("nodejs") or AI model key ("openai/gpt-4")

        Returns:
            True if this source should be asked for the product
        """
        ...

    def fetch(self, product: str, session: requests.Session) -> Optional[Sequence]:
        """
        Fetch the lifecycle records for a product.

        Implementations should:
        1. Return records in the provider's own order
        2. Return None when they have nothing for the product
        3. Raise ProductNotFoundError when the provider says it does not exist
        4. Raise APIError for transport failures

        Args:
            product: Product key
            session: requests.Session with configured headers (User-Agent, etc.)

        Returns:
            Sequence of LifecycleCycle / AIModelCycle, or None
        """
        ...
