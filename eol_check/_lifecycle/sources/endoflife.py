"""endoflife.date data source for product release cycles."""

import json
from typing import List, Optional

import requests

from eol_check._evaluation import LifecycleCycle
from eol_check.exceptions import APIError, ProductNotFoundError
from eol_check.http_client import DEFAULT_TIMEOUT
from eol_check.logging_config import logger

ENDOFLIFE_API_BASE = "https://endoflife.date/api"


class EndOfLifeSource:
    """
    Data source for the public endoflife.date API.

    Returns the product's cycles in the order the API lists them
    (newest first), which the matcher relies on.

    Priority: 50 (remote API)
    Supports: plain product slugs, not "<provider>/<model>" AI keys
    """

    def __init__(self, base_url: str = ENDOFLIFE_API_BASE, timeout: int = DEFAULT_TIMEOUT):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "endoflife.date"

    @property
    def priority(self) -> int:
        return 50

    def supports(self, product: str) -> bool:
        return bool(product) and "/" not in product

    def fetch(self, product: str, session: requests.Session) -> Optional[List[LifecycleCycle]]:
        """
        Fetch all release cycles for a product.

        Raises:
            ProductNotFoundError: On HTTP 404
            APIError: On any other HTTP, transport or decoding failure
        """
        url = f"{self._base_url}/{product}.json"
        logger.debug(f"Fetching lifecycle data for {product}: {url}")

        try:
            response = session.get(url, timeout=self._timeout)
        except requests.exceptions.Timeout:
            raise APIError(f"Timeout fetching lifecycle data for {product} from {self.name}")
        except requests.exceptions.RequestException as e:
            raise APIError(f"Error fetching lifecycle data for {product} from {self.name}: {e}")

        if response.status_code == 404:
            raise ProductNotFoundError(product, source=self.name)
        if not response.ok:
            raise APIError(f"Failed to fetch EOL data for {product}: HTTP {response.status_code}")

        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise APIError(f"Invalid JSON from {self.name} for {product}: {e}")

        if not isinstance(payload, list):
            raise APIError(f"Unexpected response shape from {self.name} for {product}")

        return [LifecycleCycle.from_dict(item) for item in payload if isinstance(item, dict)]
