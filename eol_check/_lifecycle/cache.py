"""On-disk cache of lifecycle payloads, one JSON file per product."""

import json
import os
import re
import time
from pathlib import Path
from typing import List, Optional

from eol_check._evaluation import LifecycleCycle
from eol_check.logging_config import logger

CACHE_TTL_SECONDS = 24 * 60 * 60


def get_cache_dir() -> Path:
    """
    Resolve the cache directory.

    EOL_CHECK_CACHE_DIR wins; otherwise $XDG_CACHE_HOME/eol-check
    (~/.cache/eol-check when XDG_CACHE_HOME is unset).
    """
    override = os.environ.get("EOL_CHECK_CACHE_DIR")
    if override:
        return Path(override)
    return Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache")) / "eol-check"


class DiskCache:
    """
    Time-limited JSON cache for endoflife.date responses.

    Entries older than the TTL, unreadable or malformed files are treated as
    misses. Write failures are logged and otherwise ignored.
    """

    def __init__(self, cache_dir: Optional[Path] = None, ttl: int = CACHE_TTL_SECONDS):
        self._cache_dir = cache_dir or get_cache_dir()
        self._ttl = ttl

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def _path_for(self, product: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9._-]", "_", product)
        return self._cache_dir / f"{safe}.json"

    def get(self, product: str) -> Optional[List[LifecycleCycle]]:
        """Return cached cycles for a product, or None on a miss."""
        path = self._path_for(product)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                entry = json.load(f)
            timestamp = float(entry["timestamp"])
            data = entry["data"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.debug(f"Ignoring unreadable cache entry {path}: {e}")
            return None

        if time.time() - timestamp > self._ttl:
            logger.debug(f"Cache entry expired for {product}")
            return None
        if not isinstance(data, list):
            return None

        logger.debug(f"Cache hit (disk): {product}")
        return [LifecycleCycle.from_dict(item) for item in data if isinstance(item, dict)]

    def set(self, product: str, cycles: List[LifecycleCycle]) -> None:
        """Store cycles for a product with the current timestamp."""
        path = self._path_for(product)
        entry = {"timestamp": time.time(), "data": [c.to_dict() for c in cycles]}
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(entry, f)
        except OSError as e:
            logger.warning(f"Failed to write lifecycle cache {path}: {e}")

    def clear(self) -> int:
        """Delete every cached entry. Returns the number of files removed."""
        if not self._cache_dir.exists():
            return 0
        removed = 0
        for path in self._cache_dir.glob("*.json"):
            path.unlink(missing_ok=True)
            removed += 1
        logger.debug(f"Cleared {removed} lifecycle cache entries from {self._cache_dir}")
        return removed
