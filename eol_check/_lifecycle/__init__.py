"""
Lifecycle data providers.

Product release cycles come from endoflife.date (with an on-disk cache);
AI model cycles come from curated tables that can be refreshed from provider
documentation pages. Both are served through caller-owned repositories
that publish immutable snapshots.
"""

from .ai_models import (
    DEFAULT_TABLES,
    MODEL_PATTERNS,
    PROVIDER_NAMES,
    PYTHON_SDK_TO_PROVIDER,
    SDK_TO_PROVIDER,
    get_ai_model_cycles,
    get_all_providers,
    get_provider_models,
)
from .cache import DiskCache, get_cache_dir
from .product_mapper import map_docker_image, map_os_name, map_package_to_product, map_runtime_family
from .protocol import LifecycleSource
from .registry import SourceRegistry
from .repository import AIModelRepository, LifecycleRepository, LifecycleSnapshot, RefreshSummary
from .sources import EndOfLifeSource, StaticAIModelSource

__all__ = [
    "AIModelRepository",
    "DEFAULT_TABLES",
    "DiskCache",
    "EndOfLifeSource",
    "LifecycleRepository",
    "LifecycleSnapshot",
    "LifecycleSource",
    "MODEL_PATTERNS",
    "PROVIDER_NAMES",
    "PYTHON_SDK_TO_PROVIDER",
    "RefreshSummary",
    "SDK_TO_PROVIDER",
    "SourceRegistry",
    "StaticAIModelSource",
    "get_ai_model_cycles",
    "get_all_providers",
    "get_cache_dir",
    "get_provider_models",
    "map_docker_image",
    "map_os_name",
    "map_package_to_product",
    "map_runtime_family",
]
