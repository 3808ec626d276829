"""Curated AI model tables exposed as a lifecycle source."""

from typing import Mapping, Optional, Tuple

import requests

from eol_check._evaluation import AIModelCycle

from ..ai_models import DEFAULT_TABLES, ModelTable, get_ai_model_cycles


class StaticAIModelSource:
    """
    Lifecycle source backed by in-process AI model tables.

    Product keys are ``"<provider>/<model>"``, e.g. ``"openai/gpt-4"``.

    Priority: 10 (local curated data, no network)
    """

    def __init__(self, tables: Optional[Mapping[str, ModelTable]] = None):
        self._tables = tables if tables is not None else DEFAULT_TABLES

    @property
    def name(self) -> str:
        return "curated-ai-models"

    @property
    def priority(self) -> int:
        return 10

    def supports(self, product: str) -> bool:
        provider, sep, model = product.partition("/")
        return bool(sep and model) and provider.lower() in self._tables

    def fetch(self, product: str, session: requests.Session) -> Optional[Tuple[AIModelCycle, ...]]:
        provider, _, model = product.partition("/")
        return get_ai_model_cycles(provider, model, self._tables)
