"""Lifecycle data source implementations."""

from .ai_scraper import BedrockLifecycleScraper, GoogleDeprecationsScraper, parse_date, strip_html_tags
from .ai_static import StaticAIModelSource
from .endoflife import ENDOFLIFE_API_BASE, EndOfLifeSource

__all__ = [
    "BedrockLifecycleScraper",
    "ENDOFLIFE_API_BASE",
    "EndOfLifeSource",
    "GoogleDeprecationsScraper",
    "StaticAIModelSource",
    "parse_date",
    "strip_html_tags",
]
