"""
Curated lifecycle data for generative AI models.

AI providers do not publish machine-readable deprecation feeds, so these
tables are maintained by hand from each provider's deprecation pages:

- OpenAI: platform.openai.com/docs/deprecations
- Anthropic: docs.anthropic.com model deprecations
- Google: ai.google.dev/gemini-api/docs/deprecations
- Meta, Mistral, Cohere: release announcements

Tables are read-only. AIModelRepository layers scraped updates on top of
them without touching the module-level data.
"""

import re
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from eol_check._evaluation import AIModelCycle

ModelTable = Mapping[str, Tuple[AIModelCycle, ...]]


def _c(cycle: str, released: str, eol=False, lts: bool = False) -> AIModelCycle:
    return AIModelCycle(cycle=cycle, release_date=released, eol=eol, lts=lts)


OPENAI_MODELS: ModelTable = MappingProxyType(
    {
        # Frontier
        "gpt-5.1": (_c("latest", "2025-11-18", lts=True),),
        "gpt-5-mini": (_c("latest", "2025-11-18", lts=True),),
        "gpt-5-nano": (_c("latest", "2025-11-18", lts=True),),
        "gpt-5-pro": (_c("latest", "2025-11-18", lts=True),),
        "gpt-5": (_c("latest", "2025-08-07", lts=True),),
        "gpt-4.1": (_c("latest", "2025-04-14", lts=True),),
        # GPT-4
        "gpt-4": (
            _c("0314", "2023-03-14", "2026-03-26"),
            _c("0613", "2023-06-13", "2024-06-13"),
            _c("1106-preview", "2023-11-06", "2026-03-26"),
            _c("0125-preview", "2024-01-25", "2026-03-26"),
            _c("turbo-2024-04-09", "2024-04-09", "2025-11-14"),
            _c("turbo", "2024-04-09", lts=True),
        ),
        "gpt-4-32k": (
            _c("0314", "2023-03-14", "2025-06-06"),
            _c("0613", "2023-06-13", "2025-06-06"),
        ),
        "gpt-4o": (
            _c("2024-05-13", "2024-05-13", lts=True),
            _c("2024-08-06", "2024-08-06", lts=True),
            _c("latest", "2024-11-20", lts=True),
        ),
        "chatgpt-4o-latest": (_c("latest", "2024-08-06", "2026-02-17"),),
        "gpt-4o-mini": (
            _c("2024-07-18", "2024-07-18", lts=True),
            _c("latest", "2024-07-18", lts=True),
        ),
        "gpt-4.5-preview": (_c("preview", "2025-02-27", "2025-07-14"),),
        # o-series
        "o1": (
            _c("preview", "2024-09-12", "2025-07-28"),
            _c("2024-12-17", "2024-12-17", lts=True),
            _c("latest", "2024-12-17", lts=True),
        ),
        "o1-mini": (
            _c("2024-09-12", "2024-09-12", "2025-10-27"),
            _c("latest", "2024-09-12", lts=True),
        ),
        "o3-mini": (
            _c("2025-01-31", "2025-01-31", lts=True),
            _c("latest", "2025-01-31", lts=True),
        ),
        # Realtime and audio
        "gpt-4o-realtime-preview": (
            _c("2024-10-01", "2024-10-01", "2025-10-10"),
            _c("2024-12-17", "2024-12-17", "2026-02-27"),
            _c("2025-06-03", "2025-06-03", "2026-02-27"),
            _c("latest", "2024-10-01", "2026-02-27"),
        ),
        "gpt-4o-audio-preview": (_c("2024-10-01", "2024-10-01", "2025-10-10"),),
        # GPT-3.5
        "gpt-3.5-turbo": (
            _c("0301", "2023-03-01", "2024-09-13"),
            _c("0613", "2023-06-13", "2024-09-13"),
            _c("16k-0613", "2023-06-13", "2024-09-13"),
            _c("1106", "2023-11-06", "2026-09-28"),
            _c("0125", "2024-01-25", "2025-11-14"),
            _c("latest", "2024-01-25", lts=True),
        ),
        "gpt-3.5-turbo-instruct": (_c("latest", "2023-09-14", "2026-09-28"),),
        # Images
        "dall-e-2": (_c("latest", "2022-04-06", "2026-05-12"),),
        "dall-e-3": (_c("latest", "2023-11-06", "2026-05-12"),),
        # Legacy
        "codex-mini-latest": (_c("latest", "2023-03-20", "2026-01-16"),),
        "babbage-002": (_c("latest", "2023-08-22", "2026-09-28"),),
        "davinci-002": (_c("latest", "2023-08-22", "2026-09-28"),),
        "text-moderation": (
            _c("007", "2023-09-26", "2025-10-27"),
            _c("stable", "2023-09-26", "2025-10-27"),
            _c("latest", "2023-09-26", "2025-10-27"),
        ),
    }
)

ANTHROPIC_MODELS: ModelTable = MappingProxyType(
    {
        "claude-1": (
            _c("1.0", "2023-03-14", "2024-03-01"),
            _c("1.3", "2023-05-01", "2024-03-01"),
            _c("instant-1.2", "2023-05-01", "2024-03-01"),
        ),
        "claude-2": (
            _c("2.0", "2023-07-11", "2025-07-21"),
            _c("2.1", "2023-11-21", "2025-07-21"),
        ),
        "claude-3-opus": (
            _c("20240229", "2024-02-29", "2026-01-01", lts=True),
            _c("latest", "2024-02-29", lts=True),
        ),
        "claude-3-sonnet": (_c("20240229", "2024-02-29", "2025-07-21"),),
        "claude-3-haiku": (
            _c("20240307", "2024-03-07", lts=True),
            _c("latest", "2024-03-07", lts=True),
        ),
        "claude-3.5-sonnet": (
            _c("20240620", "2024-06-20", "2025-10-22"),
            _c("20241022", "2024-10-22", "2025-10-22"),
        ),
        "claude-3.5-haiku": (
            _c("20241022", "2024-10-22", lts=True),
            _c("latest", "2024-10-22", lts=True),
        ),
        "claude-sonnet-4": (
            _c("20250514", "2025-05-14", lts=True),
            _c("latest", "2025-05-14", lts=True),
        ),
        "claude-opus-4": (
            _c("20250514", "2025-05-14", lts=True),
            _c("latest", "2025-05-14", lts=True),
        ),
        # Bedrock ids: claude-sonnet-4-5, claude-opus-4-1
        "claude-sonnet-4.5": (
            _c("20250929", "2025-09-29", lts=True),
            _c("latest", "2025-09-29", lts=True),
        ),
        "claude-opus-4.1": (
            _c("20250805", "2025-08-05", lts=True),
            _c("latest", "2025-08-05", lts=True),
        ),
    }
)

GOOGLE_MODELS: ModelTable = MappingProxyType(
    {
        "palm-2": (
            _c("text-bison-001", "2023-05-10", "2024-10-01"),
            _c("text-bison-002", "2023-08-01", "2024-10-01"),
            _c("chat-bison-001", "2023-05-10", "2024-10-01"),
        ),
        "gemini-pro": (_c("1.0", "2023-12-06", "2025-02-15"),),
        "gemini-1.0-pro": (
            _c("001", "2024-02-15", "2025-02-15"),
            _c("002", "2024-04-01", "2025-02-15"),
        ),
        "gemini-1.5-pro": (
            _c("preview-0514", "2024-05-14", "2025-05-24"),
            _c("001", "2024-05-24", lts=True),
            _c("002", "2024-09-24", lts=True),
            _c("latest", "2024-09-24", lts=True),
        ),
        "gemini-1.5-flash": (
            _c("preview-0514", "2024-05-14", "2025-05-24"),
            _c("001", "2024-05-24", lts=True),
            _c("002", "2024-09-24", lts=True),
            _c("8b", "2024-10-03", lts=True),
            _c("latest", "2024-09-24", lts=True),
        ),
        "gemini-2.0-flash": (
            _c("exp", "2024-12-11", "2025-09-01"),
            _c("thinking-exp", "2025-01-21", "2025-10-01"),
            _c("001", "2025-02-05", lts=True),
        ),
        "gemini-2.5-pro": (
            _c("preview-0325", "2025-03-25", "2025-10-01"),
            _c("latest", "2025-03-25", lts=True),
        ),
        "gemini-2.5-flash": (
            _c("preview-0520", "2025-05-20", "2025-12-01"),
            _c("latest", "2025-05-20", lts=True),
        ),
        "gemini-3-pro": (
            _c("preview", "2025-11-18"),
            _c("latest", "2025-11-18", lts=True),
        ),
    }
)

# Open-weight models have no provider EOL; lts marks the recommended variants
META_MODELS: ModelTable = MappingProxyType(
    {
        "llama-2": (
            _c("7b", "2023-07-18"),
            _c("13b", "2023-07-18"),
            _c("70b", "2023-07-18", lts=True),
        ),
        "llama-3": (
            _c("8b", "2024-04-18", lts=True),
            _c("70b", "2024-04-18", lts=True),
        ),
        "llama-3.1": (
            _c("8b", "2024-07-23", lts=True),
            _c("70b", "2024-07-23", lts=True),
            _c("405b", "2024-07-23", lts=True),
        ),
        "llama-3.2": (
            _c("1b", "2024-09-25", lts=True),
            _c("3b", "2024-09-25", lts=True),
            _c("11b", "2024-09-25", lts=True),
            _c("90b", "2024-09-25", lts=True),
        ),
        "llama-3.3": (_c("70b", "2024-12-06", lts=True),),
        "llama-4": (
            _c("scout", "2025-04-05", lts=True),
            _c("maverick", "2025-04-05", lts=True),
        ),
    }
)

MISTRAL_MODELS: ModelTable = MappingProxyType(
    {
        "mistral-7b": (
            _c("v0.1", "2023-09-27"),
            _c("v0.2", "2024-01-01", lts=True),
            _c("v0.3", "2024-05-22", lts=True),
        ),
        "mixtral-8x7b": (_c("v0.1", "2023-12-11", lts=True),),
        "mixtral-8x22b": (_c("v0.1", "2024-04-17", lts=True),),
        "mistral-large": (
            _c("2402", "2024-02-26"),
            _c("2407", "2024-07-24", lts=True),
            _c("2411", "2024-11-18", lts=True),
        ),
        "mistral-small": (
            _c("2402", "2024-02-26"),
            _c("2409", "2024-09-18", lts=True),
        ),
        "codestral": (_c("2405", "2024-05-29", lts=True),),
        "pixtral": (
            _c("12b-2409", "2024-09-17", lts=True),
            _c("large-2411", "2024-11-18", lts=True),
        ),
    }
)

COHERE_MODELS: ModelTable = MappingProxyType(
    {
        "command": (
            _c("command", "2023-03-01"),
            _c("command-light", "2023-03-01"),
            _c("command-nightly", "2023-03-01"),
        ),
        "command-r": (
            _c("command-r", "2024-03-11", lts=True),
            _c("command-r-plus", "2024-04-04", lts=True),
            _c("command-r-08-2024", "2024-08-01", lts=True),
            _c("command-r-plus-08-2024", "2024-08-01", lts=True),
        ),
        "command-a": (_c("command-a-03-2025", "2025-03-01", lts=True),),
    }
)

DEFAULT_TABLES: Mapping[str, ModelTable] = MappingProxyType(
    {
        "openai": OPENAI_MODELS,
        "anthropic": ANTHROPIC_MODELS,
        "google": GOOGLE_MODELS,
        "meta": META_MODELS,
        "mistral": MISTRAL_MODELS,
        "cohere": COHERE_MODELS,
    }
)

PROVIDER_NAMES: Dict[str, str] = {
    "openai": "OpenAI",
    "anthropic": "Anthropic",
    "google": "Google",
    "meta": "Meta",
    "mistral": "Mistral AI",
    "cohere": "Cohere",
}

# npm and PyPI package names that imply a provider; "multiple" for frameworks
SDK_TO_PROVIDER: Dict[str, str] = {
    "openai": "openai",
    "@azure/openai": "openai",
    "@anthropic-ai/sdk": "anthropic",
    "anthropic": "anthropic",
    "@google/generative-ai": "google",
    "@google-cloud/vertexai": "google",
    "google-generativeai": "google",
    "langchain": "multiple",
    "@langchain/openai": "openai",
    "@langchain/anthropic": "anthropic",
    "@langchain/google-genai": "google",
    "@langchain/cohere": "cohere",
    "@langchain/mistralai": "mistral",
    "cohere-ai": "cohere",
    "cohere": "cohere",
    "@mistralai/mistralai": "mistral",
    "mistralai": "mistral",
    "llamaindex": "multiple",
    "ai": "multiple",
    "@ai-sdk/openai": "openai",
    "@ai-sdk/anthropic": "anthropic",
    "@ai-sdk/google": "google",
    "@ai-sdk/mistral": "mistral",
    "@ai-sdk/cohere": "cohere",
    "@huggingface/inference": "huggingface",
    "huggingface_hub": "huggingface",
    "replicate": "replicate",
    "together-ai": "together",
    "ollama": "ollama",
    "ollama-ai-provider": "ollama",
}

PYTHON_SDK_TO_PROVIDER: Dict[str, str] = {
    "openai": "openai",
    "anthropic": "anthropic",
    "google-generativeai": "google",
    "google-genai": "google",
    "cohere": "cohere",
    "mistralai": "mistral",
    "langchain": "multiple",
    "langchain-openai": "openai",
    "langchain-anthropic": "anthropic",
    "langchain-google-genai": "google",
    "llama-index": "multiple",
    "huggingface-hub": "huggingface",
    "transformers": "huggingface",
    "replicate": "replicate",
    "ollama": "ollama",
}

# Model identifier as written in code -> (provider, table key).
# Ordered so that longer identifiers are tried before their prefixes.
MODEL_PATTERNS: Dict[str, Tuple[str, str]] = {
    "gpt-4o-mini": ("openai", "gpt-4o-mini"),
    "gpt-4o": ("openai", "gpt-4o"),
    "gpt-4-turbo": ("openai", "gpt-4"),
    "gpt-4.1": ("openai", "gpt-4.1"),
    "gpt-4": ("openai", "gpt-4"),
    "gpt-3.5-turbo": ("openai", "gpt-3.5-turbo"),
    "o1-mini": ("openai", "o1-mini"),
    "o1-preview": ("openai", "o1"),
    "o1": ("openai", "o1"),
    "o3-mini": ("openai", "o3-mini"),
    "gpt-5.1": ("openai", "gpt-5.1"),
    "gpt-5-mini": ("openai", "gpt-5-mini"),
    "gpt-5-nano": ("openai", "gpt-5-nano"),
    "gpt-5-pro": ("openai", "gpt-5-pro"),
    "gpt-5": ("openai", "gpt-5"),
    "claude-3-opus": ("anthropic", "claude-3-opus"),
    "claude-3-sonnet": ("anthropic", "claude-3-sonnet"),
    "claude-3-haiku": ("anthropic", "claude-3-haiku"),
    "claude-3-5-sonnet": ("anthropic", "claude-3.5-sonnet"),
    "claude-3.5-sonnet": ("anthropic", "claude-3.5-sonnet"),
    "claude-3-5-haiku": ("anthropic", "claude-3.5-haiku"),
    "claude-3.5-haiku": ("anthropic", "claude-3.5-haiku"),
    "claude-sonnet-4-5": ("anthropic", "claude-sonnet-4.5"),
    "claude-sonnet-4.5": ("anthropic", "claude-sonnet-4.5"),
    "claude-opus-4-1": ("anthropic", "claude-opus-4.1"),
    "claude-opus-4.1": ("anthropic", "claude-opus-4.1"),
    "claude-sonnet-4": ("anthropic", "claude-sonnet-4"),
    "claude-opus-4": ("anthropic", "claude-opus-4"),
    "gemini-pro": ("google", "gemini-pro"),
    "gemini-1.5-pro": ("google", "gemini-1.5-pro"),
    "gemini-1.5-flash": ("google", "gemini-1.5-flash"),
    "gemini-2.0-flash": ("google", "gemini-2.0-flash"),
    "gemini-2.5-pro": ("google", "gemini-2.5-pro"),
    "gemini-2.5-flash": ("google", "gemini-2.5-flash"),
    "gemini-3-pro": ("google", "gemini-3-pro"),
    "mistral-large": ("mistral", "mistral-large"),
    "mistral-small": ("mistral", "mistral-small"),
    "codestral": ("mistral", "codestral"),
    "llama-3.1": ("meta", "llama-3.1"),
    "llama-3.2": ("meta", "llama-3.2"),
    "llama-3": ("meta", "llama-3"),
    "llama3.1": ("meta", "llama-3.1"),
    "llama3.2": ("meta", "llama-3.2"),
    "llama3": ("meta", "llama-3"),
}

_DATE_SUFFIX = re.compile(r"-\d{8}$")


def get_ai_model_cycles(
    provider: str,
    model: str,
    tables: Optional[Mapping[str, ModelTable]] = None,
) -> Optional[Tuple[AIModelCycle, ...]]:
    """
    Look up the cycles for a provider/model pair.

    Tries the exact model key first, then a case-insensitive match with a
    trailing ``-YYYYMMDD`` snapshot suffix removed.

    Args:
        provider: Provider key, case-insensitive ("OpenAI" or "openai")
        model: Model key as found ("gpt-4", "claude-3-opus-20240229")
        tables: Tables to search, defaults to the curated ones

    Returns:
        Tuple of cycles, or None when the provider or model is unknown
    """
    provider_models = (tables if tables is not None else DEFAULT_TABLES).get(provider.lower())
    if not provider_models:
        return None

    if model in provider_models:
        return provider_models[model]

    normalized = _DATE_SUFFIX.sub("", model.lower())
    for key, cycles in provider_models.items():
        if key.lower() == normalized:
            return cycles
    return None


def get_provider_models(provider: str, tables: Optional[Mapping[str, ModelTable]] = None) -> List[str]:
    """Model keys known for a provider, empty for unknown providers."""
    provider_models = (tables if tables is not None else DEFAULT_TABLES).get(provider.lower())
    return list(provider_models) if provider_models else []


def get_all_providers(tables: Optional[Mapping[str, ModelTable]] = None) -> List[str]:
    """Provider keys with curated data."""
    return list(tables if tables is not None else DEFAULT_TABLES)
