# src/typedturn/providers/__init__.py
"""Provider adapters: request payload shaping and response parsing."""

from typing import Dict, Type

from .base import BaseAdapter, ChatProvider, ProviderAdapter
from .deepseek import DeepSeekAdapter
from .mock import MockProvider
from .openai import OpenAIAdapter

ADAPTERS: Dict[str, Type[BaseAdapter]] = {
    "openai": OpenAIAdapter,
    "deepseek": DeepSeekAdapter,
}


def get_adapter(name: str) -> BaseAdapter:
    """
    Return the adapter for provider *name*.

    Raises:
        ValueError: If the provider is unknown.
    """
    try:
        return ADAPTERS[name.lower()]()
    except KeyError:
        known = ", ".join(sorted(ADAPTERS))
        raise ValueError(f"Unknown provider: {name}. Known providers: {known}") from None


__all__ = [
    "ADAPTERS",
    "BaseAdapter",
    "ChatProvider",
    "DeepSeekAdapter",
    "MockProvider",
    "OpenAIAdapter",
    "ProviderAdapter",
    "get_adapter",
]
