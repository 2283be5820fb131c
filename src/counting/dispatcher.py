# src/counting/dispatcher.py — v1
"""Dispatch facade: route a count request to the provider's counter.

Counters are registered by class path and imported lazily, so the
tokenizer dependency is only loaded when the OpenAI counter is used.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

import aiohttp

from tokencount.config.settings import Settings
from tokencount.core.errors import UnsupportedProviderError
from tokencount.core.messages import message
from tokencount.core.models import ProviderId, TokenCountRequest, TokenCountResult
from tokencount.counting.base_counter import BaseTokenCounter
from tokencount.logging.context import request_context

logger = logging.getLogger(__name__)

# Registry of provider id -> counter class path (lazy import).
_COUNTER_REGISTRY: dict[str, str] = {
    ProviderId.ANTHROPIC.value: (
        "tokencount.counting.adapters.anthropic_counter.AnthropicTokenCounter"
    ),
    ProviderId.GEMINI.value: "tokencount.counting.adapters.gemini_counter.GeminiTokenCounter",
    ProviderId.OPENAI.value: "tokencount.counting.adapters.openai_counter.OpenAITokenCounter",
}


def create_counter(
    provider: str,
    settings: Settings | None = None,
    **kwargs: Any,
) -> BaseTokenCounter:
    """Instantiate the counter for ``provider``.

    Args:
        provider: Provider identifier (anthropic, openai, gemini).
        settings: Application settings (credentials, endpoints, timeout).
        **kwargs: Overrides passed to the counter constructor.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    settings = settings or Settings()
    class_path = _resolve(provider, settings.locale)
    counter_cls = _import_class(class_path)

    init_kwargs = dict(kwargs)
    init_kwargs.setdefault("locale", settings.locale)
    if provider == ProviderId.ANTHROPIC.value:
        init_kwargs.setdefault("api_key", settings.anthropic_api_key)
        init_kwargs.setdefault("base_url", settings.anthropic_base_url)
        init_kwargs.setdefault("api_version", settings.anthropic_version)
        init_kwargs.setdefault("timeout_s", settings.request_timeout_s)
    elif provider == ProviderId.GEMINI.value:
        init_kwargs.setdefault("api_key", settings.gemini_api_key)
        init_kwargs.setdefault("base_url", settings.gemini_base_url)
        init_kwargs.setdefault("timeout_s", settings.request_timeout_s)

    logger.debug("Creating token counter: provider=%s", provider)
    return counter_cls(**init_kwargs)


async def count_tokens(
    provider: str,
    request: TokenCountRequest,
    settings: Settings | None = None,
    *,
    session: aiohttp.ClientSession | None = None,
) -> TokenCountResult:
    """Count tokens for ``request`` with the counter of ``provider``.

    The counter's result or error is passed through unchanged.

    Raises:
        UnsupportedProviderError: If provider is not registered; raised
            before any counter is created.
        TokenCountError: Whatever the selected counter raises.
    """
    provider = getattr(provider, "value", provider)
    locale = settings.locale if settings is not None else "en"
    _resolve(provider, locale)

    with request_context(provider, request.model):
        counter = create_counter(provider, settings, session=session)
        result = await counter.count(request)
        logger.info(
            "Counted %d tokens with %s/%s", result.total_tokens, provider, request.model,
        )
    return result


def supported_providers() -> list[str]:
    """Return the identifiers accepted by the dispatcher."""
    return sorted(_COUNTER_REGISTRY)


def _resolve(provider: str, locale: str) -> str:
    if provider not in _COUNTER_REGISTRY:
        logger.error("Unsupported provider: %r", provider)
        raise UnsupportedProviderError(
            message("unsupported_provider", locale, provider=provider),
            provider=str(provider),
        )
    return _COUNTER_REGISTRY[provider]


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
