# src/providers/registry.py — v1
"""Static catalog of providers and their models.

Pure lookups over an in-memory table. Unknown identifiers yield None or
an empty list, never an exception.
"""

from __future__ import annotations

from tokencount.core.models import Model, Provider, ProviderId

PROVIDERS: tuple[Provider, ...] = (
    Provider(
        id=ProviderId.ANTHROPIC,
        name="Anthropic",
        models=(
            Model(id="claude-opus-4-20250514", name="Claude Opus 4",
                  description="Latest flagship model"),
            Model(id="claude-sonnet-4-20250514", name="Claude Sonnet 4",
                  description="Latest high-performance model"),
            Model(id="claude-3-7-sonnet-20250219", name="Claude Sonnet 3.7",
                  description="Improved high-performance model"),
            Model(id="claude-3-5-sonnet-20241022", name="Claude 3.5 Sonnet",
                  description="High-performance model"),
            Model(id="claude-3-5-haiku-20241022", name="Claude 3.5 Haiku",
                  description="Fast, efficient model"),
            Model(id="claude-3-opus-20240229", name="Claude 3 Opus",
                  description="High-performance model"),
            Model(id="claude-3-haiku-20240307", name="Claude 3 Haiku",
                  description="Fast model"),
        ),
    ),
    Provider(
        id=ProviderId.OPENAI,
        name="OpenAI",
        models=(
            Model(id="gpt-4o", name="GPT-4o",
                  description="Latest multimodal model"),
            Model(id="gpt-4o-mini", name="GPT-4o Mini",
                  description="Fast, efficient multimodal model"),
            Model(id="gpt-4-turbo", name="GPT-4 Turbo",
                  description="Fast high-performance model"),
            Model(id="gpt-4", name="GPT-4",
                  description="High-performance language model"),
            Model(id="gpt-3.5-turbo", name="GPT-3.5 Turbo",
                  description="Fast, efficient model"),
        ),
    ),
    Provider(
        id=ProviderId.GEMINI,
        name="Google",
        models=(
            Model(id="gemini-2.0-flash", name="Gemini 2.0 Flash",
                  description="Latest fast model"),
            Model(id="gemini-1.5-pro", name="Gemini 1.5 Pro",
                  description="High-performance multimodal model"),
            Model(id="gemini-1.5-flash", name="Gemini 1.5 Flash",
                  description="Fast, efficient model"),
        ),
    ),
)


def list_providers() -> list[Provider]:
    """Return all providers in display order."""
    return list(PROVIDERS)


def provider_ids() -> list[str]:
    """Return the identifiers of all providers, in display order."""
    return [p.id.value for p in PROVIDERS]


def get_provider(provider_id: str) -> Provider | None:
    """Look up a provider by identifier."""
    for provider in PROVIDERS:
        if provider.id.value == provider_id:
            return provider
    return None


def list_models(provider_id: str) -> list[Model]:
    """Return the models of a provider, or an empty list if unknown."""
    provider = get_provider(provider_id)
    return list(provider.models) if provider else []


def find_model(provider_id: str, model_id: str) -> Model | None:
    """Look up a model within a provider."""
    for model in list_models(provider_id):
        if model.id == model_id:
            return model
    return None


def is_valid_model(provider_id: str, model_id: str) -> bool:
    """Whether ``model_id`` belongs to ``provider_id``."""
    return find_model(provider_id, model_id) is not None
