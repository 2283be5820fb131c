# src/logging/context.py — v1
"""Contextual logging support: attach provider and model to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per count request.
_provider: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "provider", default=None
)
_model: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "model", default=None
)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    provider: str | None = None
    model: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(provider=_provider.get(), model=_model.get())


def set_request_context(provider: str, model: str | None = None) -> None:
    """Set request-level context (called once per dispatched count)."""
    _provider.set(provider)
    _model.set(model)


def clear_context() -> None:
    """Reset all context variables."""
    _provider.set(None)
    _model.set(None)


@contextmanager
def request_context(provider: str, model: str | None = None) -> Iterator[None]:
    """Set request-level context for the block, restoring the previous values."""
    provider_token = _provider.set(provider)
    model_token = _model.set(model)
    try:
        yield
    finally:
        _model.reset(model_token)
        _provider.reset(provider_token)
