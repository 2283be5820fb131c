# src/api/facade.py — v1
"""Public API facade joining the state store with the dispatcher.

Usage:
    from tokencount.api.facade import estimate
    store = AppStore()
    store.dispatch(select_provider, "openai")
    store.dispatch(select_model, "gpt-4o")
    store.dispatch(update_input_text, "Hello")
    state = await estimate(store)

Adapters never touch the store; these helpers apply each outcome after
the call resolves and always leave the busy flag cleared.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import aiohttp

from tokencount.config.settings import Settings
from tokencount.core.errors import TokenCountError
from tokencount.core.messages import message
from tokencount.core.models import TokenCountRequest
from tokencount.counting.dispatcher import count_tokens
from tokencount.images.loader import convert_file_to_base64, fetch_image_as_base64
from tokencount.state.app_state import (
    AppState,
    AppStore,
    add_input_image,
    set_error,
    set_loading,
    set_token_count,
    update_image_url,
)

logger = logging.getLogger(__name__)


@contextmanager
def _busy(store: AppStore) -> Iterator[None]:
    """Raise the busy flag for the block and make sure it is lowered after.

    Outcome reducers already clear the flag; the ``finally`` covers
    exceptions outside TokenCountError, which still propagate.
    """
    store.dispatch(set_loading, True)
    try:
        yield
    finally:
        if store.state.is_loading:
            store.dispatch(set_loading, False)


async def estimate(
    store: AppStore,
    settings: Settings | None = None,
    *,
    session: aiohttp.ClientSession | None = None,
) -> AppState:
    """Count tokens for the store's current input and record the outcome.

    Returns:
        The snapshot after the result or error has been applied.
    """
    settings = settings or Settings()
    state = store.state

    if not state.selected_provider:
        return store.dispatch(set_error, message("no_provider_selected", settings.locale))
    if not state.selected_model:
        return store.dispatch(set_error, message("no_model_selected", settings.locale))

    request = TokenCountRequest(
        text=state.input_text or None,
        images=list(state.input_images),
        model=state.selected_model,
    )

    with _busy(store):
        try:
            result = await count_tokens(
                state.selected_provider, request, settings, session=session,
            )
        except TokenCountError as e:
            logger.warning("Token count failed (%s): %s", e.kind.value, e)
            store.dispatch(set_error, str(e))
        else:
            store.dispatch(set_token_count, result)
    return store.state


async def add_image_from_url(
    store: AppStore,
    settings: Settings | None = None,
    *,
    session: aiohttp.ClientSession | None = None,
) -> AppState:
    """Fetch the image at the store's pending URL and append it."""
    settings = settings or Settings()
    url = store.state.image_url.strip()
    if not url:
        return store.dispatch(set_error, message("no_image_url", settings.locale))

    with _busy(store):
        try:
            image = await fetch_image_as_base64(
                url,
                timeout_s=settings.request_timeout_s,
                session=session,
                locale=settings.locale,
            )
        except TokenCountError as e:
            store.dispatch(set_error, str(e))
        else:
            store.dispatch(add_input_image, image)
            store.dispatch(update_image_url, "")
    return store.state


async def add_image_from_file(
    store: AppStore,
    path: str | Path,
    media_type: str | None = None,
    settings: Settings | None = None,
) -> AppState:
    """Read a local image file and append it."""
    settings = settings or Settings()
    with _busy(store):
        try:
            image = await convert_file_to_base64(
                path,
                media_type,
                max_bytes=settings.max_image_file_bytes,
                locale=settings.locale,
            )
        except TokenCountError as e:
            store.dispatch(set_error, str(e))
        else:
            store.dispatch(add_input_image, image)
    return store.state
