# src/state/app_state.py — v1
"""Immutable application state and the reducers that replace it.

Every reducer takes the current snapshot and returns a new one; nothing
is modified in place. Reducers that change the prompt or the selection
also drop the last result and error, since they no longer describe the
current input.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from tokencount.core.models import ImageData, TokenCountResult


class AppState(BaseModel):
    """Snapshot of the UI session."""

    model_config = ConfigDict(frozen=True)

    selected_provider: str | None = None
    selected_model: str | None = None
    input_text: str = ""
    input_images: tuple[ImageData, ...] = ()
    image_url: str = ""
    is_loading: bool = False
    token_count: TokenCountResult | None = None
    error: str | None = None


INITIAL_STATE = AppState()

_STALE_OUTPUT: dict[str, Any] = {"token_count": None, "error": None}


def select_provider(state: AppState, provider: str) -> AppState:
    """Select a provider; the model selection is cleared too."""
    return state.model_copy(
        update={"selected_provider": provider, "selected_model": None, **_STALE_OUTPUT}
    )


def select_model(state: AppState, model: str) -> AppState:
    return state.model_copy(update={"selected_model": model, **_STALE_OUTPUT})


def update_input_text(state: AppState, text: str) -> AppState:
    return state.model_copy(update={"input_text": text, **_STALE_OUTPUT})


def update_image_url(state: AppState, url: str) -> AppState:
    return state.model_copy(update={"image_url": url, **_STALE_OUTPUT})


def add_input_image(state: AppState, image: ImageData) -> AppState:
    return state.model_copy(
        update={"input_images": (*state.input_images, image), **_STALE_OUTPUT}
    )


def remove_input_image(state: AppState, index: int) -> AppState:
    """Drop the image at ``index``; an out-of-range index removes nothing."""
    images = tuple(img for i, img in enumerate(state.input_images) if i != index)
    return state.model_copy(update={"input_images": images, **_STALE_OUTPUT})


def clear_input_images(state: AppState) -> AppState:
    return state.model_copy(update={"input_images": (), **_STALE_OUTPUT})


def set_loading(state: AppState, loading: bool) -> AppState:
    return state.model_copy(update={"is_loading": loading})


def set_token_count(state: AppState, token_count: TokenCountResult) -> AppState:
    return state.model_copy(
        update={"token_count": token_count, "error": None, "is_loading": False}
    )


def set_error(state: AppState, error: str) -> AppState:
    return state.model_copy(
        update={"error": error, "token_count": None, "is_loading": False}
    )


def clear_error(state: AppState) -> AppState:
    return state.model_copy(update={"error": None})


def reset_state(state: AppState | None = None) -> AppState:
    """Return the initial snapshot, whatever the current one is."""
    return INITIAL_STATE


Reducer = Callable[..., AppState]
Listener = Callable[[AppState], None]


class AppStore:
    """Holds the current snapshot and notifies subscribers on replacement."""

    def __init__(self, initial: AppState = INITIAL_STATE) -> None:
        self._state = initial
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, reducer: Reducer, *args: Any) -> AppState:
        """Apply ``reducer(state, *args)`` and publish the new snapshot."""
        self._state = reducer(self._state, *args)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; it is called immediately with the current state.

        Returns:
            A callable that unsubscribes the listener.
        """
        self._listeners.append(listener)
        listener(self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reset(self) -> AppState:
        return self.dispatch(reset_state)
