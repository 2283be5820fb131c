# src/core/models.py — v1
"""Shared data model: providers, models, requests, results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ProviderId(str, Enum):
    """Closed set of supported providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GEMINI = "gemini"


class Model(BaseModel):
    """Vendor model entry in the registry."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str | None = None


class Provider(BaseModel):
    """Provider entry with its ordered model list."""

    model_config = ConfigDict(frozen=True)

    id: ProviderId
    name: str
    models: tuple[Model, ...] = ()


class ImageData(BaseModel):
    """Image payload as base64 text plus MIME type."""

    model_config = ConfigDict(frozen=True)

    data: str
    media_type: str


class TokenCountRequest(BaseModel):
    """Common request shape handed to every adapter.

    Content presence is not validated here: each adapter checks it
    itself when ``count`` is called.
    """

    text: str | None = None
    images: list[ImageData] = Field(default_factory=list)
    model: str

    @property
    def has_text(self) -> bool:
        """True when text is present and non-blank."""
        return bool(self.text and self.text.strip())

    @property
    def has_images(self) -> bool:
        return len(self.images) > 0


class TokenCountResult(BaseModel):
    """Normalized token count returned by every adapter."""

    model_config = ConfigDict(frozen=True)

    input_tokens: int = Field(ge=0)
    total_tokens: int = Field(ge=0)
