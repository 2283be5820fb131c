# tests/unit/core/test_unit_models.py — v1
"""Tests for core/models.py — request and result models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from tokencount.core.models import (
    ImageData,
    Model,
    Provider,
    ProviderId,
    TokenCountRequest,
    TokenCountResult,
)


class TestTokenCountRequest:
    def test_defaults(self):
        req = TokenCountRequest(model="gpt-4")
        assert req.text is None
        assert req.images == []
        assert not req.has_text
        assert not req.has_images

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_text_is_not_content(self, text):
        assert not TokenCountRequest(text=text, model="m").has_text

    def test_has_text_and_images(self):
        req = TokenCountRequest(
            text=" hi ",
            images=[ImageData(data="QQ==", media_type="image/png")],
            model="m",
        )
        assert req.has_text
        assert req.has_images

    def test_model_required(self):
        with pytest.raises(PydanticValidationError):
            TokenCountRequest(text="x")  # type: ignore[call-arg]


class TestTokenCountResult:
    def test_non_negative(self):
        with pytest.raises(PydanticValidationError):
            TokenCountResult(input_tokens=-1, total_tokens=0)

    def test_zero_allowed(self):
        result = TokenCountResult(input_tokens=0, total_tokens=0)
        assert result.model_dump() == {"input_tokens": 0, "total_tokens": 0}


class TestProvider:
    def test_enum_from_string(self):
        provider = Provider(id="openai", name="OpenAI", models=(Model(id="gpt-4", name="GPT-4"),))
        assert provider.id is ProviderId.OPENAI
        assert provider.models[0].description is None

    def test_unknown_provider_rejected(self):
        with pytest.raises(PydanticValidationError):
            Provider(id="mistral", name="Mistral")
