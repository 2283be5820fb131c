# src/core/errors.py — v1
"""Unified error type for all token counting operations.

Every failure raised by the adapters, the dispatcher and the image
companions is a TokenCountError. The ``kind`` discriminator tells the
variants apart; the subclasses below only pin the kind so callers can
catch a single variant with a plain ``except`` clause.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminator for TokenCountError variants."""

    CONFIGURATION = "configuration"
    MISSING_CONTENT = "missing_content"
    VALIDATION = "validation"
    TIMEOUT = "timeout"
    API = "api"
    TRANSPORT = "transport"
    FETCH = "fetch"
    CONVERSION = "conversion"
    TOKENIZER = "tokenizer"
    UNSUPPORTED_CONTENT = "unsupported_content"
    UNSUPPORTED_PROVIDER = "unsupported_provider"


class TokenCountError(Exception):
    """Base error carrying kind, optional HTTP status and vendor code."""

    default_kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind | None = None,
        status: int | None = None,
        code: str | None = None,
        provider: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        self.status = status
        self.code = code
        self.provider = provider

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, status={self.status!r}, "
            f"code={self.code!r}, message={self.message!r})"
        )


class ConfigurationError(TokenCountError):
    """Required credential or setting is absent."""

    default_kind = ErrorKind.CONFIGURATION


class MissingContentError(TokenCountError):
    """Request has neither non-blank text nor images."""

    default_kind = ErrorKind.MISSING_CONTENT


class ValidationError(TokenCountError):
    """Input rejected before any I/O (wrong MIME type, oversized file)."""

    default_kind = ErrorKind.VALIDATION


class RequestTimeoutError(TokenCountError, TimeoutError):
    """Network call exceeded its wall-clock budget.

    Also a builtin ``TimeoutError``, so generic timeout handlers match it.
    """

    default_kind = ErrorKind.TIMEOUT


class ApiError(TokenCountError):
    """Vendor returned a non-success HTTP status."""

    default_kind = ErrorKind.API


class TransportError(TokenCountError):
    """Request could not be completed (connection failure, unreadable body)."""

    default_kind = ErrorKind.TRANSPORT


class FetchError(TokenCountError):
    """Remote image could not be fetched or is not an image."""

    default_kind = ErrorKind.FETCH


class ConversionError(TokenCountError):
    """Local image file could not be read or encoded."""

    default_kind = ErrorKind.CONVERSION


class TokenizerError(TokenCountError):
    """Local tokenizer failed to encode the text."""

    default_kind = ErrorKind.TOKENIZER


class UnsupportedContentError(TokenCountError):
    """Model cannot accept the requested content (images on a text-only model)."""

    default_kind = ErrorKind.UNSUPPORTED_CONTENT


class UnsupportedProviderError(TokenCountError):
    """Provider identifier is not part of the registry."""

    default_kind = ErrorKind.UNSUPPORTED_PROVIDER
