# src/counting/tokenizer.py — v1
"""Local BPE tokenization via tiktoken.

Encoding profile selection is an ordered list of (substring, profile)
rules matched against the model identifier; the first match wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import tiktoken

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "cl100k_base"

# Order matters: "gpt-4o" must be tested before "gpt-4".
_ENCODING_RULES: tuple[tuple[str, str], ...] = (
    ("gpt-4o", "o200k_base"),
    ("gpt-4", "cl100k_base"),
    ("gpt-3.5", "cl100k_base"),
)


def encoding_for_model(model: str) -> str:
    """Return the encoding profile name for ``model``."""
    for marker, encoding_name in _ENCODING_RULES:
        if marker in model:
            return encoding_name
    return DEFAULT_ENCODING


@contextmanager
def open_encoding(encoding_name: str) -> Iterator[tiktoken.Encoding]:
    """Acquire a tiktoken encoding for the duration of the block.

    The reference is dropped on exit whether or not the block raised.
    """
    encoding = tiktoken.get_encoding(encoding_name)
    logger.debug("Acquired encoding %s", encoding_name)
    try:
        yield encoding
    finally:
        del encoding
        logger.debug("Released encoding %s", encoding_name)


def count_text_tokens(text: str, model: str) -> tuple[int, str]:
    """Encode ``text`` with the profile selected for ``model``.

    Returns:
        (token count, encoding profile name).
    """
    encoding_name = encoding_for_model(model)
    with open_encoding(encoding_name) as encoding:
        tokens = encoding.encode(text)
    return len(tokens), encoding_name
