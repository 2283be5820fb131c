# src/images/loader.py — v1
"""Image acquisition: remote URL or local file to base64 ImageData."""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path

import aiohttp

from tokencount.core.errors import ConversionError, FetchError, ValidationError
from tokencount.core.messages import message
from tokencount.core.models import ImageData
from tokencount.counting.http import is_success, session_scope

logger = logging.getLogger(__name__)

IMAGE_MIME_PREFIX = "image/"
MAX_IMAGE_FILE_BYTES = 20 * 1024 * 1024
DEFAULT_FETCH_TIMEOUT_S = 30.0


async def fetch_image_as_base64(
    url: str,
    *,
    timeout_s: float = DEFAULT_FETCH_TIMEOUT_S,
    session: aiohttp.ClientSession | None = None,
    locale: str = "en",
) -> ImageData:
    """Download an image and return it base64-encoded.

    Args:
        url: Image URL.
        timeout_s: Total wall-clock budget for the download.
        session: Shared client session; a private one is used if None.
        locale: Locale for error messages.

    Returns:
        ImageData with the declared content type as MIME type.

    Raises:
        FetchError: On timeout, transport failure, non-2xx status, or a
            declared content type that is not ``image/*``.
    """
    try:
        async with session_scope(session) as client:
            async with client.get(
                url, timeout=aiohttp.ClientTimeout(total=timeout_s),
            ) as response:
                if not is_success(response.status):
                    detail = f"HTTP {response.status}: {response.reason}"
                    raise FetchError(
                        message("image_fetch_failed", locale, detail=detail),
                        status=response.status,
                    )
                content_type = response.content_type or ""
                if not content_type.startswith(IMAGE_MIME_PREFIX):
                    raise FetchError(
                        message(
                            "image_fetch_failed", locale,
                            detail=message("not_an_image_url", locale),
                        )
                    )
                body = await response.read()
    except asyncio.TimeoutError as e:
        logger.error("Image fetch from %s timed out after %.1fs", url, timeout_s)
        raise FetchError(
            message(
                "image_fetch_failed", locale,
                detail=message("request_timeout", locale),
            ),
        ) from e
    except aiohttp.ClientError as e:
        logger.error("Failed to fetch image from URL %s: %s", url, e)
        raise FetchError(
            message("image_fetch_failed", locale, detail=str(e) or type(e).__name__),
        ) from e

    logger.debug("Fetched image %s: %s, %d bytes", url, content_type, len(body))
    return ImageData(data=base64.b64encode(body).decode("ascii"), media_type=content_type)


async def convert_file_to_base64(
    path: str | Path,
    media_type: str | None = None,
    *,
    max_bytes: int = MAX_IMAGE_FILE_BYTES,
    locale: str = "en",
) -> ImageData:
    """Read a local image file and return it base64-encoded.

    Type and size are checked before the file is read.

    Args:
        path: Path to the image file.
        media_type: Declared MIME type; guessed from the file name if None.
        max_bytes: Size ceiling in bytes.
        locale: Locale for error messages.

    Raises:
        ValidationError: If the type is not ``image/*`` or the file is too large.
        ConversionError: If the file cannot be read or yields no payload.
    """
    path = Path(path)
    media_type = media_type or mimetypes.guess_type(path.name)[0] or ""
    logger.debug("Converting file to base64: %s, type: %s", path.name, media_type)

    if not media_type.startswith(IMAGE_MIME_PREFIX):
        raise ValidationError(
            message("unsupported_file_type", locale, media_type=media_type or "unknown"),
        )

    try:
        size = path.stat().st_size
    except OSError as e:
        logger.error("Cannot stat %s: %s", path, e)
        raise ConversionError(message("file_read_failed", locale)) from e

    if size > max_bytes:
        raise ValidationError(
            message(
                "file_too_large", locale,
                size_mb=round(size / 1024 / 1024),
                max_mb=round(max_bytes / 1024 / 1024),
            ),
        )

    try:
        raw = await asyncio.to_thread(path.read_bytes)
    except OSError as e:
        logger.error("File read error for %s: %s", path, e)
        raise ConversionError(message("file_read_failed", locale)) from e

    data_url = to_data_url(raw, media_type)
    payload = data_url.split(",", 1)[1] if "," in data_url else ""
    if not payload:
        raise ConversionError(
            message(
                "file_conversion_failed", locale,
                detail=message("empty_base64", locale),
            ),
        )

    logger.debug("File converted successfully: %d characters", len(payload))
    return ImageData(data=payload, media_type=media_type)


def to_data_url(raw: bytes, media_type: str) -> str:
    """Encode bytes as a ``data:<type>;base64,<payload>`` URL."""
    return f"data:{media_type};base64,{base64.b64encode(raw).decode('ascii')}"
