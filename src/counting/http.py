# src/counting/http.py — v1
"""Bounded-time JSON POST shared by the network counters.

Maps aiohttp failures onto the unified error type:
  - wall-clock budget exceeded   -> RequestTimeoutError
  - non-2xx vendor response      -> ApiError (status + vendor code)
  - connection / decoding errors -> TransportError
  - malformed count fields        -> TransportError
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiohttp

from tokencount.core.errors import ApiError, RequestTimeoutError, TransportError
from tokencount.core.messages import message

logger = logging.getLogger(__name__)


@asynccontextmanager
async def session_scope(
    session: aiohttp.ClientSession | None,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Yield ``session``, or a private session closed on exit."""
    if session is not None:
        yield session
        return
    async with aiohttp.ClientSession() as own:
        yield own


def is_success(status: int) -> bool:
    """True for 2xx statuses only; unfollowed redirects are failures."""
    return 200 <= status < 300


def read_token_count(
    data: dict[str, Any],
    field: str,
    *,
    provider: str,
    locale: str = "en",
) -> int:
    """Read a non-negative integer count from a vendor response body.

    A missing or null field counts as 0.

    Raises:
        TransportError: If the field is present but not a non-negative integer.
    """
    value = data.get(field)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        logger.error("%s returned an invalid %s: %r", provider, field, value)
        raise TransportError(
            message("request_failed", locale, detail=f"invalid {field}: {value!r}"),
            provider=provider,
        )
    return value


def extract_vendor_error(body: Any) -> tuple[str | None, str | None]:
    """Pull (message, code) out of a vendor error body.

    Both vendors nest details under ``error``: Anthropic reports the code
    as ``error.type``, Gemini as ``error.status`` (string) or
    ``error.code`` (numeric).
    """
    if not isinstance(body, dict):
        return None, None
    error = body.get("error")
    if not isinstance(error, dict):
        return None, None
    msg = error.get("message") or None
    code = error.get("type") or error.get("status") or error.get("code")
    return msg, (str(code) if code is not None else None)


async def post_json(
    url: str,
    payload: dict[str, Any],
    *,
    provider: str,
    timeout_s: float,
    headers: dict[str, str] | None = None,
    params: dict[str, str] | None = None,
    session: aiohttp.ClientSession | None = None,
    locale: str = "en",
) -> dict[str, Any]:
    """POST ``payload`` as JSON and return the decoded JSON response.

    Args:
        url: Absolute endpoint URL.
        payload: JSON-serializable request body.
        provider: Provider name attached to raised errors.
        timeout_s: Total wall-clock budget for the call.
        headers: Extra request headers.
        params: Query-string parameters.
        session: Shared client session; a private one is used if None.
        locale: Locale for error messages.

    Raises:
        RequestTimeoutError: If no response arrives within ``timeout_s``.
        ApiError: If the vendor answers with a non-success status.
        TransportError: On connection failure or an undecodable body.
    """
    try:
        async with session_scope(session) as client:
            async with client.post(
                url,
                json=payload,
                headers=headers,
                params=params,
                timeout=aiohttp.ClientTimeout(total=timeout_s),
            ) as response:
                if not is_success(response.status):
                    raise await _api_error(response, provider, locale)
                data = await response.json(content_type=None)
                if not isinstance(data, dict):
                    raise TransportError(
                        message("request_failed", locale, detail="unexpected response body"),
                        status=response.status,
                        provider=provider,
                    )
                return data
    except asyncio.TimeoutError as e:
        logger.error("%s request timed out after %.1fs", provider, timeout_s)
        raise RequestTimeoutError(
            message("request_timeout", locale), provider=provider,
        ) from e
    except aiohttp.ClientError as e:
        logger.error("%s request failed: %s", provider, e)
        raise TransportError(
            message("request_failed", locale, detail=str(e) or type(e).__name__),
            provider=provider,
        ) from e
    except json.JSONDecodeError as e:
        logger.error("%s returned an invalid JSON body: %s", provider, e)
        raise TransportError(
            message("request_failed", locale, detail=str(e)), provider=provider,
        ) from e


async def _api_error(
    response: aiohttp.ClientResponse, provider: str, locale: str,
) -> ApiError:
    try:
        body = await response.json(content_type=None)
    except (aiohttp.ClientError, ValueError):
        body = None
    vendor_message, code = extract_vendor_error(body)
    detail = vendor_message or f"HTTP {response.status}: {response.reason}"
    logger.error("%s API error: %s", provider, detail)
    return ApiError(
        message("count_failed", locale, detail=detail),
        status=response.status,
        code=code,
        provider=provider,
    )
