# src/core/messages.py — v1
"""Localized user-facing messages.

Keys are stable; templates use ``str.format`` placeholders. Unknown
locales fall back to English, unknown keys raise KeyError.
"""

from __future__ import annotations

DEFAULT_LOCALE = "en"

_CATALOG: dict[str, dict[str, str]] = {
    "en": {
        "missing_api_key": "{provider} API key is not configured",
        "missing_content": "Please enter text or add an image",
        "count_failed": "Token counting failed: {detail}",
        "request_timeout": "The request timed out",
        "request_failed": "API request failed: {detail}",
        "text_count_failed": "Failed to count text tokens: {detail}",
        "vision_unsupported": "The selected model does not support images",
        "unsupported_provider": "Unsupported provider: {provider}",
        "image_fetch_failed": "Failed to fetch image: {detail}",
        "not_an_image_url": "The given URL is not an image",
        "unsupported_file_type": "Unsupported file type: {media_type}",
        "file_too_large": "File is too large: {size_mb}MB (max {max_mb}MB)",
        "file_read_failed": "Failed to read the file",
        "file_conversion_failed": "Failed to convert the file: {detail}",
        "empty_base64": "Could not extract base64 data",
        "no_provider_selected": "Please select a provider",
        "no_model_selected": "Please select a model",
        "no_image_url": "Please enter an image URL",
    },
    "ja": {
        "missing_api_key": "{provider} APIキーが設定されていません",
        "missing_content": "テキストまたは画像を入力してください",
        "count_failed": "トークンカウントに失敗しました: {detail}",
        "request_timeout": "リクエストがタイムアウトしました",
        "request_failed": "APIリクエストに失敗しました: {detail}",
        "text_count_failed": "テキストのトークンカウントに失敗しました: {detail}",
        "vision_unsupported": "選択されたモデルは画像をサポートしていません",
        "unsupported_provider": "サポートされていないプロバイダです: {provider}",
        "image_fetch_failed": "画像の取得に失敗しました: {detail}",
        "not_an_image_url": "指定されたURLは画像ではありません",
        "unsupported_file_type": "サポートされていないファイル形式です: {media_type}",
        "file_too_large": "ファイルサイズが大きすぎます: {size_mb}MB（最大{max_mb}MB）",
        "file_read_failed": "ファイルの読み込みに失敗しました",
        "file_conversion_failed": "ファイルの変換に失敗しました: {detail}",
        "empty_base64": "base64データの抽出に失敗しました",
        "no_provider_selected": "プロバイダを選択してください",
        "no_model_selected": "モデルを選択してください",
        "no_image_url": "画像URLを入力してください",
    },
}


def available_locales() -> list[str]:
    """Return the locales with a message catalog."""
    return sorted(_CATALOG)


def message(key: str, locale: str = DEFAULT_LOCALE, **params: object) -> str:
    """Render message ``key`` in ``locale``.

    Args:
        key: Catalog key (e.g. "missing_content").
        locale: Locale code; unknown locales use English.
        **params: Template parameters.

    Returns:
        Formatted human-readable message.
    """
    catalog = _CATALOG.get(locale, _CATALOG[DEFAULT_LOCALE])
    return catalog[key].format(**params)
