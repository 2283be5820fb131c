# src/main.py — v1
"""CLI entry point: providers, models, count commands.

Usage:
    tokencount providers
    tokencount models <provider>
    tokencount count -p <provider> -m <model> [--text T | --text-file F]
                     [--image PATH ...] [--image-url URL ...] [--json]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from tokencount.config.settings import Settings, load_settings
from tokencount.logging.logger import setup_logging
from tokencount.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings()
        _setup_logging(settings, args.verbose)
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="tokencount",
        description=f"tokencount v{__version__} - Prompt token estimator for LLM providers",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- providers ---
    p_providers = subparsers.add_parser("providers", help="List supported providers")
    p_providers.set_defaults(func=_cmd_providers)

    # --- models ---
    p_models = subparsers.add_parser("models", help="List models of a provider")
    p_models.add_argument("provider", help="Provider id (anthropic, openai, gemini)")
    p_models.set_defaults(func=_cmd_models)

    # --- count ---
    p_count = subparsers.add_parser("count", help="Count prompt tokens")
    p_count.add_argument("-p", "--provider", required=True, help="Provider id")
    p_count.add_argument("-m", "--model", required=True, help="Model id")
    text_group = p_count.add_mutually_exclusive_group()
    text_group.add_argument("--text", default=None, help="Prompt text")
    text_group.add_argument(
        "--text-file", type=Path, default=None,
        help="Read prompt text from a UTF-8 file ('-' for stdin)",
    )
    p_count.add_argument(
        "--image", dest="images", type=Path, action="append", default=[],
        help="Local image file (repeatable)",
    )
    p_count.add_argument(
        "--image-url", dest="image_urls", action="append", default=[],
        help="Remote image URL (repeatable)",
    )
    p_count.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Print the result as JSON",
    )
    p_count.set_defaults(func=_cmd_count)

    return parser


async def _cmd_providers(args: argparse.Namespace, settings: Settings) -> int:
    """Print the provider catalog."""
    from tokencount.providers.registry import list_providers

    for provider in list_providers():
        print(f"{provider.id.value:10s} {provider.name} ({len(provider.models)} models)")
    return 0


async def _cmd_models(args: argparse.Namespace, settings: Settings) -> int:
    """Print the models of one provider."""
    from tokencount.providers.registry import get_provider

    provider = get_provider(args.provider)
    if provider is None:
        logger.error("Unknown provider: %s", args.provider)
        return 1

    for model in provider.models:
        suffix = f" - {model.description}" if model.description else ""
        print(f"{model.id:28s} {model.name}{suffix}")
    return 0


async def _cmd_count(args: argparse.Namespace, settings: Settings) -> int:
    """Count tokens for text and/or images."""
    from tokencount.api.facade import add_image_from_file, add_image_from_url, estimate
    from tokencount.providers.registry import is_valid_model
    from tokencount.state.app_state import (
        AppStore,
        select_model,
        select_provider,
        update_image_url,
        update_input_text,
    )

    if not is_valid_model(args.provider, args.model):
        logger.warning(
            "Model %s is not in the %s catalog; sending it as-is",
            args.model, args.provider,
        )

    store = AppStore()
    store.dispatch(select_provider, args.provider)
    store.dispatch(select_model, args.model)
    store.dispatch(update_input_text, _read_text(args))

    for path in args.images:
        state = await add_image_from_file(store, path, settings=settings)
        if state.error:
            return _report_error(state.error)

    for url in args.image_urls:
        store.dispatch(update_image_url, url)
        state = await add_image_from_url(store, settings)
        if state.error:
            return _report_error(state.error)

    state = await estimate(store, settings)
    if state.error or state.token_count is None:
        return _report_error(state.error or "no result")

    result = state.token_count
    if args.as_json:
        print(json.dumps({
            "provider": args.provider,
            "model": args.model,
            **result.model_dump(),
        }))
    else:
        print(f"\nToken count ({args.provider}/{args.model}):")
        print(f"  Input tokens:  {result.input_tokens}")
        print(f"  Total tokens:  {result.total_tokens}")
    return 0


def _read_text(args: argparse.Namespace) -> str:
    """Resolve prompt text from --text or --text-file."""
    if args.text is not None:
        return args.text
    if args.text_file is None:
        return ""
    if str(args.text_file) == "-":
        return sys.stdin.read()
    return args.text_file.read_text(encoding="utf-8")


def _report_error(error: str) -> int:
    print(f"Error: {error}", file=sys.stderr)
    return 1


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
