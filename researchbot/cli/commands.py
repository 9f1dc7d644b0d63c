"""CLI commands for researchbot."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from researchbot import __logo__, __version__
from researchbot.agent.loop import ResearchAgent
from researchbot.agent.tools.websearch.errors import SearchError
from researchbot.config.loader import load_config
from researchbot.config.schema import Config
from researchbot.providers.errors import ProviderError

BANNER_WIDTH = 60

EPILOG = """\
Prerequisites:
  1. Install Ollama: https://ollama.ai
  2. Pull a model:   ollama pull llama3.2
  3. Start Ollama:   ollama serve

Examples:
  researchbot "What's new in async Python?"
  researchbot --quick "python web frameworks 2024"
  researchbot --model qwen2.5 "machine learning in Python"
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="researchbot",
        description=f"{__logo__} Search the web and summarize the findings with a local LLM.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("query", metavar="QUERY", help="Topic to research")
    parser.add_argument("-m", "--model", default=None, help="Ollama model to use (overrides OLLAMA_MODEL)")
    parser.add_argument(
        "-q",
        "--quick",
        action="store_true",
        help="Quick search mode: print search results without LLM synthesis",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Path to a JSON config file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool, level: str = "INFO") -> None:
    """Send logs to stderr so stdout carries only the result."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else level.upper())


def print_result(text: str) -> None:
    rule = "=" * BANNER_WIDTH
    print(f"\n{rule}")
    print("Research Results")
    print(f"{rule}\n")
    print(text)
    print(f"\n{rule}")


def print_failure(error: Exception) -> None:
    print(f"\nResearch failed: {error}", file=sys.stderr)
    hint = getattr(error, "hint", None)
    if hint:
        print(f"\nHint: {hint}", file=sys.stderr)


async def run(config: Config, query: str, *, quick: bool = False) -> str:
    agent = ResearchAgent.from_config(config)
    if quick:
        logger.info("Running quick search mode")
        return await agent.quick_search(query)
    logger.info("Running full research mode")
    return await agent.research(query)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config, ollama_model=args.model)
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return 1

    configure_logging(args.verbose, config.log_level)
    logger.info("Configuration loaded: model={} host={}", config.ollama_model, config.ollama_api_base_url)

    try:
        result = asyncio.run(run(config, args.query, quick=args.quick))
    except (SearchError, ProviderError) as e:
        logger.error("Research failed: {}", e)
        print_failure(e)
        return 1

    print_result(result)
    logger.info("Research completed successfully")
    return 0


def app() -> None:
    """Console script entry point."""
    sys.exit(main())
