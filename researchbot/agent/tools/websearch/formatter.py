"""Render search results as plain text for people and models."""

from collections.abc import Sequence

from researchbot.agent.tools.websearch.models import SearchResult


def limit_results(results: Sequence[SearchResult], max_results: int) -> list[SearchResult]:
    """Truncate to at most ``max_results`` entries."""
    return list(results[: max(max_results, 0)])


def format_results(results: Sequence[SearchResult], query: str) -> str:
    """Render a numbered listing, one blank line between entries."""
    if not results:
        return f"No results found for: {query}"

    return "\n".join(
        f"{i}. {item.title}\n   {item.url}\n   {item.snippet}\n"
        for i, item in enumerate(results, 1)
    )
