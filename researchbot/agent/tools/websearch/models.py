"""Shared web search models."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Normalized search result item."""

    title: str
    url: str
    snippet: str
