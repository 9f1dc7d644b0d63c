"""DuckDuckGo HTML search: fetching, extraction and formatting."""

from researchbot.agent.tools.websearch.client import DuckDuckGoClient
from researchbot.agent.tools.websearch.errors import (
    NetworkError,
    NoResults,
    RateLimited,
    SearchError,
    SearchFailed,
)
from researchbot.agent.tools.websearch.extractor import extract, extract_domain
from researchbot.agent.tools.websearch.formatter import format_results, limit_results
from researchbot.agent.tools.websearch.models import SearchResult

__all__ = [
    "DuckDuckGoClient",
    "NetworkError",
    "NoResults",
    "RateLimited",
    "SearchError",
    "SearchFailed",
    "SearchResult",
    "extract",
    "extract_domain",
    "format_results",
    "limit_results",
]
