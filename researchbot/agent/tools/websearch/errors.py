"""Errors raised by the DuckDuckGo search pipeline."""


class SearchError(Exception):
    """Base class for search failures."""

    hint: str | None = None


class NetworkError(SearchError):
    """Transport-level failure before any HTTP status was received."""

    hint = "Check your internet connection and try again."

    def __init__(self, reason: str):
        super().__init__(f"network error: {reason}")
        self.reason = reason


class RateLimited(SearchError):
    """The search provider answered 429 Too Many Requests."""

    hint = "DuckDuckGo is throttling requests; wait a minute before searching again."

    def __init__(self) -> None:
        super().__init__("rate limited by search provider, please wait")


class SearchFailed(SearchError):
    """The search provider answered with a non-success status."""

    def __init__(self, status: int):
        super().__init__(f"web search failed: HTTP {status}")
        self.status = status


class NoResults(SearchError):
    """No results for a query. Not raised by the default flow, which returns []."""

    def __init__(self, query: str):
        super().__init__(f"no results found for query: {query}")
        self.query = query
