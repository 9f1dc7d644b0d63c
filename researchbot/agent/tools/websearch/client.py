"""DuckDuckGo HTML search client."""

import asyncio

import httpx
from loguru import logger

from researchbot.agent.tools.websearch.errors import NetworkError, RateLimited, SearchFailed
from researchbot.agent.tools.websearch.extractor import extract
from researchbot.agent.tools.websearch.formatter import limit_results
from researchbot.agent.tools.websearch.models import SearchResult

DEFAULT_BASE_URL = "https://html.duckduckgo.com/html/"
USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
REQUEST_TIMEOUT_S = 30.0
COURTESY_DELAY_S = 0.5


class DuckDuckGoClient:
    """
    Scrape DuckDuckGo's HTML endpoint, which needs no API key.

    Every fetch waits a fixed courtesy delay first and makes exactly one
    request. Nothing is retried.
    """

    def __init__(
        self,
        max_results: int = 5,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_S,
        courtesy_delay: float = COURTESY_DELAY_S,
    ):
        self.max_results = max_results
        self.base_url = base_url
        self.timeout = timeout
        self.courtesy_delay = courtesy_delay

    async def search(self, query: str) -> list[SearchResult]:
        """Fetch the result page for a query and extract up to max_results hits."""
        logger.info("Performing web search: {}", query)

        html = await self.fetch(query)
        results = limit_results(extract(html, self.max_results), self.max_results)

        if results:
            logger.info("Search completed: {} results for {}", len(results), query)
        else:
            logger.warning("No search results found for: {}", query)
        return results

    async def fetch(self, query: str) -> str:
        """
        Return the raw HTML result page for a query.

        Raises:
            NetworkError: the request never got a response.
            RateLimited: the provider answered 429.
            SearchFailed: any other non-success status.
        """
        await asyncio.sleep(self.courtesy_delay)

        logger.debug("Fetching search results: {}?q={}", self.base_url, query)
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.base_url,
                    params={"q": query},
                    headers={"User-Agent": USER_AGENT},
                    timeout=self.timeout,
                )
        except httpx.RequestError as e:
            raise NetworkError(str(e) or type(e).__name__) from e

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise RateLimited()
        if not response.is_success:
            raise SearchFailed(response.status_code)
        return response.text
