"""Web search tool."""

from typing import Any

from researchbot.agent.tools.base import Tool
from researchbot.agent.tools.websearch.client import DuckDuckGoClient
from researchbot.agent.tools.websearch.formatter import format_results, limit_results


class WebSearchTool(Tool):
    """Search the web with DuckDuckGo and return a numbered listing."""

    name = "web_search"
    description = (
        "Search the web using DuckDuckGo. Use this to find current information "
        "about any topic. Returns titles and URLs."
    )
    parameters = {
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "minLength": 1,
                "description": "The search query used to find information",
            },
        },
        "required": ["query"],
    }

    def __init__(self, max_results: int = 5, client: DuckDuckGoClient | None = None):
        self.max_results = max_results
        self.client = client or DuckDuckGoClient(max_results=max_results)

    async def execute(self, query: str, **kwargs: Any) -> str:
        results = await self.client.search(query)
        return format_results(limit_results(results, self.max_results), query)
