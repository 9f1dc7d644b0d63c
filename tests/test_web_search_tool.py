import httpx
import pytest

from researchbot.agent.tools.registry import ToolRegistry
from researchbot.agent.tools.web import WebSearchTool
from researchbot.agent.tools.websearch.client import DuckDuckGoClient
from researchbot.agent.tools.websearch.errors import RateLimited
from researchbot.agent.tools.websearch.formatter import format_results, limit_results
from researchbot.agent.tools.websearch.models import SearchResult

PAGE = (
    "<html><body>"
    '<a href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fwww.python.org%2F&amp;rut=1">Python</a>'
    '<a class="result__url" href="//docs.python.org/3/">docs.python.org/3/</a>'
    "</body></html>"
)


def _patch_http(monkeypatch, response: httpx.Response) -> None:
    class StubClient:
        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def get(self, url, params=None, headers=None, timeout=None):
            return response

    monkeypatch.setattr("researchbot.agent.tools.websearch.client.httpx.AsyncClient", StubClient)


def _tool(max_results: int = 5) -> WebSearchTool:
    return WebSearchTool(
        max_results=max_results,
        client=DuckDuckGoClient(max_results=max_results, courtesy_delay=0),
    )


def test_schema_declares_single_required_query() -> None:
    schema = WebSearchTool().to_schema()

    assert schema["type"] == "function"
    assert schema["function"]["name"] == "web_search"
    params = schema["function"]["parameters"]
    assert params["required"] == ["query"]
    assert list(params["properties"]) == ["query"]
    assert params["properties"]["query"]["type"] == "string"


@pytest.mark.asyncio
async def test_web_search_formats_results(monkeypatch) -> None:
    _patch_http(monkeypatch, httpx.Response(200, text=PAGE))

    result = await _tool().execute(query="python")

    assert result == (
        "1. www.python.org\n"
        "   https://www.python.org/\n"
        "   Search result from DuckDuckGo\n"
        "\n"
        "2. docs.python.org\n"
        "   https://docs.python.org/3/\n"
        "   Search result\n"
    )


@pytest.mark.asyncio
async def test_web_search_empty_results(monkeypatch) -> None:
    _patch_http(monkeypatch, httpx.Response(200, text="<html><body></body></html>"))

    result = await _tool().execute(query="nothing")

    assert result == "No results found for: nothing"


@pytest.mark.asyncio
async def test_web_search_propagates_search_errors(monkeypatch) -> None:
    _patch_http(monkeypatch, httpx.Response(429))

    with pytest.raises(RateLimited):
        await _tool().execute(query="busy")


@pytest.mark.asyncio
async def test_registry_wraps_search_errors_as_text(monkeypatch) -> None:
    _patch_http(monkeypatch, httpx.Response(503))
    registry = ToolRegistry()
    registry.register(_tool())

    result = await registry.execute("web_search", {"query": "down"})

    assert result == "Error executing web_search: web search failed: HTTP 503"


@pytest.mark.asyncio
async def test_registry_rejects_missing_query() -> None:
    registry = ToolRegistry()
    registry.register(_tool())

    result = await registry.execute("web_search", {})

    assert result == "Error: Invalid parameters for tool 'web_search': missing required query"


def test_format_results_numbers_entries_from_one() -> None:
    results = [
        SearchResult(title="a.com", url="https://a.com/x", snippet="Search result"),
        SearchResult(title="b.com", url="https://b.com", snippet="Search result"),
    ]

    text = format_results(results, "q")

    assert text.startswith("1. a.com\n   https://a.com/x\n   Search result\n")
    assert "\n\n2. b.com\n   https://b.com\n   Search result\n" in text


def test_limit_results_truncates() -> None:
    results = [SearchResult(title=f"t{i}", url=f"https://t{i}.com", snippet="s") for i in range(4)]

    assert limit_results(results, 2) == results[:2]
    assert limit_results(results, 10) == results
    assert limit_results(results, 0) == []
