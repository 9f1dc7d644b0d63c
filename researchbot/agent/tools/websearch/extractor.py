"""
Extract search results from a DuckDuckGo HTML result page.

DuckDuckGo offers no free web-search API and its markup changes without notice,
so results are pulled out by three independent strategies instead of one
structural parser:

1. redirect links carrying the real destination in a ``uddg=`` parameter
2. elements tagged with the ``result__url`` class
3. any literal ``https://`` URL left on the page

The strategies run in that order over a single tokenized view of the document
(attribute values and text nodes in document order). They share one seen-URL set
and one output list, and each stops as soon as the quota is met.
"""

import re
from collections.abc import Iterator
from urllib.parse import unquote

from bs4 import BeautifulSoup, NavigableString, Tag

from researchbot.agent.tools.websearch.models import SearchResult

PROVIDER_DOMAIN = "duckduckgo.com"
RESULT_URL_CLASS = "result__url"

REDIRECT_SNIPPET = "Search result from DuckDuckGo"
GENERIC_SNIPPET = "Search result"

_REDIRECT_RE = re.compile(r"uddg=([^&\"']*)")
# Zero-width match: an https:// nested inside another URL is its own candidate.
_RAW_URL_RE = re.compile(r"(?=https://([^\"'<>\s)]*))")

_RAW_URL_DENY_PREFIXES = ("duckduckgo", "improving.duckduckgo")
_RAW_URL_DENY_FRAGMENTS = ("cdn.", ".js", ".css", ".png", ".ico")
_RAW_URL_MIN_LENGTH = 6

# Text inside these elements is code, not page content.
_CODE_TAGS = frozenset({"script", "style"})


class _ResultSet:
    """Ordered results plus the URLs already taken, scoped to one extract() call."""

    def __init__(self, max_results: int):
        self.max_results = max_results
        self.results: list[SearchResult] = []
        self._seen: set[str] = set()

    @property
    def full(self) -> bool:
        return len(self.results) >= self.max_results

    def add(self, url: str, snippet: str) -> bool:
        host = extract_domain(url)
        if not host or url in self._seen:
            return False
        self._seen.add(url)
        self.results.append(
            SearchResult(
                title=host,
                url=url,
                snippet=snippet,
            )
        )
        return True


def extract(html: str | bytes, max_results: int) -> list[SearchResult]:
    """
    Extract up to ``max_results`` unique results from a result page.

    Never raises. Returns an empty list when nothing recognizable is found.
    Results keep discovery order: redirect links first, then result anchors,
    then raw URLs.
    """
    found = _ResultSet(max_results)
    if found.full or not html:
        return []

    soup = BeautifulSoup(html, "html.parser")

    _scan_redirects(_iter_tokens(soup), found)
    if not found.full:
        _scan_result_anchors(soup, found)
    if not found.full:
        _scan_raw_urls(_iter_tokens(soup, skip_code=True), found)

    return found.results[:max_results]


def extract_domain(url: str) -> str | None:
    """Return the host part of a URL: everything between the first // and the next /."""
    _, sep, rest = url.partition("//")
    if not sep:
        return None
    host = rest.split("/", 1)[0]
    return host or None


def _iter_tokens(soup: BeautifulSoup, *, skip_code: bool = False) -> Iterator[str]:
    """Yield attribute values and text nodes in document order."""
    for node in soup.descendants:
        if isinstance(node, Tag):
            for value in node.attrs.values():
                # Multi-valued attributes such as class arrive as lists.
                if isinstance(value, list):
                    value = " ".join(value)
                yield value
        elif isinstance(node, NavigableString):
            if skip_code and node.parent is not None and node.parent.name in _CODE_TAGS:
                continue
            yield str(node)


def _is_http_url(url: str) -> bool:
    return url.startswith(("http://", "https://"))


def _scan_redirects(tokens: Iterator[str], found: _ResultSet) -> None:
    for token in tokens:
        for match in _REDIRECT_RE.finditer(token):
            if found.full:
                return
            url = unquote(match.group(1))
            if _is_http_url(url) and PROVIDER_DOMAIN not in url:
                found.add(url, REDIRECT_SNIPPET)


def _scan_result_anchors(soup: BeautifulSoup, found: _ResultSet) -> None:
    for element in soup.find_all(class_=RESULT_URL_CLASS):
        if found.full:
            return
        href = _href_at_or_after(element)
        if not href:
            continue
        if href.startswith("//"):
            url = f"https:{href}"
        elif _is_http_url(href):
            url = href
        else:
            continue
        if PROVIDER_DOMAIN not in url:
            found.add(url, GENERIC_SNIPPET)


def _href_at_or_after(element: Tag) -> str | None:
    """Return the element's own href, or that of the next element carrying one."""
    href = element.get("href")
    if href is None:
        following = element.find_next(href=True)
        href = following.get("href") if following is not None else None
    if isinstance(href, list):
        href = " ".join(href)
    return href


def _scan_raw_urls(tokens: Iterator[str], found: _ResultSet) -> None:
    for token in tokens:
        for match in _RAW_URL_RE.finditer(token):
            if found.full:
                return
            host_path = match.group(1)
            if _is_plausible_host_path(host_path):
                found.add(f"https://{host_path}", GENERIC_SNIPPET)


def _is_plausible_host_path(host_path: str) -> bool:
    """Filter provider, tracking and static-asset URLs out of the raw scan."""
    if host_path.startswith(_RAW_URL_DENY_PREFIXES):
        return False
    if any(fragment in host_path for fragment in _RAW_URL_DENY_FRAGMENTS):
        return False
    return len(host_path) >= _RAW_URL_MIN_LENGTH and "." in host_path
