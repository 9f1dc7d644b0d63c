import pytest

from researchbot.agent.tools.websearch.extractor import (
    GENERIC_SNIPPET,
    REDIRECT_SNIPPET,
    extract,
    extract_domain,
)
from researchbot.agent.tools.websearch.formatter import format_results

DDG_PAGE = """<!DOCTYPE html>
<html>
<head>
  <link rel="stylesheet" href="https://duckduckgo.com/dist/s.css">
  <script src="https://cdn.example.net/app.js"></script>
</head>
<body>
  <div class="result results_links web-result">
    <h2 class="result__title">
      <a rel="nofollow" class="result__a"
         href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fwww.python.org%2Fdownloads%2F&amp;rut=abc">Download Python</a>
    </h2>
    <a class="result__url"
       href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fwww.python.org%2Fdownloads%2F&amp;rut=abc">www.python.org/downloads/</a>
  </div>
  <div class="result results_links web-result">
    <a rel="nofollow" class="result__a"
       href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fdocs.python.org%2F3%2F&amp;rut=def">Python Docs</a>
  </div>
</body>
</html>
"""

MIXED_PAGE = """<html><body>
<a class="result__a" href="//duckduckgo.com/l/?uddg=https%3A%2F%2Ffirst.example.com%2Fa&amp;rut=1">First</a>
<a class="result__url" href="//second.example.com/b">second.example.com/b</a>
<p>Also see https://third.example.com/c for details.</p>
</body></html>
"""


def test_redirect_links_are_decoded_in_document_order() -> None:
    results = extract(DDG_PAGE, 5)

    assert [r.url for r in results] == [
        "https://www.python.org/downloads/",
        "https://docs.python.org/3/",
    ]
    assert [r.title for r in results] == ["www.python.org", "docs.python.org"]
    assert all(r.snippet == REDIRECT_SNIPPET for r in results)


def test_single_redirect_parameter_in_plain_text() -> None:
    results = extract("...uddg=https%3A%2F%2Fexample.com%2Fpage&...", 5)

    assert len(results) == 1
    assert results[0].url == "https://example.com/page"
    assert results[0].title == "example.com"


def test_redirect_to_provider_or_non_http_target_is_rejected() -> None:
    html = (
        '<a href="/l/?uddg=https%3A%2F%2Fduckduckgo.com%2Fsettings&amp;x=1">settings</a>'
        '<a href="/l/?uddg=ftp%3A%2F%2Ffiles.example.org%2Fpub&amp;x=2">ftp</a>'
    )
    assert extract(html, 5) == []


def test_result_anchor_uses_own_href_or_next_href() -> None:
    html = """<div>
    <a class="result__url" href="//example.org/page">example.org/page</a>
    <span class="result__url">second.example.com</span>
    <a href="https://second.example.com/x">x</a>
    <a class="result__url" href="/relative/path">relative</a>
    </div>"""

    results = extract(html, 5)

    assert [r.url for r in results] == [
        "https://example.org/page",
        "https://second.example.com/x",
    ]
    assert all(r.snippet == GENERIC_SNIPPET for r in results)


def test_result_anchor_pointing_at_provider_is_skipped() -> None:
    html = '<a class="result__url" href="https://duckduckgo.com/about">about</a>'
    assert extract(html, 5) == []


def test_raw_url_scan_filters_infrastructure_and_implausible_hosts() -> None:
    html = (
        "<p>See https://rust-lang.org/learn and https://cdn.foo.com/lib "
        "https://a.b (https://tiny) https://improving.duckduckgo.com/t/x "
        "https://static.example.com/logo.png</p>"
    )

    results = extract(html, 10)

    assert [r.url for r in results] == ["https://rust-lang.org/learn"]
    assert results[0].title == "rust-lang.org"
    assert results[0].snippet == GENERIC_SNIPPET


def test_raw_url_scan_ignores_script_and_style_text() -> None:
    html = (
        '<script>var beacon = "https://tracker.example.com/collect";</script>'
        "<style>body { background: url(https://assets.example.com/bg); }</style>"
    )
    assert extract(html, 5) == []


def test_strategies_append_in_fixed_order() -> None:
    results = extract(MIXED_PAGE, 5)

    assert [r.url for r in results] == [
        "https://first.example.com/a",
        "https://second.example.com/b",
        "https://third.example.com/c",
    ]
    assert [r.snippet for r in results] == [REDIRECT_SNIPPET, GENERIC_SNIPPET, GENERIC_SNIPPET]


def test_quota_of_one_takes_earliest_strategy() -> None:
    results = extract(MIXED_PAGE, 1)

    assert len(results) == 1
    assert results[0].url == "https://first.example.com/a"


@pytest.mark.parametrize("max_results", [1, 2, 3, 4, 7, 20])
def test_never_exceeds_quota_and_never_repeats_url(max_results: int) -> None:
    links = "".join(
        f'<a href="/l/?uddg=https%3A%2F%2Fsite{i % 4}.example.com%2F&amp;r={i}">r</a>'
        f'<a class="result__url" href="//site{i % 6}.example.com/">u</a>'
        f"<p>https://site{i % 8}.example.com/</p>"
        for i in range(12)
    )

    results = extract(f"<html><body>{links}</body></html>", max_results)
    urls = [r.url for r in results]

    assert len(results) <= max_results
    assert len(urls) == len(set(urls))


def test_duplicate_urls_across_strategies_are_kept_once() -> None:
    html = (
        '<a href="/l/?uddg=https%3A%2F%2Fexample.com%2Fpage&amp;r=1">r</a>'
        '<a class="result__url" href="https://example.com/page">u</a>'
        "<p>https://example.com/page</p>"
    )

    results = extract(html, 5)

    assert [r.url for r in results] == ["https://example.com/page"]
    assert results[0].snippet == REDIRECT_SNIPPET


def test_url_match_is_case_sensitive() -> None:
    html = "<p>https://example.com/Page https://example.com/page</p>"

    results = extract(html, 5)

    assert [r.url for r in results] == ["https://example.com/Page", "https://example.com/page"]


def test_identical_input_gives_identical_output() -> None:
    assert extract(DDG_PAGE, 5) == extract(DDG_PAGE, 5)
    assert extract(DDG_PAGE.encode("utf-8"), 5) == extract(DDG_PAGE, 5)


def test_page_without_markers_yields_nothing() -> None:
    html = "<html><body><p>Nothing to see here.</p></body></html>"

    results = extract(html, 5)

    assert results == []
    assert format_results(results, "rust async") == "No results found for: rust async"


@pytest.mark.parametrize("html, max_results", [("", 5), (DDG_PAGE, 0), (DDG_PAGE, -1)])
def test_empty_input_or_zero_quota(html: str, max_results: int) -> None:
    assert extract(html, max_results) == []


def test_extract_domain() -> None:
    assert extract_domain("https://www.example.com/page") == "www.example.com"
    assert extract_domain("https://rust-lang.org/learn") == "rust-lang.org"
    assert extract_domain("https://example.com") == "example.com"
    assert extract_domain("not a url") is None


def test_raw_url_nested_in_another_url_is_scanned_too() -> None:
    html = "<p>Share https://share.example.com/s?u=https://target.example.org/page now</p>"

    results = extract(html, 5)

    assert [r.url for r in results] == [
        "https://share.example.com/s?u=https://target.example.org/page",
        "https://target.example.org/page",
    ]
    assert results[1].title == "target.example.org"


def test_urls_without_scheme_or_host_are_rejected() -> None:
    html = (
        '<a class="result__url" href="httpfoo">x</a>'
        '<a class="result__url" href="https://">y</a>'
        "<p>uddg=https%3A%2F%2F&amp;</p>"
    )

    assert extract(html, 5) == []


def test_every_result_has_a_host() -> None:
    results = extract(DDG_PAGE + MIXED_PAGE, 10)

    assert results
    assert all(r.url.startswith(("http://", "https://")) for r in results)
    assert all(extract_domain(r.url) == r.title for r in results)
