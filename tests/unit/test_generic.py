"""범용 페이지 추출기 단위 테스트"""

import logging

import pytest

from partscout.core.exceptions import NotFoundException, UpstreamStatusException
from partscout.crawlers.generic import (
    GenericExtractor,
    extract_page,
    sanitize_html,
    summarize_keywords,
)
from partscout.engine.cache import TTLCache

from conftest import FakeHttpClient

logger = logging.getLogger("partscout.test.generic")

PAGE_URL = "https://blog.example.com/posts/sensors"

PAGE_HTML = """
<html>
<head>
  <title>  Sensor Guide </title>
  <meta name="description" content="All about   oxygen sensors">
  <script>var tracking = "sensor sensor sensor";</script>
  <style>.x { color: red }</style>
</head>
<body class="site" onload="init()">
  <nav><a href="/">Home</a></nav>
  <main id="content" data-x="1">
    <h1>Oxygen sensors explained</h1>
    <p onclick="steal()">An oxygen sensor measures oxygen in exhaust. Sensor failure hurts mileage.</p>
    <div class="card"><a href="/parts/o2-upstream" onclick="x()">Upstream oxygen sensor</a></div>
    <a href="javascript:void(0)">Broken link text</a>
    <a href="/parts/o2-upstream">Duplicate link text</a>
    <img src="/img/o2.png" alt="o2" width="10">
    <noscript>Enable JS</noscript>
  </main>
</body>
</html>
"""


def test_extract_page_meta_and_stats():
    extraction = extract_page(PAGE_HTML, PAGE_URL)

    assert extraction.meta.title == "Sensor Guide"
    assert extraction.meta.description == "All about oxygen sensors"
    assert extraction.stats.heading_count == 1
    assert extraction.stats.image_count == 1
    assert extraction.stats.link_count == 3
    assert extraction.stats.word_count > 0
    assert extraction.stats.char_count > extraction.stats.word_count


def test_extract_page_removes_noise_and_unsafe_markup():
    html = extract_page(PAGE_HTML, PAGE_URL).html

    assert "<script" not in html
    assert "tracking" not in html
    assert "Enable JS" not in html
    assert "onclick" not in html
    assert "data-x" not in html
    assert "<div" not in html
    assert "<main" not in html
    assert "Upstream oxygen sensor" in html
    assert 'href="https://blog.example.com/parts/o2-upstream"' in html
    assert 'src="https://blog.example.com/img/o2.png"' in html
    # 본문 컨테이너 밖의 내비게이션은 제외
    assert "Home" not in html


def test_extract_page_anchor_items_are_normalized():
    items = extract_page(PAGE_HTML, PAGE_URL).items

    assert [i.url for i in items] == ["https://blog.example.com/parts/o2-upstream"]
    assert items[0].title == "Upstream oxygen sensor"


def test_keyword_summary_prefers_frequent_terms():
    keywords = summarize_keywords("Oxygen sensor. The oxygen sensor and the other sensor.")
    assert keywords[0] == "sensor"
    assert "oxygen" in keywords
    assert "the" not in keywords
    assert "and" not in keywords


def test_keyword_summary_handles_cjk_runs():
    assert "传感器" in summarize_keywords("氧 传感器 传感器")


def test_body_fallback_when_no_main_container():
    extraction = extract_page("<html><body><p>Just a paragraph here</p></body></html>", PAGE_URL)
    assert "Just a paragraph here" in extraction.html
    assert extraction.items == []


def test_sanitize_drops_unresolvable_links():
    html = sanitize_html('<p><a href="javascript:alert(1)">x</a></p>', PAGE_URL)
    assert "javascript" not in html
    assert "<a>x</a>" in html


def test_empty_page_is_best_effort():
    extraction = extract_page("<html><body></body></html>", PAGE_URL)
    assert extraction.html == ""
    assert extraction.keywords == []


def _extractor(settings, http: FakeHttpClient) -> GenericExtractor:
    return GenericExtractor(http, cache=TTLCache(10, 60_000), settings=settings, logger=logger)


@pytest.mark.asyncio
async def test_extractor_caches_by_url(settings):
    http = FakeHttpClient(lambda url: (200, PAGE_HTML))
    extractor = _extractor(settings, http)

    first = await extractor.extract(PAGE_URL)
    second = await extractor.extract(PAGE_URL)

    assert len(http.calls) == 1
    assert first.cached is False
    assert second.cached is True
    assert second.meta == first.meta


@pytest.mark.asyncio
async def test_extractor_maps_upstream_404_to_not_found(settings):
    http = FakeHttpClient(lambda url: (404, "missing"))
    extractor = _extractor(settings, http)

    with pytest.raises(NotFoundException):
        await extractor.extract(PAGE_URL)


@pytest.mark.asyncio
async def test_extractor_reraises_other_statuses_after_retries(settings):
    http = FakeHttpClient(lambda url: (500, "oops"))
    extractor = _extractor(settings, http)

    with pytest.raises(UpstreamStatusException):
        await extractor.extract(PAGE_URL)

    assert len(http.calls) == settings.retry_max_attempts
