"""범용 페이지 추출기 (등록된 사이트가 아니거나 키워드가 없을 때)

원본 페이지에서 잡음 태그를 제거하고, 본문 컨테이너를 고른 뒤 허용 목록 기준으로 정리합니다.
통계/키워드 요약/앵커 아이템은 모두 best-effort 입니다.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field, replace

from selectolax.parser import HTMLParser, Node

from partscout.core.config import Settings
from partscout.core.exceptions import NotFoundException, UpstreamStatusException, UpstreamUnavailableException
from partscout.crawlers.http_client import SharedHttpClient
from partscout.crawlers.normalize import normalize_records
from partscout.crawlers.result import RawRecord
from partscout.engine.cache import TTLCache
from partscout.engine.retry import RetryPolicy, retry
from partscout.schemas.scrape_schema import NormalizedItem, PageMeta, PageStats
from partscout.utils.text import collapse_whitespace
from partscout.utils.url import resolve_url

NOISE_TAGS = ["script", "style", "noscript", "iframe"]

MAIN_CONTENT_SELECTORS = (
    "main",
    "article",
    '[role="main"]',
    "#content",
    ".content",
    "#main",
    ".main",
)

ALLOWED_TAGS = frozenset({
    "p", "br", "hr", "a", "img",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li", "dl", "dt", "dd",
    "strong", "em", "b", "i", "u", "small", "sub", "sup",
    "blockquote", "pre", "code",
    "table", "thead", "tbody", "tfoot", "tr", "th", "td", "caption",
    "figure", "figcaption",
})

ALLOWED_ATTRIBUTES: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "title"}),
    "img": frozenset({"src", "alt", "title"}),
}

_URL_ATTRIBUTES = frozenset({"href", "src"})
_STRUCTURAL_TAGS = frozenset({"html", "head", "body"})

STOP_WORDS = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "any", "can", "had", "her",
    "was", "one", "our", "out", "has", "have", "his", "how", "its", "may", "new", "now",
    "old", "see", "two", "way", "who", "did", "get", "let", "put", "say", "she", "too",
    "use", "with", "this", "that", "from", "they", "will", "would", "there", "their",
    "what", "about", "which", "when", "your", "more", "been", "were", "than", "then",
    "them", "these", "some", "into", "only", "other", "also", "just", "like", "over",
    "such", "here", "each", "most", "very", "where", "after", "should", "could",
})

_EN_TOKEN_RE = re.compile(r"[a-z]{3,}")
_CJK_TOKEN_RE = re.compile(r"[\u4e00-\u9fff]{2,}")

MAX_KEYWORDS = 10
MIN_ANCHOR_TEXT = 4


@dataclass
class PageExtraction:
    meta: PageMeta
    html: str
    stats: PageStats
    keywords: list[str] = field(default_factory=list)
    items: list[NormalizedItem] = field(default_factory=list)
    cached: bool = False


def _meta_content(tree: HTMLParser, selector: str) -> str:
    node = tree.css_first(selector)
    if node is None:
        return ""
    return collapse_whitespace(node.attributes.get("content") or "")


def extract_meta(tree: HTMLParser) -> PageMeta:
    title_node = tree.css_first("title")
    title = collapse_whitespace(title_node.text()) if title_node is not None else ""
    description = (
        _meta_content(tree, 'meta[name="description"]')
        or _meta_content(tree, 'meta[property="og:description"]')
    )
    return PageMeta(title=title, description=description)


def select_main_content(tree: HTMLParser) -> Node | None:
    """본문 컨테이너 선택 (텍스트가 있는 첫 매칭, 없으면 body)"""
    for sel in MAIN_CONTENT_SELECTORS:
        node = tree.css_first(sel)
        if node is not None and collapse_whitespace(node.text(separator=" ")):
            return node
    return tree.body


def _inner_html(node: Node) -> str:
    html = node.html or ""
    open_tag = f"<{node.tag}>"
    close_tag = f"</{node.tag}>"
    if html.startswith(open_tag) and html.endswith(close_tag):
        return html[len(open_tag):-len(close_tag)]
    return html


def sanitize_html(fragment: str, base_url: str) -> str:
    """허용 태그/속성만 남깁니다. 허용되지 않은 태그는 벗겨내고 텍스트는 유지합니다."""
    if not fragment:
        return ""

    tree = HTMLParser(fragment)
    body = tree.body
    if body is None:
        return ""

    for name in list(body.attributes):
        del body.attrs[name]

    for node in body.css("*"):
        if node.tag in _STRUCTURAL_TAGS:
            continue
        if node.tag not in ALLOWED_TAGS:
            node.unwrap()
            continue

        allowed = ALLOWED_ATTRIBUTES.get(node.tag, frozenset())
        for name, value in list(node.attributes.items()):
            if name not in allowed:
                del node.attrs[name]
            elif name in _URL_ATTRIBUTES:
                resolved = resolve_url(value or "", base_url)
                if resolved:
                    node.attrs[name] = resolved
                else:
                    del node.attrs[name]

    return _inner_html(body).strip()


def compute_stats(node: Node | None, text: str) -> PageStats:
    if node is None:
        return PageStats()
    return PageStats(
        char_count=len(text),
        word_count=len(text.split()),
        link_count=len(node.css("a")),
        image_count=len(node.css("img")),
        heading_count=len(node.css("h1, h2, h3, h4, h5, h6")),
    )


def summarize_keywords(text: str, limit: int = MAX_KEYWORDS) -> list[str]:
    """빈도 상위 토큰 (영문 3자 이상 불용어 제외 + 한자 2자 이상 연속)"""
    if not text:
        return []
    counts: Counter[str] = Counter()
    for token in _EN_TOKEN_RE.findall(text.lower()):
        if token not in STOP_WORDS:
            counts[token] += 1
    counts.update(_CJK_TOKEN_RE.findall(text))
    return [word for word, _ in counts.most_common(limit)]


def extract_anchor_items(node: Node | None, base_url: str) -> list[NormalizedItem]:
    if node is None:
        return []
    records: list[RawRecord] = []
    for a in node.css("a[href]"):
        text = collapse_whitespace(a.text(separator=" "))
        if len(text) < MIN_ANCHOR_TEXT:
            continue
        records.append(RawRecord(title=text, href=a.attributes.get("href") or ""))
    return normalize_records(records, base_url)


def extract_page(html: str, url: str) -> PageExtraction:
    """원본 HTML → 메타/정리된 본문/통계/키워드/아이템"""
    tree = HTMLParser(html or "")
    meta = extract_meta(tree)

    tree.strip_tags(NOISE_TAGS)
    main = select_main_content(tree)
    text = collapse_whitespace(main.text(separator=" ")) if main is not None else ""

    items = extract_anchor_items(main, url)
    stats = compute_stats(main, text)
    stats.item_count = len(items)

    return PageExtraction(
        meta=meta,
        html=sanitize_html(main.html or "", url) if main is not None else "",
        stats=stats,
        keywords=summarize_keywords(text),
        items=items,
    )


class GenericExtractor:
    """원본 페이지를 가져와 extract_page를 적용 (재시도 + 캐시)"""

    def __init__(
        self,
        http_client: SharedHttpClient,
        *,
        cache: TTLCache,
        settings: Settings,
        logger: logging.Logger,
    ) -> None:
        self.http_client = http_client
        self.cache = cache
        self.settings = settings
        self.logger = logger

    async def extract(self, url: str) -> PageExtraction:
        key = f"generic:{url}"
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.info("Generic extraction served from cache")
            return replace(cached, cached=True)

        policy = RetryPolicy(
            max_attempts=self.settings.retry_max_attempts,
            base_delay_ms=self.settings.retry_base_delay_ms,
            context="Generic fetch",
        )

        async def _fetch() -> str:
            _, html = await self.http_client.get_text(
                url, timeout_s=self.settings.crawler_timeout_ms / 1000.0
            )
            return html

        try:
            html = await retry(_fetch, policy, logger=self.logger, retry_on=(UpstreamUnavailableException,))
        except UpstreamStatusException as e:
            if e.status == 404:
                raise NotFoundException("Page not found", details={"url": url}) from e
            raise

        extraction = extract_page(html, url)
        self.cache.set(key, extraction, self.settings.cache_ttl_ms)
        self.logger.info(
            f"Generic extraction completed: items={len(extraction.items)}, words={extraction.stats.word_count}"
        )
        return extraction
