"""사이트 어댑터 공통 구현

사이트별 차이는 세 가지 능력으로만 표현합니다 (상속 대신 조합):
- build_url: 키워드 → 검색 요청 URL
- source: 요청 URL → RawRecord 목록 (JSON API / 브라우저 / 원본 HTML)
- site.base_url: 상대 URL 해석 기준

search()는 캐시 조회 → (미스 시) 재시도 실행기로 감싼 수집+정규화 → 캐시 저장 순서로 동작합니다.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Callable, Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from partscout.core.catalog import SiteConfig
from partscout.core.config import Settings
from partscout.core.exceptions import (
    BrowserException,
    InvalidInputException,
    NetworkTimeoutException,
    ParseMismatchException,
    UpstreamStatusException,
    UpstreamUnavailableException,
)
from partscout.core.logging import sanitize_for_log
from partscout.crawlers.extraction import (
    EXTRACT_RECORDS_JS,
    ExtractionScript,
    extract_records_from_html,
    records_from_payload,
)
from partscout.crawlers.http_client import SharedHttpClient
from partscout.crawlers.normalize import normalize_records
from partscout.crawlers.playwright import BrowserManager
from partscout.crawlers.result import RawRecord, SearchResult
from partscout.engine.cache import TTLCache
from partscout.engine.retry import RetryPolicy, retry


class RecordSource(Protocol):
    async def collect(self, url: str) -> list[RawRecord]: ...


class JsonApiSource:
    """JSON API 응답을 디코드해 알려진 구조에서 레코드를 꺼냅니다."""

    def __init__(
        self,
        http_client: SharedHttpClient,
        parse: Callable[[Any], list[RawRecord]],
        *,
        timeout_ms: int,
    ) -> None:
        self.http_client = http_client
        self.parse = parse
        self.timeout_ms = timeout_ms

    async def collect(self, url: str) -> list[RawRecord]:
        _, text = await self.http_client.get_text(
            url,
            timeout_s=self.timeout_ms / 1000.0,
            headers={"Accept": "application/json, text/plain, */*"},
        )
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseMismatchException(f"invalid JSON ({e.msg})") from e
        return self.parse(payload)


class HtmlSource:
    """원본 HTML에 추출 스펙을 in-process로 적용 (브라우저 없이)"""

    def __init__(self, http_client: SharedHttpClient, script: ExtractionScript, *, timeout_ms: int) -> None:
        self.http_client = http_client
        self.script = script
        self.timeout_ms = timeout_ms

    async def collect(self, url: str) -> list[RawRecord]:
        _, html = await self.http_client.get_text(url, timeout_s=self.timeout_ms / 1000.0)
        return extract_records_from_html(html, self.script)


class BrowserSource:
    """공유 브라우저 페이지에서 추출 스크립트를 원격 실행"""

    def __init__(
        self,
        browser: BrowserManager,
        script: ExtractionScript,
        *,
        timeout_ms: int,
        settle_ms: int = 0,
    ) -> None:
        self.browser = browser
        self.script = script
        self.timeout_ms = timeout_ms
        self.settle_ms = settle_ms

    async def collect(self, url: str) -> list[RawRecord]:
        async with self.browser.page() as page:
            try:
                response = await page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
            except PlaywrightTimeoutError as e:
                raise NetworkTimeoutException("page.goto", self.timeout_ms) from e
            except PlaywrightError as e:
                raise BrowserException(f"Navigation failed: {e}") from e

            if response is not None and not response.ok:
                raise UpstreamStatusException(url, response.status)

            if self.settle_ms > 0:
                await page.wait_for_timeout(self.settle_ms)

            try:
                payload = await page.evaluate(EXTRACT_RECORDS_JS, self.script.to_payload())
            except PlaywrightError as e:
                raise BrowserException(f"Extraction script failed: {e}") from e

        return records_from_payload(payload)


class SiteAdapter:
    """사이트 하나에 대한 검색 어댑터 (영속 상태 없음, 캐시는 공유)"""

    def __init__(
        self,
        site: SiteConfig,
        build_url: Callable[[str], str],
        source: RecordSource,
        *,
        cache: TTLCache,
        settings: Settings,
        logger: logging.Logger,
    ) -> None:
        self.site = site
        self.build_url = build_url
        self.source = source
        self.cache = cache
        self.settings = settings
        self.logger = logger

    def cache_key(self, keyword: str) -> str:
        return f"{self.site.id}:search:{keyword.strip().casefold()}"

    def matches(self, hostname: str) -> bool:
        return self.site.matches(hostname)

    async def search(self, keyword: str) -> SearchResult:
        if not keyword or not keyword.strip():
            raise InvalidInputException("keyword", "must not be empty")

        key = self.cache_key(keyword)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.info(f"{self.site.name} search served from cache: keyword='{sanitize_for_log(keyword)}'")
            return replace(cached, cached=True)

        url = self.build_url(keyword.strip())
        policy = RetryPolicy(
            max_attempts=self.settings.retry_max_attempts,
            base_delay_ms=self.settings.retry_base_delay_ms,
            context=f"{self.site.name} search",
        )

        async def _fetch_and_parse() -> SearchResult:
            records = await self.source.collect(url)
            items = normalize_records(records, self.site.base_url)
            return SearchResult(items=tuple(items), meta_title=self.site.name, source=self.site.name)

        result = await retry(
            _fetch_and_parse,
            policy,
            logger=self.logger,
            retry_on=(UpstreamUnavailableException,),
        )

        self.cache.set(key, result, self.settings.cache_ttl_ms)
        self.logger.info(f"{self.site.name} search completed: keyword='{sanitize_for_log(keyword)}', count={len(result.items)}")
        return result
