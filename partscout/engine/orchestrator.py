"""Fetch Orchestrator - /api/fetch 진입점

대상 URL의 호스트명으로 사이트 어댑터를 고르고, 매칭되지 않거나 키워드가 없으면
범용 추출기로 폴백합니다. 어떤 경로든 같은 FetchEnvelope 형식으로 반환합니다.

어댑터/추출기 내부에서 이미 재시도했으므로 이 레이어에서는 다시 재시도하지 않고
예외를 그대로 전파합니다.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from partscout.core.exceptions import InvalidInputException
from partscout.core.logging import sanitize_for_log
from partscout.crawlers.adapters import SiteAdapter
from partscout.crawlers.generic import GenericExtractor
from partscout.schemas.scrape_schema import FetchEnvelope, PageAnalysis, PageMeta, PageStats
from partscout.utils.url import ALLOWED_SCHEMES, extract_hostname

GENERIC_SOURCE = "generic"


class FetchOrchestrator:
    def __init__(
        self,
        adapters: Sequence[SiteAdapter],
        generic: GenericExtractor,
        logger: logging.Logger,
    ) -> None:
        self.adapters = list(adapters)
        self.generic = generic
        self.logger = logger

    def validate_url(self, target_url: Optional[str]) -> str:
        """http/https 절대 URL인지 검증 후 호스트명 반환

        Raises:
            InvalidInputException: 누락/스킴 불일치/호스트 없음
        """
        if not target_url or not target_url.strip():
            raise InvalidInputException("url", "url is required")

        url = target_url.strip()
        scheme = url.split(":", 1)[0].lower() if ":" in url else ""
        if scheme not in ALLOWED_SCHEMES:
            raise InvalidInputException("url", "only http and https URLs are allowed")

        hostname = extract_hostname(url)
        if not hostname:
            raise InvalidInputException("url", "url has no hostname")
        return hostname

    def match_adapter(self, hostname: str) -> Optional[SiteAdapter]:
        """정확히 하나의 어댑터가 매칭될 때만 반환"""
        matched = [a for a in self.adapters if a.matches(hostname)]
        if len(matched) == 1:
            return matched[0]
        if len(matched) > 1:
            self.logger.warning(f"Ambiguous adapter match for host={hostname}: {[a.site.id for a in matched]}")
        return None

    async def fetch_and_extract(self, target_url: Optional[str], keyword: Optional[str] = None) -> FetchEnvelope:
        hostname = self.validate_url(target_url)
        url = (target_url or "").strip()
        kw = (keyword or "").strip()

        adapter = self.match_adapter(hostname)
        self.logger.info(
            f"Fetching: host={hostname}, keyword='{sanitize_for_log(kw)}', "
            f"adapter={adapter.site.id if adapter else GENERIC_SOURCE}"
        )

        if adapter is not None and kw:
            result = await adapter.search(kw)
            return FetchEnvelope(
                url=url,
                keyword=kw,
                meta=PageMeta(title=result.meta_title, description=""),
                html="",
                stats=PageStats(item_count=len(result.items)),
                analysis=PageAnalysis(keywords=[kw]),
                items=list(result.items),
                source=result.source,
                cached=result.cached,
            )

        extraction = await self.generic.extract(url)
        return FetchEnvelope(
            url=url,
            keyword=kw or None,
            meta=extraction.meta,
            html=extraction.html,
            stats=extraction.stats,
            analysis=PageAnalysis(keywords=extraction.keywords),
            items=extraction.items,
            source=GENERIC_SOURCE,
            cached=extraction.cached,
        )
