"""애플리케이션 컨텍스트 (명시적 의존성 주입)

캐시/로거/HTTP 클라이언트/브라우저를 모듈 전역이 아닌 하나의 객체로 묶어
앱 팩토리(또는 CLI)가 생성하고 수명을 관리합니다.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from partscout.core.config import Settings
from partscout.core.logging import get_logger, setup_logging
from partscout.crawlers.adapters import SiteAdapter, build_adapters
from partscout.crawlers.generic import GenericExtractor
from partscout.crawlers.http_client import SharedHttpClient
from partscout.crawlers.playwright import BrowserManager
from partscout.engine.cache import TTLCache
from partscout.engine.orchestrator import FetchOrchestrator
from partscout.repositories.snapshot_repository import SnapshotRepository


@dataclass
class AppContext:
    settings: Settings
    logger: logging.Logger
    cache: TTLCache
    http_client: SharedHttpClient
    browser: BrowserManager
    adapters: list[SiteAdapter]
    orchestrator: FetchOrchestrator
    snapshots: SnapshotRepository
    started_at: float = field(default_factory=time.monotonic)

    def uptime(self) -> float:
        return time.monotonic() - self.started_at

    def adapter_for(self, site_id: str) -> Optional[SiteAdapter]:
        return next((a for a in self.adapters if a.site.id == site_id), None)

    async def aclose(self) -> None:
        """공유 리소스 정리 (브라우저 → HTTP 세션 순)"""
        await self.browser.close()
        await self.http_client.close()


def build_context(
    settings: Settings,
    *,
    http_client: Optional[SharedHttpClient] = None,
    browser: Optional[BrowserManager] = None,
    cache: Optional[TTLCache] = None,
) -> AppContext:
    """기본 구성으로 컨텍스트 조립 (테스트에서는 http_client/browser/cache를 주입)"""
    logger = setup_logging(settings)

    if cache is None:
        cache = TTLCache(settings.cache_max_size, settings.cache_ttl_ms, logger=get_logger("cache"))
    if http_client is None:
        http_client = SharedHttpClient(settings, get_logger("http"))
    if browser is None:
        browser = BrowserManager(settings, get_logger("playwright"))

    adapters = build_adapters(
        settings,
        cache=cache,
        http_client=http_client,
        browser=browser,
        logger=get_logger("adapters"),
    )
    generic = GenericExtractor(
        http_client,
        cache=cache,
        settings=settings,
        logger=get_logger("generic"),
    )
    orchestrator = FetchOrchestrator(adapters, generic, get_logger("orchestrator"))
    snapshots = SnapshotRepository(settings.data_dir, get_logger("snapshots"))

    return AppContext(
        settings=settings,
        logger=logger,
        cache=cache,
        http_client=http_client,
        browser=browser,
        adapters=adapters,
        orchestrator=orchestrator,
        snapshots=snapshots,
    )
