"""사이트 어댑터 조립.

공개 API는 이 파일에서만 export합니다.
"""

from __future__ import annotations

import logging
from types import ModuleType

from partscout.core.catalog import SITES_BY_ID
from partscout.core.config import Settings
from partscout.core.logging import get_logger
from partscout.crawlers.http_client import SharedHttpClient
from partscout.crawlers.playwright import BrowserManager
from partscout.engine.cache import TTLCache

from . import a_premium, autodoc, dorman, sixity
from .base import BrowserSource, HtmlSource, JsonApiSource, RecordSource, SiteAdapter

_SCRIPTED_SITES: tuple[ModuleType, ...] = (a_premium, dorman, autodoc)


def _scripted_source(
    module: ModuleType,
    settings: Settings,
    http_client: SharedHttpClient,
    browser: BrowserManager,
) -> RecordSource:
    timeout_ms = getattr(module, "TIMEOUT_MS", settings.crawler_timeout_ms)
    if settings.crawler_render_backend == "http":
        return HtmlSource(http_client, module.SCRIPT, timeout_ms=timeout_ms)
    return BrowserSource(browser, module.SCRIPT, timeout_ms=timeout_ms, settle_ms=module.SETTLE_MS)


def build_adapters(
    settings: Settings,
    *,
    cache: TTLCache,
    http_client: SharedHttpClient,
    browser: BrowserManager,
    logger: logging.Logger | None = None,
) -> list[SiteAdapter]:
    """카탈로그 순서대로 어댑터 생성"""
    log = logger or get_logger("adapters")
    adapters: list[SiteAdapter] = []

    for module in _SCRIPTED_SITES:
        adapters.append(
            SiteAdapter(
                SITES_BY_ID[module.SITE_ID],
                module.build_url,
                _scripted_source(module, settings, http_client, browser),
                cache=cache,
                settings=settings,
                logger=log,
            )
        )

    adapters.insert(
        1,
        SiteAdapter(
            SITES_BY_ID[sixity.SITE_ID],
            sixity.build_url,
            JsonApiSource(http_client, sixity.parse_results, timeout_ms=settings.crawler_timeout_ms),
            cache=cache,
            settings=settings,
            logger=log,
        ),
    )
    return adapters


__all__ = [
    "SiteAdapter",
    "JsonApiSource",
    "HtmlSource",
    "BrowserSource",
    "RecordSource",
    "build_adapters",
]
