"""Playwright page 설정/보조 함수.

Page 생성 후 라우팅(리소스 차단), 헤더 설정 등 공통 설정을 분리합니다.
"""

from __future__ import annotations

from playwright.async_api import Page

from partscout.core.config import Settings

# 이미지 src는 DOM 속성에서 읽으므로 실제 다운로드는 필요 없음
_BLOCKED_RESOURCE_TYPES = {"image", "media", "font"}


async def configure_page(page: Page, settings: Settings) -> Page:
    page.set_default_timeout(settings.crawler_timeout_ms)

    async def _route_handler(route, request):
        if request.resource_type in _BLOCKED_RESOURCE_TYPES:
            await route.abort()
            return
        await route.continue_()

    await page.route("**/*", _route_handler)

    headers = settings.default_headers()
    # User-Agent는 컨텍스트에서 지정
    headers.pop("User-Agent", None)
    await page.set_extra_http_headers(headers)

    return page
