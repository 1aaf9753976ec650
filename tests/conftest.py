"""전역 테스트 설정

역할:
- 테스트용 Settings (재시도 지연 0, http 렌더링 백엔드, 임시 data_dir)
- 공통 Fake 주입 (HTTP 클라이언트/브라우저/시계), 실제 네트워크 호출 없음
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

import pytest

from partscout.core.config import Settings
from partscout.core.context import AppContext, build_context
from partscout.core.exceptions import UpstreamStatusException


Response = Union[tuple[int, str], BaseException]


class FakeHttpClient:
    """SharedHttpClient 대역

    responder(url)가 (status, text) 또는 예외를 반환합니다.
    실제 클라이언트처럼 2xx가 아니면 UpstreamStatusException을 던집니다.
    """

    def __init__(self, responder: Callable[[str], Response]):
        self.responder = responder
        self.calls: list[str] = []
        self.closed = False

    async def get_text(self, url: str, *, timeout_s: float, headers: Optional[dict] = None) -> tuple[int, str]:
        self.calls.append(url)
        res = self.responder(url)
        if isinstance(res, BaseException):
            raise res
        status, text = res
        if not 200 <= status < 300:
            raise UpstreamStatusException(url, status)
        return status, text

    async def close(self) -> None:
        self.closed = True


@dataclass
class FakeResponse:
    status: int = 200

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class FakePage:
    """Playwright Page 대역 (BrowserSource/BrowserManager가 쓰는 메서드만)"""

    status: int = 200
    payload: Any = field(default_factory=list)
    goto_error: Optional[BaseException] = None
    visited: list[str] = field(default_factory=list)
    waited: list[int] = field(default_factory=list)
    evaluated: list[tuple[str, Any]] = field(default_factory=list)
    closed: bool = False

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    async def route(self, pattern: str, handler) -> None:
        self.route_pattern = pattern

    async def set_extra_http_headers(self, headers: dict) -> None:
        self.extra_headers = headers

    async def goto(self, url: str, wait_until: str = "load", timeout: Optional[float] = None):
        self.visited.append(url)
        if self.goto_error is not None:
            raise self.goto_error
        return FakeResponse(self.status)

    async def wait_for_timeout(self, ms: int) -> None:
        self.waited.append(ms)

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.evaluated.append((expression, arg))
        return self.payload

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    """BrowserManager 대역 - 호출마다 page_factory()로 새 페이지"""

    def __init__(self, page_factory: Callable[[], FakePage] = FakePage):
        self.page_factory = page_factory
        self.pages: list[FakePage] = []
        self.closed = False

    @asynccontextmanager
    async def page(self):
        page = self.page_factory()
        self.pages.append(page)
        try:
            yield page
        finally:
            await page.close()

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """밀리초 단위 수동 시계"""

    def __init__(self, now_ms: int = 1_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


def searchspring_payload(count: int, *, duplicate_first: bool = False) -> str:
    results = [
        {
            "name": f"Oxygen Sensor  #{i}",
            "url": f"/products/oxygen-sensor-{i}",
            "price": f"{20 + i}.99",
            "thumbnailImageUrl": f"https://cdn.sixityauto.com/img/{i}.jpg",
        }
        for i in range(1, count + 1)
    ]
    if duplicate_first and results:
        results.append(dict(results[0], name="Duplicate"))
    return json.dumps({"pagination": {"totalResults": len(results)}, "results": results})


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        retry_max_attempts=3,
        retry_base_delay_ms=0,
        crawler_render_backend="http",
        data_dir=str(tmp_path / "data"),
        log_level="DEBUG",
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_context(settings) -> Callable[..., AppContext]:
    """responder로 FakeHttpClient를 만들어 컨텍스트 조립"""

    def _make(
        responder: Callable[[str], Response],
        *,
        browser: Optional[FakeBrowser] = None,
        app_settings: Optional[Settings] = None,
    ) -> AppContext:
        return build_context(
            app_settings or settings,
            http_client=FakeHttpClient(responder),
            browser=browser or FakeBrowser(),
        )

    return _make
