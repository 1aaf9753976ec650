"""Playwright 공용 브라우저/컨텍스트 관리.

프로세스당 브라우저 하나를 lazy-launch 해서 재사용합니다 (풀링 없음).
동시 호출은 같은 브라우저에서 각자 페이지를 열고, 페이지는 성공/실패와 무관하게 항상 닫힙니다.
"""

from __future__ import annotations

import asyncio
import logging
import platform
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from partscout.core.config import Settings
from partscout.core.exceptions import BrowserException

from .pages import configure_page


def build_launch_args() -> list[str]:
    args: list[str] = [
        "--disable-dev-shm-usage",
        "--disable-gpu",
        "--disable-accelerated-2d-canvas",
        "--disable-background-networking",
        "--disable-default-apps",
        "--disable-extensions",
        "--no-first-run",
        "--no-default-browser-check",
        "--window-size=1920,1080",
    ]

    if platform.system().lower() == "linux":
        args.extend(["--no-sandbox", "--disable-setuid-sandbox"])

    return args


class BrowserManager:
    def __init__(self, settings: Settings, logger: logging.Logger) -> None:
        self._settings = settings
        self._logger = logger
        self._lock = asyncio.Lock()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def _ensure_context(self) -> BrowserContext:
        async with self._lock:
            if self._browser is not None and self._context is not None:
                if self._browser.is_connected():
                    return self._context
                self._logger.warning("[Playwright] Browser disconnected, relaunching")

            await self._teardown()

            try:
                self._logger.info("[Playwright] Launching browser...")
                pw = await asyncio.wait_for(async_playwright().start(), timeout=20.0)
                self._playwright = pw
                browser = await asyncio.wait_for(
                    pw.chromium.launch(
                        headless=self._settings.crawler_headless,
                        args=build_launch_args(),
                        timeout=self._settings.crawler_timeout_ms,
                    ),
                    timeout=25.0,
                )
                self._browser = browser
                self._context = await browser.new_context(
                    user_agent=self._settings.crawler_user_agent,
                    locale="en-US",
                    viewport={"width": 1920, "height": 1080},
                )
            except Exception as e:
                self._logger.error(f"[Playwright] Failed to launch browser: {type(e).__name__}: {e}")
                await self._teardown()
                raise BrowserException(f"Browser launch failed: {type(e).__name__}: {e}") from e

            self._logger.info("[Playwright] Browser launched successfully (shared)")
            return self._context

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """설정된 새 페이지를 열고, 블록을 벗어나면 항상 닫습니다."""
        context = await self._ensure_context()
        try:
            page = await context.new_page()
        except PlaywrightError as e:
            self._logger.warning(f"[Playwright] new_page failed: {type(e).__name__}: {e}")
            raise BrowserException(f"Failed to open page: {e}") from e

        try:
            try:
                await configure_page(page, self._settings)
            except PlaywrightError as e:
                raise BrowserException(f"Failed to configure page: {e}") from e
            yield page
        finally:
            try:
                await page.close()
            except Exception as e:
                self._logger.debug(f"[Playwright] page.close failed: {type(e).__name__}: {e}")

    async def _teardown(self) -> None:
        if self._context is not None:
            try:
                await self._context.close()
            except Exception as e:
                self._logger.debug(f"[Playwright] context.close failed: {e}")
            self._context = None
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                self._logger.debug(f"[Playwright] browser.close failed: {e}")
            self._browser = None
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                self._logger.debug(f"[Playwright] playwright.stop failed: {e}")
            self._playwright = None

    async def close(self) -> None:
        async with self._lock:
            if self._browser is None and self._playwright is None:
                return
            await self._teardown()
            self._logger.info("[Playwright] Browser closed")
