"""공유 HTTP 클라이언트 (curl_cffi)

- 요청마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커서 프로세스 단위로 세션을 재사용합니다.
- 네트워크 오류/타임아웃/2xx가 아닌 상태는 UpstreamUnavailable 계열 예외로 올립니다 (재시도 대상).
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from curl_cffi.requests import AsyncSession

from partscout.core.config import Settings
from partscout.core.exceptions import (
    NetworkTimeoutException,
    UpstreamStatusException,
    UpstreamUnavailableException,
)


class SharedHttpClient:
    def __init__(self, settings: Settings, logger: logging.Logger) -> None:
        self._settings = settings
        self._logger = logger
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                impersonate=self._settings.crawler_http_impersonate,
                headers=self._settings.default_headers(),
                allow_redirects=True,
                max_clients=self._settings.crawler_http_max_clients,
                trust_env=False,
            )
            return self._session

    async def get_text(
        self,
        url: str,
        *,
        timeout_s: float,
        headers: Optional[Dict[str, str]] = None,
    ) -> tuple[int, str]:
        """GET 요청 후 (status, text) 반환

        Raises:
            NetworkTimeoutException: 타임아웃
            UpstreamStatusException: 2xx가 아닌 응답
            UpstreamUnavailableException: 그 외 네트워크 오류
        """
        sess = await self._ensure_session()
        url_display = url if len(url) <= 120 else url[:120] + "..."
        self._logger.info(f"[HTTP_CLIENT] GET {url_display} (timeout={timeout_s:.1f}s)")
        try:
            resp = await sess.get(
                url,
                headers=headers,
                timeout=timeout_s,
                allow_redirects=True,
            )
        except Exception as e:
            self._logger.info(f"[HTTP_CLIENT] GET failed: {type(e).__name__}: {repr(e)}")
            if "timeout" in type(e).__name__.lower() or "timed out" in str(e).lower():
                raise NetworkTimeoutException(url_display, int(timeout_s * 1000)) from e
            raise UpstreamUnavailableException(
                f"Request failed: {type(e).__name__}",
                details={"url": url, "error": str(e)},
            ) from e

        status = getattr(resp, "status_code", 0) or 0
        text = getattr(resp, "text", "") or ""
        if not 200 <= status < 300:
            self._logger.info(f"[HTTP_CLIENT] Non-2xx status: {status}")
            raise UpstreamStatusException(url, status)
        self._logger.debug(f"[HTTP_CLIENT] OK (status={status}, len={len(text)})")
        return status, text

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                self._logger.warning(f"[HTTP_CLIENT] close failed: {type(e).__name__}: {e}")
            self._session = None
