"""인메모리 TTL 캐시

- 엔트리별 절대 만료 시각(ms)을 기록합니다.
- 용량이 가득 찬 상태에서 새 키가 들어오면 만료 시각이 가장 이른 엔트리 하나를 제거합니다.
  (삽입 순서/LRU가 아니라 만료 시각 기준)
- 만료는 조회 시점에만 확인합니다 (백그라운드 정리 없음).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class CacheEntry:
    key: str
    value: Any
    expires_at_ms: int


class TTLCache:
    """용량 제한 TTL 캐시 (단일 이벤트 루프에서만 접근하므로 락 없음)"""

    def __init__(
        self,
        max_size: int,
        default_ttl_ms: int,
        *,
        clock: Callable[[], int] = _now_ms,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self.default_ttl_ms = default_ttl_ms
        self._clock = clock
        self._logger = logger or logging.getLogger("partscout.cache")
        self._entries: dict[str, CacheEntry] = {}

    def set(self, key: str, value: Any, ttl_ms: Optional[int] = None) -> None:
        ttl = self.default_ttl_ms if ttl_ms is None else ttl_ms
        if key not in self._entries and len(self._entries) >= self.max_size:
            self._evict_oldest()
        self._entries[key] = CacheEntry(key, value, self._clock() + ttl)
        self._logger.debug(f"Cache set: key={key}, ttl={ttl}ms")

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default

        if self._clock() > entry.expires_at_ms:
            del self._entries[key]
            self._logger.debug(f"Cache expired: key={key}")
            return default

        self._logger.debug(f"Cache hit: key={key}")
        return entry.value

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
        self._logger.info("Cache cleared")

    def size(self) -> int:
        """저장된 엔트리 수 (아직 확인되지 않은 만료 엔트리 포함)"""
        return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def _evict_oldest(self) -> None:
        if not self._entries:
            return
        oldest = min(self._entries.values(), key=lambda e: e.expires_at_ms)
        del self._entries[oldest.key]
        self._logger.debug(f"Cache evicted: key={oldest.key}")
