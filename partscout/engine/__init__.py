"""Engine Layer - cache, retry and fetch orchestration

- TTLCache: 용량 제한 인메모리 캐시
- retry / RetryPolicy: 지수 백오프 재시도 실행기
- FetchOrchestrator: 어댑터/범용 추출기 선택 (partscout.engine.orchestrator)
"""

from .cache import CacheEntry, TTLCache
from .retry import RetryPolicy, retry

__all__ = [
    "CacheEntry",
    "TTLCache",
    "RetryPolicy",
    "retry",
]
