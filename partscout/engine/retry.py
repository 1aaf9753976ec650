"""재시도 실행기 (지수 백오프, 지터 없음)"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay_ms: int = 1000
    context: str = "operation"

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")

    def delay_for(self, attempt: int) -> float:
        """attempt(1부터) 실패 후 대기 시간(초)"""
        return self.base_delay_ms * (2 ** (attempt - 1)) / 1000.0


async def retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    logger: logging.Logger,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """operation을 최대 max_attempts회 순차 실행

    Args:
        operation: 인자 없는 async 작업 (호출마다 새 코루틴 생성)
        policy: 시도 횟수/기본 지연/로그 문맥
        retry_on: 재시도할 예외 타입. 그 외 예외는 즉시 전파됩니다.

    Returns:
        첫 성공 결과

    Raises:
        마지막 시도의 예외를 감싸지 않고 그대로 전파
    """
    ctx = policy.context
    for attempt in range(1, policy.max_attempts + 1):
        try:
            logger.debug(f"{ctx} attempt {attempt}/{policy.max_attempts}")
            return await operation()
        except retry_on as e:
            logger.warning(
                f"{ctx} attempt {attempt}/{policy.max_attempts} failed: {type(e).__name__}: {e}"
            )
            if attempt == policy.max_attempts:
                logger.error(f"{ctx} failed after {policy.max_attempts} attempts: {e}")
                raise

            wait_s = policy.delay_for(attempt)
            logger.debug(f"{ctx} waiting {wait_s * 1000:.0f}ms before retry")
            await sleep(wait_s)

    # max_attempts >= 1 이므로 도달하지 않음
    raise RuntimeError(f"{ctx}: retry loop exited without result")
