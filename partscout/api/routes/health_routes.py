"""헬스 체크 / 캐시 관리 엔드포인트"""
from datetime import datetime

from fastapi import APIRouter, Depends

from partscout import __version__
from partscout.api.deps import get_context
from partscout.core.context import AppContext
from partscout.schemas.scrape_schema import CacheClearResponse, CacheStatus, HealthResponse

router = APIRouter(tags=["health"])


@router.get("/api/health", response_model=HealthResponse)
async def health_check(ctx: AppContext = Depends(get_context)):
    """
    헬스 체크 엔드포인트

    - 캐시 사용량/용량
    - 프로세스 가동 시간
    """
    return HealthResponse(
        status="ok",
        cache=CacheStatus(size=ctx.cache.size(), max_size=ctx.cache.max_size),
        uptime=ctx.uptime(),
        timestamp=datetime.now(),
        version=__version__,
    )


@router.post("/api/cache/clear", response_model=CacheClearResponse)
async def clear_cache(ctx: AppContext = Depends(get_context)):
    """캐시 전체 삭제"""
    ctx.cache.clear()
    ctx.logger.info("Cache cleared via API")
    return CacheClearResponse(success=True, message="Cache cleared")


@router.get("/")
async def root(ctx: AppContext = Depends(get_context)):
    """루트 엔드포인트"""
    return {
        "service": ctx.settings.api_title,
        "version": __version__,
        "docs": "/docs",
    }
