"""사전 수집된 스냅샷 제공 엔드포인트"""
from typing import Optional

from fastapi import APIRouter, Depends

from partscout.api.deps import get_context
from partscout.core.context import AppContext
from partscout.core.exceptions import InvalidInputException
from partscout.schemas.scrape_schema import ErrorResponse

router = APIRouter(prefix="/api", tags=["data"])


@router.get("/data", responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
async def get_snapshot(
    site: Optional[str] = None,
    keyword: Optional[str] = None,
    ctx: AppContext = Depends(get_context),
):
    """사이트+키워드 스냅샷 JSON을 그대로 반환 (없으면 404)"""
    if not site or not keyword:
        raise InvalidInputException("site/keyword", "both site and keyword are required")
    return ctx.snapshots.load(site, keyword)


@router.get("/data/list")
async def list_snapshots(ctx: AppContext = Depends(get_context)):
    """사이트별 수집된 키워드 목록과 키워드 카탈로그"""
    return ctx.snapshots.list_available()
