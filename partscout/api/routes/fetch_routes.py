"""실시간 수집 엔드포인트

HTTP Layer는 Orchestrator로 요청을 위임하는 Translator 역할만 수행합니다.
예외 → 상태 코드 변환은 app 레벨 exception handler가 담당합니다.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from partscout.api.deps import get_context
from partscout.core.context import AppContext
from partscout.schemas.scrape_schema import ErrorResponse, FetchEnvelope

router = APIRouter(prefix="/api", tags=["fetch"])


@router.get(
    "/fetch",
    response_model=FetchEnvelope,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def fetch(
    url: Optional[str] = Query(None, max_length=2048, description="대상 페이지 URL (http/https)"),
    keyword: Optional[str] = Query(None, max_length=200, description="검색 키워드"),
    ctx: AppContext = Depends(get_context),
):
    """
    대상 URL이 등록된 사이트면 해당 어댑터로 키워드 검색,
    아니면(또는 키워드가 없으면) 범용 추출 결과를 반환합니다.

    - 400: url 누락/허용되지 않는 스킴
    - 502: 업스트림이 재시도 후에도 응답하지 않음
    """
    return await ctx.orchestrator.fetch_and_extract(url, keyword)
