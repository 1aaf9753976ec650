"""Pydantic 스키마 정의

프론트엔드가 camelCase 키를 사용하므로 응답 모델은 camelCase alias로 직렬화합니다.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NormalizedItem(BaseModel):
    """모든 어댑터/범용 추출기가 만드는 공통 아이템"""
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, max_length=120, description="상품명")
    url: str = Field(..., description="절대 URL (http/https)")
    price: str = Field("", description="가격 원문 (없으면 빈 문자열)")
    image: str = Field("", description="이미지 URL (없으면 빈 문자열)")


class PageMeta(CamelModel):
    title: str = ""
    description: str = ""


class PageStats(CamelModel):
    char_count: int = 0
    word_count: int = 0
    link_count: int = 0
    image_count: int = 0
    heading_count: int = 0
    item_count: int = 0


class PageAnalysis(CamelModel):
    keywords: list[str] = Field(default_factory=list)


class FetchEnvelope(CamelModel):
    """/api/fetch 응답 (어댑터 경로/범용 추출 경로 공통)"""
    url: str
    keyword: Optional[str] = None
    meta: PageMeta = Field(default_factory=PageMeta)
    html: str = ""
    stats: PageStats = Field(default_factory=PageStats)
    analysis: PageAnalysis = Field(default_factory=PageAnalysis)
    items: list[NormalizedItem] = Field(default_factory=list)
    source: str = Field(..., description="사이트명 또는 generic")
    cached: bool = False


class CacheStatus(CamelModel):
    size: int
    max_size: int


class HealthResponse(CamelModel):
    """헬스 체크 응답"""
    status: str
    cache: CacheStatus
    uptime: float = Field(..., ge=0, description="프로세스 가동 시간 (초)")
    timestamp: datetime
    version: str


class CacheClearResponse(CamelModel):
    success: bool
    message: str


class ErrorResponse(CamelModel):
    error: str = Field(..., description="에러 코드")
    message: str
    details: Optional[dict] = None
