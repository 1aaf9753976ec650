"""Crawler Result Standard Format

어댑터 실행 결과의 표준 형식을 정의합니다.
"""

from dataclasses import dataclass, field

from partscout.schemas.scrape_schema import NormalizedItem


@dataclass(frozen=True)
class RawRecord:
    """정규화 전 레코드 (파서 또는 원격 추출 스크립트가 반환)

    Attributes:
        title: 제목 원문 (공백 정리 전)
        href: 링크 원문 (상대 경로일 수 있음)
        price: 가격 원문
        image: 이미지 src 원문
    """

    title: str
    href: str
    price: str = ""
    image: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "RawRecord":
        """브라우저에서 돌아온 plain data를 RawRecord로 변환"""
        return cls(
            title=str(data.get("title") or ""),
            href=str(data.get("href") or ""),
            price=str(data.get("price") or ""),
            image=str(data.get("image") or ""),
        )


@dataclass(frozen=True)
class SearchResult:
    """어댑터 검색 결과 (캐시 값으로 저장됨)

    Attributes:
        items: 정규화된 아이템 (최대 12개, URL 중복 없음)
        meta_title: 사이트 표시명
        source: 결과 출처 사이트명
        cached: 캐시 히트로 반환된 복사본이면 True
    """

    items: tuple[NormalizedItem, ...] = field(default_factory=tuple)
    meta_title: str = ""
    source: str = ""
    cached: bool = False
