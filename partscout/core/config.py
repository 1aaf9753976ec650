"""설정 관리 - 환경 변수 로드 및 검증"""
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 서버
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"

    # 인메모리 캐시
    cache_ttl_ms: int = 30 * 60 * 1000  # 30분
    cache_max_size: int = 100

    # 재시도 (지수 백오프: base * 2^(attempt-1))
    retry_max_attempts: int = 3
    retry_base_delay_ms: int = 1000

    # 크롤러
    crawler_timeout_ms: int = 30000
    crawler_http_impersonate: str = "chrome110"
    crawler_http_max_clients: int = 20
    crawler_user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36"
    )
    crawler_accept: str = (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,image/apng,*/*;q=0.8"
    )
    crawler_accept_language: str = "en-US,en;q=0.9"

    # 브라우저가 필요한 사이트의 렌더링 방식
    # - playwright: 공유 Chromium에서 추출 스크립트 실행
    # - http: 같은 추출 스펙을 원본 HTML에 그대로 적용 (브라우저 없이 동작)
    crawler_render_backend: str = "playwright"
    crawler_headless: bool = True

    # 사전 수집된 스냅샷 JSON 루트
    data_dir: str = "data"

    # 정적 프론트엔드 디렉터리 (없으면 마운트하지 않음)
    static_dir: Optional[str] = None

    # 500 응답에 스택 트레이스 포함 여부 (진단용)
    expose_error_details: bool = False

    # API
    api_title: str = "자동차 부품 검색 데이터 서버"
    api_version: str = "1.0.0"
    api_description: str = "사이트별 어댑터로 검색 결과를 수집하고 캐시해 제공합니다."

    # 로깅
    log_level: str = "INFO"

    @field_validator("cache_ttl_ms", "cache_max_size", "crawler_timeout_ms")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache/crawler settings must be positive")
        return v

    @field_validator("retry_max_attempts")
    @classmethod
    def validate_retry_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("retry_max_attempts must be >= 1")
        return v

    @field_validator("retry_base_delay_ms")
    @classmethod
    def validate_retry_base_delay(cls, v: int) -> int:
        if v < 0:
            raise ValueError("retry_base_delay_ms must be >= 0")
        return v

    @field_validator("crawler_render_backend")
    @classmethod
    def validate_render_backend(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in ("playwright", "http"):
            raise ValueError("crawler_render_backend must be 'playwright' or 'http'")
        return v

    def default_headers(self) -> dict[str, str]:
        """실제 브라우저와 유사한 요청 헤더"""
        return {
            "User-Agent": self.crawler_user_agent,
            "Accept": self.crawler_accept,
            "Accept-Language": self.crawler_accept_language,
            "Upgrade-Insecure-Requests": "1",
        }

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """프로세스 시작 시 한 번만 읽습니다 (핫 리로드 없음)."""
    return Settings()
