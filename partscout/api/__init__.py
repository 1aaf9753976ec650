"""API 엔드포인트 패키지 - export only."""

from .routes import data_router, fetch_router, health_router

__all__ = ["health_router", "fetch_router", "data_router"]
