"""FastAPI 앱 팩토리"""
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from partscout.api import data_router, fetch_router, health_router
from partscout.core.config import Settings, get_settings
from partscout.core.context import AppContext, build_context
from partscout.core.exceptions import PartScoutException
from partscout.core.logging import sanitize_for_log
from partscout.schemas.scrape_schema import ErrorResponse


def _error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: Optional[dict] = None,
) -> JSONResponse:
    body = ErrorResponse(error=error_code, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI, ctx: AppContext) -> None:
    """예외 계층 → HTTP 상태 코드 변환 (상세 정보는 진단 모드에서만)"""

    @app.exception_handler(PartScoutException)
    async def handle_partscout_exception(request: Request, exc: PartScoutException):
        level = ctx.logger.error if exc.status_code >= 500 else ctx.logger.warning
        level(f"[API] {request.method} {request.url.path} failed: {exc}")
        details = exc.details if ctx.settings.expose_error_details else None
        return _error_response(exc.status_code, exc.error_code, exc.message, details)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        # 쿼리 파라미터 형식 오류도 400 INVALID_INPUT (입력값은 응답에 싣지 않음)
        errors = [
            {"field": str(err.get("loc", ("",))[-1]), "reason": err.get("msg", "invalid value")}
            for err in exc.errors()
        ]
        first = errors[0] if errors else {"field": "request", "reason": "invalid value"}
        field, reason = first["field"], first["reason"]
        ctx.logger.warning(f"[API] {request.method} {request.url.path} rejected: field={field}, reason={reason}")
        details = {"errors": errors} if ctx.settings.expose_error_details else None
        return _error_response(400, "INVALID_INPUT", f"Invalid '{field}': {reason}", details)

    @app.exception_handler(Exception)
    async def handle_unexpected_exception(request: Request, exc: Exception):
        ctx.logger.error(f"[API] {request.method} {request.url.path} crashed: {type(exc).__name__}", exc_info=exc)
        details = None
        if ctx.settings.expose_error_details:
            details = {
                "error": str(exc),
                "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            }
        return _error_response(500, "INTERNAL_ERROR", "Internal server error", details)


def create_app(settings: Optional[Settings] = None, context: Optional[AppContext] = None) -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Args:
        settings: 설정 (없으면 환경 변수에서 로드)
        context: 미리 조립된 컨텍스트 (테스트용)

    Returns:
        FastAPI 앱 인스턴스
    """
    settings = settings or get_settings()
    ctx = context or build_context(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """애플리케이션 생명주기 (종료 시 브라우저/HTTP 세션 정리)"""
        ctx.logger.info(
            f"Application started: cache_max_size={ctx.cache.max_size}, "
            f"cache_ttl={settings.cache_ttl_ms // 1000}s, render_backend={settings.crawler_render_backend}"
        )
        yield
        ctx.logger.info("Shutting down application...")
        await ctx.aclose()

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.context = ctx

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        query = sanitize_for_log(str(request.query_params), max_length=200) if request.query_params else ""
        client = request.client.host if request.client else "-"
        ctx.logger.info(f"{request.method} {request.url.path} query={query} ip={client}")
        return await call_next(request)

    register_exception_handlers(app, ctx)

    # 라우터 등록
    app.include_router(health_router)
    app.include_router(fetch_router)
    app.include_router(data_router)

    # 정적 프론트엔드 (선택) - API 라우트가 먼저 매칭되므로 /api/* 와 / 는 가려지지 않음
    if settings.static_dir:
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


def main() -> None:
    """`partscout` 콘솔 스크립트: uvicorn으로 서버 실행 (SIGINT/SIGTERM 시 lifespan 종료 훅 실행)"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
