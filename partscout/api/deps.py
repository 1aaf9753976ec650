"""FastAPI 의존성 - app.state에 보관된 AppContext 주입"""
from fastapi import Request

from partscout.core.context import AppContext


def get_context(request: Request) -> AppContext:
    return request.app.state.context
