"""API routes package."""

from .data_routes import router as data_router
from .fetch_routes import router as fetch_router
from .health_routes import router as health_router

__all__ = ["health_router", "fetch_router", "data_router"]
