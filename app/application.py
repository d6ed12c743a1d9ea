"""Application factory: composes settings, database, auth guard, middleware and routes."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.errors import register_exception_handlers
from app.api.v1 import router as v1_router
from app.core.config import Settings, get_settings
from app.core.database import build_engine, build_session_factory
from app.core.guard import AuthGuard
from app.core.middleware import setup_middleware
from app.models import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables when DB_AUTO_CREATE is set; dispose the engine on shutdown."""
    if app.state.settings.DB_AUTO_CREATE:
        logger.info("DB_AUTO_CREATE is enabled; creating missing tables.")
        Base.metadata.create_all(app.state.engine)
    yield
    app.state.engine.dispose()


def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Catalog API"}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API. Without explicit settings they are read from the environment."""
    settings = settings or get_settings()
    engine = build_engine(settings)

    app = FastAPI(
        title="Catalog API",
        description="Products and categories with cookie/JWT authentication.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Registration, login and session"},
            {"name": "categories", "description": "Endpoints for managing categories"},
            {"name": "products", "description": "Endpoints for managing products"},
        ],
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.auth_guard = AuthGuard(settings)

    setup_middleware(app, settings)
    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)
    app.add_api_route("/", root, methods=["GET"], include_in_schema=False)
    return app
