"""FastAPI application for the LingoNotes API."""

import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from lingonotes.config import configure_logging, get_settings
from lingonotes.database import dispose_engine, initialize_database
from lingonotes.infrastructure.common.error_handlers import register_exception_handlers
from lingonotes.infrastructure.identity.routers import auth
from lingonotes.infrastructure.subscription.routers import subscription
from lingonotes.infrastructure.sync.routers import sync
from lingonotes.infrastructure.translation.routers import translate

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    if settings.STORAGE_BACKEND == "database":
        initialize_database(settings)
    logger.info(
        "api_started",
        environment=settings.ENVIRONMENT,
        storage_backend=settings.STORAGE_BACKEND,
        ai_enabled=settings.ai_enabled,
    )
    yield
    dispose_engine()


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return response


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.ENVIRONMENT)

    app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)
    app.state.limiter = auth.limiter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)
    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(translate.router)
    app.include_router(sync.router)
    app.include_router(subscription.router)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok", "service": settings.PROJECT_NAME}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    """Entry point for the lingonotes-api command."""
    settings = get_settings()
    uvicorn.run("lingonotes.main:app", host="0.0.0.0", port=settings.PORT)  # noqa: S104
