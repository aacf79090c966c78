"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from secure import Secure
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi_limiter import FastAPILimiter
import redis.asyncio as redis  # type: ignore[import-untyped]

from petcode.api import build_api_router
from petcode.core.config import Settings, get_settings
from petcode.core.context import build_context
from petcode.db.session import dispose_engine
from petcode.security.logging_filters import SensitiveFilter

logger = logging.getLogger(__name__)


def _allowed_origins(settings: Settings) -> list[str]:
    origins = [origin for origin in settings.cors_allowlist if origin]
    if not origins:
        origins = [origin for origin in settings.cors_allow_origins if origin]
    return origins or ["http://localhost:5173"]


def _install_log_filters() -> None:
    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", ""):
        target = logging.getLogger(logger_name)
        if not any(isinstance(flt, SensitiveFilter) for flt in target.filters):
            target.addFilter(SensitiveFilter())


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(_: FastAPI):
        redis_pool = None
        if settings.redis_url:
            try:
                redis_pool = redis.from_url(
                    settings.redis_url, encoding="utf-8", decode_responses=True
                )
                await FastAPILimiter.init(redis_pool)
            except Exception:  # pragma: no cover - limiter startup is best effort
                logger.exception("Failed to initialize rate limiter")
        else:
            logger.info("REDIS_URL not set; rate limiting disabled")
        try:
            yield
        finally:
            if FastAPILimiter.redis is not None:
                try:
                    await FastAPILimiter.close()
                except Exception:  # pragma: no cover - limiter shutdown
                    logger.exception("Failed to close rate limiter")
            if redis_pool is not None:
                try:
                    await redis_pool.aclose()
                except Exception:  # pragma: no cover
                    logger.exception("Failed to close redis pool")
            await dispose_engine(settings.database_url)

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and its context from ``settings``."""
    settings = settings or get_settings()
    app = FastAPI(title=settings.app_name, lifespan=_build_lifespan(settings))
    app.state.context = build_context(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(settings),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

    secure_headers = Secure.with_default_headers()

    @app.middleware("http")
    async def _apply_security_headers(request, call_next):
        response = await call_next(request)
        secure_headers.set_headers(response)
        return response

    _install_log_filters()
    app.include_router(build_api_router(settings))

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Return a simple welcome message."""
        return {"message": settings.app_name}

    return app


app = create_app()
