"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000

Startup order: pending migrations, then DB + Redis connectivity checks. Any
migration failure propagates out of the lifespan and the app never serves.
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.pf_account.api.router import router as account_router
from src.pf_category.api.router import router as category_router
from src.pf_common.database import engine
from src.pf_common.errors import AppError
from src.pf_common.redis_client import close_redis, get_redis
from src.pf_common.response import error_response
from src.pf_gateway.middleware.request_log import RequestLogMiddleware
from src.pf_goal.api.router import router as goal_router
from src.pf_migrations.application.runner import run_migrations
from src.pf_report.api.router import router as report_router
from src.pf_transaction.api.router import router as transaction_router
from src.pf_user.api.router import router as user_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("pf.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: migrate, verify DB + Redis connections. Shutdown: dispose."""
    # Startup
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        await run_migrations(engine, settings.MIGRATIONS_DIR, settings.MIGRATIONS_TABLE)
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    if settings.CACHE_ENABLED:
        await get_redis()
    else:
        logger.info("Cache disabled; listings are always read from PostgreSQL")
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error(
            "%s %s failed: [%d] %s", request.method, request.url.path, exc.code, exc.message
        )
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(user_router, prefix="/api/v1")
app.include_router(account_router, prefix="/api/v1")
app.include_router(category_router, prefix="/api/v1")
app.include_router(transaction_router, prefix="/api/v1")
app.include_router(goal_router, prefix="/api/v1")
app.include_router(report_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
