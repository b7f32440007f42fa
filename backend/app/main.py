"""
StudyAid API application.

Wires configuration, logging, the database lifecycle, middleware, error
handlers and the content routes into a single FastAPI app.

Run locally:
    uvicorn app.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app.api import api_router
from app.core.config import settings
from app.core.env_validation import validate_or_exit
from app.core.errors import register_exception_handlers
from app.core.logging import get_logger, request_logging_middleware, setup_logging
from app.db.session import check_db_health, close_db, init_db

setup_logging()
logger = get_logger(__name__)

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: validate the environment, then connect to the database.
    Shutdown: dispose of the connection pool.
    """
    logger.info(
        "starting_application",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        version=APP_VERSION,
        api_prefix=settings.API_V1_PREFIX,
    )

    validate_or_exit()
    await init_db()

    yield

    logger.info("shutting_down_application")
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    description="Upload documents, images and links, then summarize them and generate study questions.",
    version=APP_VERSION,
    # API docs are only exposed while DEBUG is on
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# ================================
# Middleware
# ================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.middleware("http")(request_logging_middleware)

register_exception_handlers(app)


# ================================
# Service Endpoints
# ================================

@app.get("/health", tags=["health"])
async def health_check() -> JSONResponse:
    """Liveness plus database connectivity; 503 when the database is unreachable."""
    db_healthy = await check_db_health()

    return JSONResponse(
        status_code=200 if db_healthy else 503,
        content={
            "status": "healthy" if db_healthy else "unhealthy",
            "app_name": settings.APP_NAME,
            "environment": settings.APP_ENV,
            "version": APP_VERSION,
            "database": "connected" if db_healthy else "disconnected",
        },
    )


@app.get("/", tags=["root"])
async def root() -> JSONResponse:
    return JSONResponse(
        content={
            "message": f"Welcome to {settings.APP_NAME} API",
            "version": APP_VERSION,
            "api": settings.API_V1_PREFIX,
            "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
        }
    )


app.include_router(api_router, prefix=settings.API_V1_PREFIX)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
