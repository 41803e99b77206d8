"""FastAPI application factory"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

import src.domain  # noqa: F401  registers table models on SQLModel.metadata
from src.api.error import ClientError, client_error_handler
from src.api.routes import invoices, job_items, public

logger = logging.getLogger(__name__)


def _init_sentry(config) -> None:
    import sentry_sdk

    sentry_sdk.init(
        dsn=config.DSN_SENTRY,
        environment=config.SENTRY_ENVIRONMENT,
        traces_sample_rate=0.1,
    )
    logger.info(f"Sentry enabled for environment {config.SENTRY_ENVIRONMENT}")


async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration_ms = int((time.time() - start) * 1000)
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms}ms)"
    )
    return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    from src.depends import engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema ready")
    yield
    await engine.dispose()


def create_app(config) -> FastAPI:
    """
    Build the API application

    Args:
        config: ApplicationConfig (or any object with the same attributes)

    Returns:
        Configured FastAPI app
    """
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        _init_sentry(config)

    app = FastAPI(
        title="Job Invoicing Service",
        description="Job items, invoices and sequential invoice numbering",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    app.add_exception_handler(ClientError, client_error_handler)

    app.include_router(invoices.router, prefix=config.API_PREFIX)
    app.include_router(job_items.router, prefix=config.API_PREFIX)
    app.include_router(public.router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok"}

    return app
