"""mailconfig - Main FastAPI Application

Administration API for a multi-tenant mail server.

This module creates and configures the FastAPI application, including:
- All API routers (tokens, domains, entries, keys, users, ping, autoconfig)
- Middleware (request ID correlation, CORS)
- Exception handlers mapping MailConfigError to its HTTP status
- Health and metrics endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .config import get_settings
from .errors import MailConfigError, StoreFailure
from .observability.logging_config import configure_logging
from .observability.middleware import RequestContextMiddleware
from .observability.router import router as observability_router

from .api.frontend import router as frontend_router
from .api.router import router as meta_router
from .domains.router import router as domains_router
from .entries.router import router as entries_router
from .keys.router import router as keys_router
from .tokens.router import router as tokens_router
from .users.router import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(f"mailconfig {settings.VERSION} starting up")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    yield

    logger.info("mailconfig shutting down")


async def mailconfig_exception_handler(request: Request, exc: MailConfigError) -> JSONResponse:
    """Render a service failure as ``{"error": {...}}`` with its category's status."""
    if exc.status_code >= 500:
        logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc}", exc_info=exc)
    else:
        logger.info(f"{exc.kind} on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic validation errors with field-level details."""
    logger.warning(f"Validation error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "kind": "bad-request",
                "category": "bad-request",
                "message": "Request validation failed",
                "details": jsonable_encoder(exc.errors()),
            }
        },
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Render database errors that escaped the services as StoreFailure."""
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    failure = StoreFailure(exc.__class__.__name__)
    return JSONResponse(status_code=failure.status_code, content=failure.to_payload())


def create_app() -> FastAPI:
    settings = get_settings()

    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    app = FastAPI(
        title="mailconfig API",
        description="Administration of mail domains, entries, DKIM keys, users and tokens",
        version=settings.VERSION,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        lifespan=lifespan,
    )

    # =========================================================================
    # MIDDLEWARE
    # =========================================================================

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    app.add_exception_handler(MailConfigError, mailconfig_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)

    # =========================================================================
    # ROUTERS
    # =========================================================================

    app.include_router(observability_router)

    app.include_router(meta_router, prefix="/api")
    app.include_router(frontend_router, prefix="/api")
    app.include_router(tokens_router, prefix="/api")
    app.include_router(domains_router, prefix="/api")
    app.include_router(entries_router, prefix="/api")
    app.include_router(keys_router, prefix="/api")
    app.include_router(users_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "mailconfig.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
