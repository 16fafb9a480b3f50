"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from modules.admin.routes import accounts_router, login_router
from modules.auth.routes import router as plex_router
from modules.permissions.routes import router as permissions_router
from modules.requests.routes import blacklist_router, router as requests_router
from shared.config import get_settings
from shared.exceptions import FinearrError

from .dependencies import get_container
from .models import ErrorResponse, ValidationErrorResponse
from .routes import config, health, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    On shutdown, waits for in-flight downloader dispatches to finish.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    logger.info(f"Data directory: {settings.data_dir.resolve()}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")
    await get_container().dispatcher.drain()


async def finearr_error_handler(request: Request, exc: FinearrError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = ValidationErrorResponse(
        message="Request validation failed",
        details={"errors": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="INTERNAL_ERROR", message="Internal server error").model_dump(),
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Media request management for Plex servers",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Error mapping
    app.add_exception_handler(FinearrError, finearr_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(config.router, prefix="/api/config", tags=["config"])
    app.include_router(plex_router, prefix="/api/auth/plex", tags=["auth"])
    app.include_router(login_router, prefix="/api/auth/admin", tags=["admin"])
    app.include_router(accounts_router, prefix="/api/admin/accounts", tags=["admin"])
    app.include_router(permissions_router, prefix="/api/permissions", tags=["permissions"])
    app.include_router(requests_router, prefix="/api/requests", tags=["requests"])
    app.include_router(blacklist_router, prefix="/api/blacklist", tags=["requests"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])

    return app


# Application instance for uvicorn
app = create_app()
