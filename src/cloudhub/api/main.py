"""FastAPI application entry point for the CloudHub API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cloudhub.api.dependencies import require_api_token
from cloudhub.api.routes import (
    admin,
    auth,
    collections,
    health,
    portfolio,
    profile,
    storage,
    teacher,
    user_data,
    users,
)
from cloudhub.exceptions import CloudHubError
from cloudhub.logging_config import RequestLoggingMiddleware, configure_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup and clean up on shutdown."""
    from cloudhub.config import get_admin_bootstrap
    from cloudhub.data.db import init_db
    from cloudhub.services.auth import ensure_admin

    init_db()
    bootstrap = get_admin_bootstrap()
    if bootstrap is not None:
        _, created = ensure_admin(bootstrap.email, bootstrap.password, bootstrap.full_name)
        if created:
            logger.info("Created admin account %s at start-up", bootstrap.email)
    yield


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def cloudhub_error_handler(_request: Request, exc: CloudHubError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": _first_validation_message(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app() -> FastAPI:
    """Build the application with middleware, error handlers and routers."""
    configure_logging()

    application = FastAPI(
        title="CloudHub API",
        description="Student academic portfolio: accounts, approval and per-user data sync",
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(CloudHubError, cloudhub_error_handler)
    application.add_exception_handler(StarletteHTTPException, http_error_handler)
    application.add_exception_handler(RequestValidationError, validation_error_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)

    api_dependencies = [Depends(require_api_token)]
    application.include_router(health.router)
    for module in (
        auth,
        users,
        user_data,
        collections,
        portfolio,
        profile,
        admin,
        teacher,
    ):
        application.include_router(module.router, prefix="/api", dependencies=api_dependencies)
    # Storage checks the token per route; downloads are linked directly from pages
    application.include_router(storage.router, prefix="/api")
    return application


app = create_app()


def main() -> None:
    """Start the development server."""
    import uvicorn

    uvicorn.run(
        "cloudhub.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
