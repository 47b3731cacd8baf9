#!/usr/bin/env python3

"""
Main application entry point for the Taskboard task-management service.

Architecture: FastAPI application over an async SQLAlchemy database.
Key Features: Lifecycle management, database health checks, error mapping, CORS configuration.
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard.api.auth import router as auth_router
from taskboard.api.tasks import router as tasks_router
from taskboard.config import settings
from taskboard.db import check_db_connection, close_db, init_db
from taskboard.exceptions import (
    NotFoundError,
    StorageUnavailableError,
    ValidationFailedError,
)
from taskboard.utils.logger import setup_logger
from taskboard.utils.retry_utils import is_retryable_db_error

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup...")
    try:
        logger.info("Initializing database...")
        await init_db()

        logger.info("Checking database connectivity...")
        await check_db_connection()
    except Exception as e:
        logger.critical(f"Startup error: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info("Taskboard API startup successful.")
    yield

    logger.info("Taskboard API shutdown...")
    await close_db()
    logger.info("Shutdown complete.")


def create_app():
    app = FastAPI(title="Taskboard API", lifespan=lifespan)

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(request: Request, exc: ValidationFailedError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": exc.message, "errors": exc.errors},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return await validation_failed_handler(
            request, ValidationFailedError.from_pydantic_errors(exc.errors())
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": exc.message},
        )

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable_handler(
        request: Request, exc: StorageUnavailableError
    ):
        logger.error(f"Storage unavailable: {exc.__cause__}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"message": settings.db_unavailable_hint},
        )

    @app.exception_handler(OSError)
    async def oserror_exception_handler(request: Request, exc: OSError):
        logger.error(f"OSError caught: {exc}, errno: {exc.errno}", exc_info=True)
        if is_retryable_db_error(exc):
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"message": settings.db_unavailable_hint},
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An unexpected error occurred."},
        )

    app.include_router(tasks_router)
    app.include_router(auth_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    return app


app = create_app()


def main():
    port = int(settings.server_port)
    host = settings.server_host

    logger.info(f"Starting Taskboard API server on {host}:{port}")

    try:
        uvicorn.run("main:app", host=host, port=port, workers=settings.server_workers)
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
