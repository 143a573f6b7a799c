"""
Hyperlink Application Entry Point

FastAPI application main entry, including storage lifecycle, router registration and application configuration.
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hyperlink import __version__
from hyperlink.api import api_router, view_router
from hyperlink.common.errors import AppError, UnsupportedBackendError
from hyperlink.config import get_settings
from hyperlink.db.redis import ping_redis
from hyperlink.logging_config import setup_logging
from hyperlink.repositories.factory import create_message_repository, resolve_client
from hyperlink.repositories.redis import RedisMessageRepository

logger = logging.getLogger(__name__)

# Initialize logging configuration
setup_logging()


# Application Lifecycle Management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application Lifecycle Management

    Create the message storage and start its background maintenance on startup,
    stop maintenance and release the storage on shutdown.
    """
    settings = get_settings()
    repo = create_message_repository(settings.storage_config())
    if isinstance(repo, RedisMessageRepository):
        try:
            await ping_redis(repo.client)
        except AppError:
            await repo.close()
            raise

    stop_event = asyncio.Event()
    maintenance = asyncio.create_task(repo.run(stop_event))
    app.state.message_repo = repo
    try:
        yield
    finally:
        stop_event.set()
        await maintenance
        await repo.close()
        app.state.message_repo = None


settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    description="Ephemeral one-shot message and file sharing service",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render application errors; details only in debug mode"""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(include_details=get_settings().DEBUG),
        headers={"Cache-Control": "no-store"},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Log uncaught exceptions and hide them behind a generic 500"""
    logger.error(f"Uncaught exception on {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "message": "Internal server error",
                "type": "internal_error",
                "code": "internal_error",
            }
        },
    )


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy"}


@app.get("/", tags=["Health"])
async def root():
    return {
        "name": settings.APP_NAME,
        "version": __version__,
        "description": "Hyperlink - Ephemeral One-Shot Message Sharing",
    }


# The catch-all key views must be registered last
app.include_router(api_router)
app.include_router(view_router)


def run() -> int:
    """
    Command line entry point

    Returns:
        int: Process exit code
    """
    import uvicorn

    settings = get_settings()
    try:
        resolve_client(settings.STORAGE_CLIENT)
    except UnsupportedBackendError as e:
        logger.error(f"Failed to start server: {e.message}")
        return 1

    logger.info(f"Hyperlink {__version__}")
    logger.info(f"Starting on {settings.HTTP_HOST}:{settings.HTTP_PORT}")
    uvicorn.run(
        app,
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        log_config=None,
    )
    logger.info("Hyperlink stopped")
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
