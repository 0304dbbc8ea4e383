import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from blog_api.core.config import Settings, settings
from blog_api.core.database import Database
from blog_api.core.logging_config import configure_logging
from blog_api.core.response.handlers import (
    global_exception_handler,
    validation_exception_handler,
)

# Import routers from apps
from blog_api.apps.blog import post_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: open the store and create tables
    app_settings: Settings = app.state.settings
    database = Database(
        app_settings.DATABASE_URL,
        echo=app_settings.DATABASE_ECHO,
        time_zone=app_settings.TIME_ZONE,
    )
    await database.connect()
    app.state.database = database
    logger.info("%s started", app_settings.PROJECT_NAME)
    yield
    # Shutdown: close the store
    logger.info("Shutting down...")
    await database.disconnect()


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application for the given settings."""
    app_settings = app_settings or settings
    configure_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description=app_settings.PROJECT_INFO,
        version=app_settings.PROJECT_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint with health check."""
        return {
            "message": "Server is running",
            "status": "healthy",
            "version": app_settings.PROJECT_VERSION,
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "message": "Service is running normally"}

    app.include_router(post_router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "blog_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,  # Enable auto-reload in development
        log_level=settings.LOG_LEVEL.lower(),
    )
