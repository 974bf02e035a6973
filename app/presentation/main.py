import os
import logging
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, APIRouter
from fastapi.exceptions import RequestValidationError
import uvicorn
from contextlib import asynccontextmanager

from app.core.exceptions import (
    ConfigurationError,
    InvalidFileError,
    InvalidImageError,
    UploadError,
    configuration_exception_handler,
    general_exception_handler,
    image_validation_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from app.core.middleware import RequestLoggingMiddleware
from app.presentation.api.v1.routers import images
from app.presentation.api.v1.routers import health
from app.core.config import settings


def configure_logging() -> None:
    """Log to console, and to a rotating file when LOG_FILE is set"""
    log_handlers = [logging.StreamHandler()]
    if settings.log_file:
        os.makedirs(os.path.dirname(settings.log_file) or ".", exist_ok=True)
        log_handlers.append(
            RotatingFileHandler(
                settings.log_file, maxBytes=5 * 1024 * 1024, backupCount=2, encoding="utf-8"
            )
        )
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=settings.log_format,
        datefmt=settings.log_date_format,
        handlers=log_handlers,
    )
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("Starting Image Upload API (bucket=%s)...", settings.aws_s3_bucket or "<unset>")
    yield
    logger.info("Shutting down Image Upload API...")


def create_application() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(InvalidFileError, image_validation_exception_handler)
    app.add_exception_handler(InvalidImageError, image_validation_exception_handler)
    app.add_exception_handler(UploadError, upload_exception_handler)
    app.add_exception_handler(ConfigurationError, configuration_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include API routers under versioned prefix
    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(images.router, tags=["images"])
    api_v1.include_router(health.router)
    app.include_router(api_v1)

    return app


# Create application instance
app = create_application()

if __name__ == "__main__":
    dev_mode = os.getenv("DEV_MODE", "true").lower() == "true"
    uvicorn.run(
        "app.presentation.main:app",
        host=settings.host,
        port=settings.port,
        reload=dev_mode,
    )
