"""
Custom exception handlers and error types
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
import logging
import traceback
from typing import List, Optional

logger = logging.getLogger(__name__)


class ImageUploadError(Exception):
    """Base exception for image upload errors"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidFileError(ImageUploadError):
    """Raised when the value is not a usable file (wrong type, empty, too large)

    Example:
        raise InvalidFileError(
            "The file could not be processed.",
            possible_issues=["The file is too large.", "The file was not found."],
        )
    """

    def __init__(self, message: str, possible_issues: Optional[List[str]] = None):
        super().__init__(message, "INVALID_FILE")
        self.possible_issues = possible_issues or []


class InvalidImageError(ImageUploadError):
    """Raised when the content does not sniff as an allowed image type"""

    def __init__(self, message: str, mime_type: Optional[str] = None):
        super().__init__(message, "INVALID_IMAGE")
        self.mime_type = mime_type


class UploadError(ImageUploadError):
    """Exception raised when S3 upload fails
    Args:
        message (str): Error message
        key (Optional[str]): Object key (if available)
    Example:
        raise UploadError("Failed to upload", key="images/abc.png")
    """

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message, "UPLOAD_FAILED")
        self.key = key


class ConfigurationError(ImageUploadError):
    """Exception raised when configuration is invalid"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning("Validation error: %s", exc.errors())
    return JSONResponse(
        status_code=422,
        content={
            "detail": {
                "error": "Validation error",
                "details": "Invalid request data",
                "errors": jsonable_encoder(exc.errors()),
            }
        },
    )


async def image_validation_exception_handler(request: Request, exc: ImageUploadError):
    """Handle invalid file / invalid image errors"""
    logger.warning("Image validation error: %s (%s)", exc.message, exc.error_code)
    detail = {
        "error": "Image validation failed",
        "details": exc.message,
        "error_code": exc.error_code,
    }
    if isinstance(exc, InvalidFileError) and exc.possible_issues:
        detail["possible_issues"] = exc.possible_issues
    return JSONResponse(status_code=400, content={"detail": detail})


async def upload_exception_handler(request: Request, exc: UploadError):
    """Handle storage upload failures"""
    logger.error("Upload error: %s (key: %s)", exc.message, exc.key)
    return JSONResponse(
        status_code=502,
        content={
            "detail": {
                "error": "Image upload failed",
                "details": exc.message,
                "error_code": exc.error_code,
            }
        },
    )


async def configuration_exception_handler(request: Request, exc: ConfigurationError):
    """Handle missing or invalid configuration"""
    logger.error("Configuration error: %s (key: %s)", exc.message, exc.config_key)
    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error": "Service misconfigured",
                "details": exc.message,
                "error_code": exc.error_code,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.error("Unexpected error: %s: %s", type(exc).__name__, str(exc))
    logger.error("Traceback: %s", traceback.format_exc())

    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error": "Internal server error",
                "details": "An unexpected error occurred",
            }
        },
    )
