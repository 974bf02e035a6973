"""
Health check API endpoints
"""

from fastapi import APIRouter
from app.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """
    Health check endpoint reporting which integrations are configured
    """
    return {
        "status": "healthy",
        "version": settings.api_version,
        "storage_configured": bool(settings.aws_s3_bucket),
        "cdn_configured": bool(settings.default_cdn_domain),
        "resizer_configured": bool(settings.resizer_url),
    }


@router.get("/")
async def root():
    """
    Root endpoint
    """
    return {"message": "Image Upload API is running", "status": "healthy"}
