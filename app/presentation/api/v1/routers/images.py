import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from app.application.image_input import Base64String, RawFile, Visibility
from app.application.use_cases.push_image import ImageUploadPolicy
from app.core.config import settings
from app.presentation.api.v1.dependencies.images import get_policy
from app.presentation.api.v1.schemas.images import (
    Base64ImageUploadRequest,
    ImageUrlResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images")


@router.post("", response_model=ImageUrlResponse)
async def upload_image(
    file: UploadFile = File(...),
    prefix: Optional[str] = Form(None),
    visibility: Visibility = Form(Visibility.PUBLIC),
    policy: ImageUploadPolicy = Depends(get_policy),
):
    """Upload an image file (multipart) and return its public URL."""
    # Oversized bodies are refused before being pulled into memory
    if file.size is not None:
        policy.validator.assert_size(file.size)
    content = await file.read()
    raw = RawFile.from_bytes(content, filename=file.filename)
    key = policy.generate_key(prefix if prefix is not None else settings.aws_s3_prefix)

    # boto3 is blocking; keep it off the event loop
    url = await asyncio.to_thread(policy.push_image, key, raw, visibility)
    logger.info("Image %s uploaded as %s", file.filename, url)
    return ImageUrlResponse(url=url)


@router.post("/base64", response_model=ImageUrlResponse)
async def upload_base64_image(
    payload: Base64ImageUploadRequest,
    policy: ImageUploadPolicy = Depends(get_policy),
):
    """Upload a base64 encoded image and return its public URL."""
    prefix = payload.prefix if payload.prefix is not None else settings.aws_s3_prefix
    key = policy.generate_key(prefix)

    url = await asyncio.to_thread(
        policy.push_image, key, Base64String(payload.image), payload.visibility
    )
    logger.info("Base64 image uploaded as %s", url)
    return ImageUrlResponse(url=url)


@router.get("/url", response_model=ImageUrlResponse)
async def get_image_url(
    key: str = Query(..., min_length=1),
    cdn: Optional[str] = Query(None, description="CDN base overriding the configured default"),
    bucket: Optional[str] = Query(None),
    policy: ImageUploadPolicy = Depends(get_policy),
):
    return ImageUrlResponse(url=policy.image_url(key, cdn, bucket))


@router.get("/resizer", response_model=ImageUrlResponse)
async def get_resizer_url(
    source: str = Query(..., min_length=1),
    policy: ImageUploadPolicy = Depends(get_policy),
):
    """Resizer URL for ``source`` with ``{width}``/``{height}`` placeholders."""
    return ImageUrlResponse(url=policy.resizer_url(source))
