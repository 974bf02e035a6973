from typing import Optional

from pydantic import BaseModel, Field

from app.application.image_input import Visibility


class Base64ImageUploadRequest(BaseModel):
    image: str = Field(..., min_length=1, description="Base64 encoded image payload")
    prefix: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Key prefix, e.g. images/avatars/. Defaults to the configured prefix.",
    )
    visibility: Visibility = Visibility.PUBLIC


class ImageUrlResponse(BaseModel):
    url: str
