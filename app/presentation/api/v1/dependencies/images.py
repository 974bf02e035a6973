from functools import lru_cache

from app.application.use_cases.push_image import ImageUploadPolicy
from app.infrastructure.adapters.bundles.image import get_image_upload_policy


@lru_cache
def get_policy() -> ImageUploadPolicy:
    """Compose the ImageUploadPolicy once per process at Presentation layer."""
    return get_image_upload_policy()
