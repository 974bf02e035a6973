from __future__ import annotations

from typing import Optional

from app.application.interfaces.object_storage import IObjectStorage
from app.application.policies import ImageValidator, KeyBuilder, UrlBuilder
from app.application.use_cases.push_image import ImageUploadPolicy
from app.core.config import Settings, settings as default_settings
from app.infrastructure.adapters import S3ObjectStorage


def get_s3_storage(config: Optional[Settings] = None) -> S3ObjectStorage:
    config = config or default_settings
    return S3ObjectStorage(
        bucket=config.aws_s3_bucket,
        region=config.aws_s3_region,
        aws_access_key_id=config.aws_access_key_id,
        aws_secret_access_key=config.aws_secret_access_key,
        endpoint_url=config.aws_s3_endpoint_url,
    )


def get_image_upload_policy(
    config: Optional[Settings] = None,
    *,
    storage: Optional[IObjectStorage] = None,
) -> ImageUploadPolicy:
    """Assemble an ImageUploadPolicy from settings.

    Settings are read once here and injected as plain values, so the policy
    and its collaborators never look configuration up themselves.
    """
    config = config or default_settings
    storage = storage or get_s3_storage(config)
    return ImageUploadPolicy(
        storage=storage,
        validator=ImageValidator(max_size=config.max_image_size),
        key_builder=KeyBuilder(
            length=config.image_key_length,
            fallback_extension=config.image_fallback_extension,
        ),
        url_builder=UrlBuilder(
            storage,
            default_bucket=config.aws_s3_bucket,
            default_cdn=config.default_cdn,
            cdn_domains=config.cdns,
            resizer_base_url=config.resizer_url,
        ),
    )
