from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from app.application.image_input import ImageInput, Visibility
from app.application.interfaces.object_storage import IObjectStorage
from app.application.policies import ImageValidator, KeyBuilder, UrlBuilder
from utils.mime_utils import sniff_mime_type
from utils.resource_manager import managed_temp_file

logger = logging.getLogger(__name__)


class ImageUploadPolicy:
    """Validate -> decode -> detect extension -> upload -> build URL.

    Hosts (web handlers, model layers, scripts) hold a reference to one policy
    and call ``push_image``; every collaborator is injected so the policy has
    no global configuration of its own.
    """

    def __init__(
        self,
        storage: IObjectStorage,
        validator: ImageValidator,
        key_builder: KeyBuilder,
        url_builder: UrlBuilder,
    ) -> None:
        self._storage = storage
        self.validator = validator
        self.key_builder = key_builder
        self.url_builder = url_builder

    def generate_key(self, prefix: Optional[str] = None, length: Optional[int] = None) -> str:
        return self.key_builder.generate_key(prefix, length)

    def push_image(
        self,
        key: str,
        image: ImageInput,
        visibility: Visibility = Visibility.PUBLIC,
    ) -> str:
        """Upload ``image`` under ``key`` plus its sniffed extension.

        Args:
            key: Where the file is saved within the bucket, without extension
            image: Raw file or base64 encoded string
            visibility: Public or private object

        Returns:
            str: Public URL of the stored image

        Raises:
            InvalidFileError / InvalidImageError: before anything is uploaded
            UploadError: propagated from the storage
        """
        data = self.validator.read_bytes(image)
        final_key = self.key_builder.append_extension(key, data)

        logger.debug("Pushing image %s (%d bytes, %s)", final_key, len(data), visibility.value)
        self._storage.put(
            final_key,
            data,
            visibility,
            content_type=sniff_mime_type(data),
        )

        return self.url_builder.public_url(final_key)

    def image_url(
        self,
        key: str,
        cdn_base: Optional[str] = None,
        bucket: Optional[str] = None,
    ) -> str:
        return self.url_builder.public_url(key, cdn_base, bucket)

    def resizer_url(self, source: str) -> str:
        return self.url_builder.resizer_url(source)

    @contextmanager
    def open_image(self, image: ImageInput) -> Iterator[Path]:
        """Validate ``image`` and expose it as a temp file for the block's duration.

        Example:
            >>> with policy.open_image(Base64String(payload)) as path:
            ...     Image.open(path).size
        """
        data = self.validator.read_bytes(image)
        suffix = f".{self.key_builder.extension_for(data)}"
        with managed_temp_file(data, suffix=suffix) as path:
            yield path
