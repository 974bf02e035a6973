from __future__ import annotations
from typing import Protocol, Optional

from app.application.image_input import Visibility


class IObjectStorage(Protocol):
    """Object storage (e.g., S3) holding uploaded images."""

    def put(
        self,
        key: str,
        data: bytes,
        visibility: Visibility,
        *,
        content_type: Optional[str] = None,
    ) -> None:
        """Store ``data`` under ``key``. Raises UploadError on failure."""
        ...

    def object_url(self, bucket: str, key: str) -> str:
        """Return the canonical absolute URL of ``key`` inside ``bucket``."""
        ...
