from __future__ import annotations

import logging
from typing import Mapping, Optional
from urllib.parse import unquote_plus, urlencode, urlsplit, urlunsplit

from app.application.interfaces.object_storage import IObjectStorage
from app.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class UrlBuilder:
    """Builds public URLs for stored objects, optionally through a CDN."""

    def __init__(
        self,
        storage: IObjectStorage,
        *,
        default_bucket: str,
        default_cdn: str = "",
        cdn_domains: Optional[Mapping[str, str]] = None,
        resizer_base_url: str = "",
    ) -> None:
        self._storage = storage
        self.default_bucket = default_bucket
        self.default_cdn = default_cdn
        self.cdn_domains = dict(cdn_domains or {})
        self.resizer_base_url = resizer_base_url

    def raw_url(self, key: str, bucket: Optional[str] = None) -> str:
        """Canonical storage URL of ``key`` without any modification."""
        return self._storage.object_url(bucket or self.default_bucket, key)

    def resolve_cdn(self, cdn_base: Optional[str] = None) -> Optional[str]:
        """Explicit ``cdn_base`` wins; otherwise the configured default CDN, if any."""
        if cdn_base:
            return cdn_base
        if self.default_cdn:
            return self.cdn_domains.get(self.default_cdn) or None
        return None

    def public_url(
        self,
        key: str,
        cdn_base: Optional[str] = None,
        bucket: Optional[str] = None,
    ) -> str:
        """Full URL for ``key``; the storage host is swapped for the CDN when one resolves.

        Path, query and fragment of the storage URL are kept verbatim.
        """
        url = self.raw_url(key, bucket)
        cdn = self.resolve_cdn(cdn_base)
        if not cdn:
            return url

        logger.debug("Serving %s through CDN %s", key, cdn)
        parts = urlsplit(url)
        tail = urlunsplit(("", "", parts.path, parts.query, parts.fragment))
        return f"{cdn.rstrip('/')}{tail}"

    def resizer_url(
        self,
        source: str,
        *,
        width: str = "{width}",
        height: str = "{height}",
    ) -> str:
        """URL of the image resizer for ``source``.

        The query is left url-decoded so the ``{width}``/``{height}``
        placeholders reach clients intact.

        Example:
            >>> builder.resizer_url("https://cdn.example.com/a.png")
            'https://resize.example.com/?source=https://cdn.example.com/a.png&height={height}&width={width}'
        """
        if not self.resizer_base_url:
            raise ConfigurationError("Image resizer URL is not configured", config_key="resizer_url")
        query = unquote_plus(urlencode({"source": source, "height": height, "width": width}))
        return f"{self.resizer_base_url.rstrip('/')}/?{query}"
