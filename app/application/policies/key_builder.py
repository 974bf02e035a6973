from __future__ import annotations

import random
import string
from typing import Optional

from utils.mime_utils import guess_extension, sniff_mime_type

KEY_ALPHABET = string.ascii_letters + string.digits


class KeyBuilder:
    """Builds storage keys: ``{prefix}{random suffix}.{extension}``."""

    def __init__(self, length: int = 20, fallback_extension: str = "bin") -> None:
        self.length = length
        self.fallback_extension = fallback_extension

    def generate_key(self, prefix: Optional[str] = None, length: Optional[int] = None) -> str:
        """Generate a random key, helpful to keep names unique in a bucket.

        Args:
            prefix: Prepended verbatim, useful to set a path before the key
                (e.g. ``images/``)
            length: Length of the random suffix, defaults to ``self.length``

        Uniqueness is best effort; the suffix is not cryptographically random.
        """
        length = self.length if length is None else length
        suffix = "".join(random.choices(KEY_ALPHABET, k=length))
        return f"{prefix or ''}{suffix}"

    def extension_for(self, content: bytes) -> str:
        return guess_extension(sniff_mime_type(content)) or self.fallback_extension

    def append_extension(self, key: str, content: bytes) -> str:
        return f"{key}.{self.extension_for(content)}"
