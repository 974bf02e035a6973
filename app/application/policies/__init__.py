from .validator import ImageValidator, ALLOWED_IMAGE_EXTENSIONS
from .key_builder import KeyBuilder
from .url_builder import UrlBuilder

__all__ = [
    "ImageValidator",
    "ALLOWED_IMAGE_EXTENSIONS",
    "KeyBuilder",
    "UrlBuilder",
]
