from __future__ import annotations

import base64
import binascii
import logging
from typing import Optional

from app.application.image_input import Base64String, ImageInput, RawFile
from app.core.exceptions import InvalidFileError, InvalidImageError
from utils.mime_utils import guess_extension, is_image_mime, sniff_mime_type

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = ("jpeg", "png", "gif", "bmp", "svg")


def _is_allowed_file_mime(mime_type: str) -> bool:
    return guess_extension(mime_type) in ALLOWED_IMAGE_EXTENSIONS


class ImageValidator:
    """Decides whether an input is a well-formed image.

    Raw files must sniff to one of ``ALLOWED_IMAGE_EXTENSIONS``; base64 strings
    must round-trip through decode/encode and decode to any ``image/*`` type.

    Every check works on a single read of the input, so streams that cannot be
    rewound (sockets, pipes, spooled request bodies) are consumed exactly once.
    """

    def __init__(self, max_size: Optional[int] = None) -> None:
        self.max_size = max_size

    @staticmethod
    def is_base64_encoded(value: str) -> bool:
        try:
            decoded = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            return False
        return base64.b64encode(decoded).decode("ascii") == value

    @staticmethod
    def decode(value: str) -> bytes:
        return base64.b64decode(value, validate=True)

    def is_base64_image(self, value: str) -> bool:
        """Sniff the decoded payload; expects ``is_base64_encoded`` to have passed."""
        return is_image_mime(sniff_mime_type(self.decode(value)))

    def is_image_file(self, raw: RawFile) -> bool:
        """Sniff the stream content; consumes streams that cannot be rewound."""
        return _is_allowed_file_mime(sniff_mime_type(raw.read()))

    def assert_size(self, size: int) -> None:
        """Raise InvalidFileError when ``size`` bytes exceed ``max_size``."""
        if self.max_size is not None and size > self.max_size:
            raise InvalidFileError(
                f"The file could not be processed. Max size: {self.max_size} bytes",
                possible_issues=["The file is too large."],
            )

    def is_image(self, image: ImageInput) -> bool:
        try:
            self.read_bytes(image)
        except (InvalidFileError, InvalidImageError):
            return False
        return True

    def assert_valid_image(self, image: ImageInput) -> ImageInput:
        """Return ``image`` unchanged or raise InvalidFileError / InvalidImageError."""
        self.read_bytes(image)
        return image

    def read_bytes(self, image: ImageInput) -> bytes:
        """Validate ``image`` and return its decoded content.

        Raises:
            InvalidFileError: not a file, empty, or above ``max_size``
            InvalidImageError: content is not an accepted image
        """
        match image:
            case Base64String(value=value):
                data = self._read_base64(value)
            case RawFile():
                data = self._read_file(image)
            case _:
                raise InvalidFileError("Image attribute is not a file.")
        logger.debug("Validated image payload (%d bytes)", len(data))
        return data

    def _read_base64(self, value: str) -> bytes:
        # Decoded length follows from the encoded one; refuse before decoding
        self.assert_size(len(value) * 3 // 4 - value[-2:].count("="))
        if not self.is_base64_encoded(value):
            raise InvalidImageError("The base64 encoded string is not a valid image.")
        data = self.decode(value)
        if not is_image_mime(sniff_mime_type(data)):
            raise InvalidImageError("The base64 encoded string is not a valid image.")
        return data

    def _read_file(self, raw: RawFile) -> bytes:
        if not raw.is_readable:
            raise InvalidFileError("Image attribute is not a file.")
        self._assert_not_empty(raw.size)
        self.assert_size(raw.size)

        data = raw.read()
        # The declared size is only a hint; the content decides
        self._assert_not_empty(len(data))
        self.assert_size(len(data))

        mime_type = sniff_mime_type(data)
        if not _is_allowed_file_mime(mime_type):
            raise InvalidImageError(
                "The file could not be processed. It is not a valid image.",
                mime_type=mime_type,
            )
        return data

    @staticmethod
    def _assert_not_empty(size: int) -> None:
        if not size:
            raise InvalidFileError(
                "The file could not be processed.",
                possible_issues=["The file is too large.", "The file was not found."],
            )
