"""
Content-type sniffing utilities.

The MIME type of an upload is inferred from its leading bytes, never from a
client supplied filename or header. Raster formats are identified with Pillow;
SVG and plain text are recognized from their textual content.
"""

import codecs
import io
import mimetypes
import re
import struct
from typing import Optional

from PIL import Image

OCTET_STREAM = "application/octet-stream"
EMPTY = "application/x-empty"
SVG = "image/svg+xml"
TEXT_PLAIN = "text/plain"

# Formats Pillow is allowed to try when sniffing. Keeping the list short avoids
# loose header matches (e.g. TGA) claiming arbitrary binary data.
SNIFFABLE_FORMATS = ("PNG", "JPEG", "GIF", "BMP", "WEBP", "TIFF", "ICO")

# Canonical extensions, matching the names used for stored objects
MIME_EXTENSIONS = {
    "image/jpeg": "jpeg",
    "image/pjpeg": "jpeg",
    "image/png": "png",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/x-ms-bmp": "bmp",
    "image/svg+xml": "svg",
    "image/webp": "webp",
    "image/tiff": "tiff",
    "image/x-icon": "ico",
    "image/vnd.microsoft.icon": "ico",
    "image/mpo": "jpeg",
    "text/plain": "txt",
    "application/octet-stream": "bin",
}

# Multi-picture JPEGs (camera stereo/preview frames) are stored as plain JPEG
_MIME_ALIASES = {"image/mpo": "image/jpeg"}

# The document element must be <svg>; only a BOM, the XML declaration,
# processing instructions, comments and a DOCTYPE may precede it.
_SVG_ROOT = re.compile(
    rb"\A(?:\xef\xbb\xbf)?"
    rb"(?:\s|<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^\[>]*(?:\[.*?\])?\s*>)*"
    rb"<svg[\s>/]",
    re.IGNORECASE | re.DOTALL,
)
_SNIFF_WINDOW = 4096


def _sniff_raster(data: bytes) -> Optional[str]:
    try:
        with Image.open(io.BytesIO(data), formats=SNIFFABLE_FORMATS) as img:
            mime = img.get_format_mimetype() or f"image/{img.format.lower()}"
    except (
        OSError,
        EOFError,
        SyntaxError,
        ValueError,
        struct.error,
        Image.DecompressionBombError,
    ):
        # Loose signatures (e.g. BMP on a leading "BM") let a plugin claim the
        # data and then fail on the header with its own error type
        return None
    return _MIME_ALIASES.get(mime, mime)


def _is_text(data: bytes) -> bool:
    if b"\x00" in data:
        return False
    try:
        # final=False tolerates a multi-byte sequence cut by the sniff window
        codecs.getincrementaldecoder("utf-8")().decode(data, final=False)
    except UnicodeDecodeError:
        return False
    return True


def sniff_mime_type(data: bytes) -> str:
    """Return the MIME type of ``data`` judged from its content.

    Args:
        data: Raw bytes of the payload

    Returns:
        str: e.g. ``image/png``, ``image/svg+xml``, ``text/plain`` or
        ``application/octet-stream`` when nothing matches

    Example:
        >>> sniff_mime_type(b"hello world")
        'text/plain'
    """
    if not data:
        return EMPTY

    mime = _sniff_raster(data)
    if mime:
        return mime

    head = data[:_SNIFF_WINDOW]
    if _is_text(head):
        if _SVG_ROOT.match(head):
            return SVG
        return TEXT_PLAIN

    return OCTET_STREAM


def guess_extension(mime_type: str) -> Optional[str]:
    """Map a MIME type to a file extension without the leading dot.

    Known types use the canonical names above; anything else is resolved with
    the ``mimetypes`` registry. Returns None when no extension is known.
    """
    mime_type = (mime_type or "").split(";", 1)[0].strip().lower()
    if mime_type in MIME_EXTENSIONS:
        return MIME_EXTENSIONS[mime_type]
    ext = mimetypes.guess_extension(mime_type)
    return ext.lstrip(".") if ext else None


def is_image_mime(mime_type: str) -> bool:
    return (mime_type or "").startswith("image/")
