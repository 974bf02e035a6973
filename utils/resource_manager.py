"""
Resource management utilities for image uploads
"""

import os
import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

TEMP_FILE_PREFIX = "img-upload-"


def _temp_base_dir() -> Optional[str]:
    """Base directory for temp files, overridable via TEMP_BASE_DIR (used by tests)."""
    base_dir = os.getenv("TEMP_BASE_DIR")
    if base_dir:
        os.makedirs(base_dir, exist_ok=True)
    return base_dir


@contextmanager
def managed_temp_file(
    data: bytes, *, suffix: str = "", prefix: str = TEMP_FILE_PREFIX
) -> Iterator[Path]:
    """Context manager writing ``data`` to a temp file that is always removed.

    The file is deleted on every exit path, including exceptions raised by the
    caller inside the ``with`` block.

    Example:
        >>> with managed_temp_file(b"...", suffix=".png") as path:
        ...     Image.open(path)
    """
    fd, name = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=_temp_base_dir())
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        logger.debug("Created temp file %s (%d bytes)", path, len(data))
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
            logger.debug("✅ Removed temp file: %s", path)
        except (OSError, PermissionError) as e:
            logger.warning("Failed to remove temp file %s: %s", path, str(e))
