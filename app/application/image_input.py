from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Optional, Union


class Visibility(str, Enum):
    """Visibility of a stored object, passed through to the storage."""

    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class RawFile:
    """An uploaded file: a readable byte stream plus its declared size."""

    stream: BinaryIO
    size: int
    filename: Optional[str] = None

    @classmethod
    def from_bytes(cls, data: bytes, filename: Optional[str] = None) -> "RawFile":
        return cls(stream=io.BytesIO(data), size=len(data), filename=filename)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "RawFile":
        path = Path(path)
        return cls.from_bytes(path.read_bytes(), filename=path.name)

    @property
    def is_readable(self) -> bool:
        if getattr(self.stream, "closed", False):
            return False
        return callable(getattr(self.stream, "read", None))

    def read(self) -> bytes:
        """Return the whole content, rewinding the stream first when possible."""
        seekable = getattr(self.stream, "seekable", None)
        if seekable is not None and seekable():
            self.stream.seek(0)
        return self.stream.read()


@dataclass(frozen=True)
class Base64String:
    """A base64 encoded payload as received from a JSON body or form field."""

    value: str


ImageInput = Union[RawFile, Base64String]
