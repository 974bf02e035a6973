from .object_storage import IObjectStorage

__all__ = [
    "IObjectStorage",
]
