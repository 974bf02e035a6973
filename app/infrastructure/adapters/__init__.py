from .storage_s3 import S3ObjectStorage

__all__ = [
    "S3ObjectStorage",
]
