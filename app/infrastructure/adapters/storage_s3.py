from __future__ import annotations
import logging
from typing import Any, Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.application.image_input import Visibility
from app.application.interfaces.object_storage import IObjectStorage
from app.core.exceptions import ConfigurationError, UploadError

logger = logging.getLogger(__name__)

# S3 canned ACLs per visibility
VISIBILITY_ACL = {
    Visibility.PUBLIC: "public-read",
    Visibility.PRIVATE: "private",
}


class S3ObjectStorage(IObjectStorage):
    """Object storage backed by S3 (or an S3-compatible endpoint) through boto3."""

    def __init__(
        self,
        *,
        bucket: str,
        region: str,
        aws_access_key_id: str = "",
        aws_secret_access_key: str = "",
        endpoint_url: str = "",
        client: Any = None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self._aws_access_key_id = aws_access_key_id
        self._aws_secret_access_key = aws_secret_access_key
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            # Empty credentials fall back to the boto3 default credential chain
            self._client = boto3.client(
                "s3",
                region_name=self.region or None,
                aws_access_key_id=self._aws_access_key_id or None,
                aws_secret_access_key=self._aws_secret_access_key or None,
                endpoint_url=self.endpoint_url or None,
            )
        return self._client

    def put(
        self,
        key: str,
        data: bytes,
        visibility: Visibility,
        *,
        content_type: Optional[str] = None,
    ) -> None:
        if not self.bucket:
            raise ConfigurationError("S3 bucket is not configured", config_key="aws_s3_bucket")

        params = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": data,
            "ACL": VISIBILITY_ACL[Visibility(visibility)],
        }
        if content_type:
            params["ContentType"] = content_type

        try:
            self.client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 upload failed for %s/%s: %s", self.bucket, key, e)
            raise UploadError(f"Failed to upload {key}: {e}", key=key) from e

        logger.info("Uploaded %s to s3://%s (%d bytes)", key, self.bucket, len(data))

    def object_url(self, bucket: str, key: str) -> str:
        quoted_key = quote(key, safe="/~")
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{bucket}/{quoted_key}"
        return f"https://{bucket}.s3.{self.region}.amazonaws.com/{quoted_key}"
