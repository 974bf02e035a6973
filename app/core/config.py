"""
Application configuration using Pydantic Settings
"""

from typing import Dict
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # API Settings
    api_title: str = "Image Upload API"
    api_description: str = "Validates images and publishes them to S3 behind an optional CDN"
    api_version: str = "1.0.0"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # AWS S3 Settings
    aws_s3_bucket: str = ""
    aws_s3_region: str = "us-east-1"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_s3_endpoint_url: str = ""  # S3-compatible endpoint (MinIO, R2, ...)
    aws_s3_prefix: str = "images/"  # S3 object key prefix for uploads
    """
    AWS S3 configuration for image upload.
    aws_s3_bucket: default bucket used when none is passed explicitly
    aws_s3_region: S3 region
    aws_access_key_id / aws_secret_access_key: leave empty to use the boto3 credential chain
    """

    # CDN Settings
    default_cdn: str = ""
    cdns: Dict[str, str] = {}  # CDN name -> domain, JSON in env: CDNS='{"cloudfront": "https://d1.cloudfront.net"}'

    # Image Settings
    image_key_length: int = 20
    image_fallback_extension: str = "bin"
    max_image_size: int = 10 * 1024 * 1024  # 10MB
    resizer_url: str = ""

    @field_validator("resizer_url", "aws_s3_endpoint_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: str = ""  # e.g. data/app.log; empty disables file logging

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def default_cdn_domain(self) -> str:
        """Domain of the configured default CDN, or empty string."""
        if not self.default_cdn:
            return ""
        return self.cdns.get(self.default_cdn, "")


# Global settings instance
settings = Settings()
