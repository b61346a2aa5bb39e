"""Factory for building gateway instances from configuration."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from minio import Minio

from bucketgate.core.config import Settings
from bucketgate.storage.contracts import GatewayConfig, parse_expiration
from bucketgate.storage.s3_gateway import S3Gateway

logger = logging.getLogger(__name__)

AWS_ENDPOINT = "s3.amazonaws.com"


def _normalize_endpoint(endpoint: str) -> tuple[str, bool]:
    """Extract host:port from endpoint URL and determine if secure (https).

    Bare hosts without a scheme are treated as https.

    Returns:
        Tuple of (host:port, secure_flag)
    """
    if "://" not in endpoint:
        return endpoint.rstrip("/"), True
    parsed = urlparse(endpoint)
    secure = parsed.scheme == "https"
    host = parsed.netloc or parsed.path.rstrip("/")
    return host, secure


def config_from_settings(settings: Settings) -> GatewayConfig:
    endpoint: str | None = None
    secure = True
    if settings.S3_ENDPOINT.strip():
        endpoint, secure = _normalize_endpoint(settings.S3_ENDPOINT.strip())

    return GatewayConfig(
        bucket=settings.S3_BUCKET.strip(),
        region=settings.S3_REGION.strip(),
        access_key=settings.S3_ACCESS_KEY,
        secret_key=settings.S3_SECRET_KEY,
        link_expiration_seconds=parse_expiration(settings.S3_LINK_EXPIRATION),
        endpoint=endpoint,
        secure=secure,
    )


def build_client(config: GatewayConfig) -> Minio:
    """Create the SDK client for a config.

    The region is always passed so signing never needs a bucket-location
    round trip.
    """
    return Minio(
        config.endpoint or AWS_ENDPOINT,
        access_key=config.access_key,
        secret_key=config.secret_key,
        secure=config.secure,
        region=config.region,
    )


def create_gateway(config: GatewayConfig) -> S3Gateway:
    gateway = S3Gateway(config, build_client(config))
    logger.info(
        "Initialized storage gateway bucket=%s region=%s endpoint=%s",
        config.bucket,
        config.region,
        config.endpoint or AWS_ENDPOINT,
    )
    return gateway


def build_gateway(settings: Settings | None = None) -> S3Gateway:
    """Build an S3Gateway from environment variables.

    Environment variables:
        S3_BUCKET: Bucket name (required)
        S3_REGION: Bucket region (default: us-east-1)
        S3_ACCESS_KEY: Access key id (required)
        S3_SECRET_KEY: Secret access key (required)
        S3_ENDPOINT: S3-compatible endpoint URL; empty targets AWS
        S3_LINK_EXPIRATION: Link lifetime in seconds, or "never" (default: 4 hours)

    Raises:
        ConfigurationError: A required value is missing or invalid.
    """
    return create_gateway(config_from_settings(settings or Settings()))


__all__ = ["build_client", "build_gateway", "config_from_settings", "create_gateway"]
