"""Storage package: single-bucket object storage gateway."""

from bucketgate.storage.contracts import (
    NO_EXPIRATION,
    ConfigurationError,
    Failed,
    Found,
    GatewayConfig,
    NotFound,
    ObjectGateway,
    ObjectMetadata,
    StorageError,
    UploadForm,
)
from bucketgate.storage.s3_gateway import S3Gateway

__all__ = [
    "NO_EXPIRATION",
    "ConfigurationError",
    "Failed",
    "Found",
    "GatewayConfig",
    "NotFound",
    "ObjectGateway",
    "ObjectMetadata",
    "S3Gateway",
    "StorageError",
    "UploadForm",
]
