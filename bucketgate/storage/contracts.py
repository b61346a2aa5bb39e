"""Storage gateway interfaces, value types and error types."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Protocol, Union, runtime_checkable

DEFAULT_LINK_EXPIRATION_SECONDS = 4 * 60 * 60

# Longest lifetime S3 accepts for a SigV4 presigned request
MAX_LINK_EXPIRATION_SECONDS = 7 * 24 * 60 * 60

_NEVER_WORDS = frozenset({"never", "none", "inf", "infinity"})


class StorageError(Exception):
    """Base error raised by the gateway itself, with operation context."""

    def __init__(self, op: str, bucket: str | None, key: str | None, message: str):
        self.op = op
        self.bucket = bucket
        self.key = key
        self.message = message
        super().__init__(self.__str__())

    def __str__(self) -> str:
        bucket_repr = self.bucket or "<unknown>"
        key_repr = self.key or "<unknown>"
        return f"{self.op} failed for bucket={bucket_repr} key={key_repr}: {self.message}"


class ConfigurationError(StorageError, ValueError):
    """Missing or invalid gateway configuration."""

    def __init__(self, message: str, bucket: str | None = None):
        super().__init__(op="configure", bucket=bucket, key=None, message=message)


class NoExpiration(enum.Enum):
    """Marker for links that should live as long as the signer allows."""

    NEVER = "never"

    def __repr__(self) -> str:
        return "NO_EXPIRATION"


NO_EXPIRATION = NoExpiration.NEVER

Expiration = Union[int, NoExpiration]


def validate_expiration(value: Expiration, *, bucket: str | None = None) -> Expiration:
    """Reject anything that is not positive whole seconds or ``NO_EXPIRATION``."""
    if value is NO_EXPIRATION:
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"expiration must be whole seconds or NO_EXPIRATION, got {value!r}", bucket
        )
    if value <= 0:
        raise ConfigurationError(f"expiration must be positive, got {value}", bucket)
    return value


def parse_expiration(value: str | int | None) -> Expiration | None:
    """Parse an expiration from configuration.

    Args:
        value: Seconds as int or string, a "never" word, or empty.

    Returns:
        Seconds, ``NO_EXPIRATION``, or None when the default should apply.

    Raises:
        ConfigurationError: The value is neither seconds nor a "never" word.
    """
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return validate_expiration(value) if value else None

    text = str(value).strip().lower()
    if not text:
        return None
    if text in _NEVER_WORDS:
        return NO_EXPIRATION
    if not text.isdigit():
        raise ConfigurationError(f"unrecognised link expiration {value!r}")
    seconds = int(text)
    return validate_expiration(seconds) if seconds else None


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    """Immutable connection settings for one bucket.

    ``link_expiration_seconds`` of None or 0 selects the four hour default.
    ``endpoint`` is an S3-compatible host[:port]; None targets AWS.
    """

    bucket: str
    region: str
    access_key: str
    secret_key: str
    link_expiration_seconds: Expiration | None = None
    endpoint: str | None = None
    secure: bool = True

    def __post_init__(self) -> None:
        if not self.bucket:
            raise ConfigurationError("bucket is required")
        if not self.region:
            raise ConfigurationError("region is required", self.bucket)
        if not self.access_key or not self.secret_key:
            raise ConfigurationError("access key and secret key are required", self.bucket)

        expiration = self.link_expiration_seconds
        if expiration is None or expiration == 0:
            expiration = DEFAULT_LINK_EXPIRATION_SECONDS
        object.__setattr__(
            self,
            "link_expiration_seconds",
            validate_expiration(expiration, bucket=self.bucket),
        )

    def __repr__(self) -> str:
        return (
            f"GatewayConfig(bucket={self.bucket!r}, region={self.region!r}, "
            f"endpoint={self.endpoint!r}, link_expiration_seconds={self.link_expiration_seconds!r})"
        )


@dataclass(frozen=True, slots=True)
class UploadForm:
    """Target and signed fields for a browser-style multipart POST upload."""

    url: str
    fields: tuple[tuple[str, str], ...]

    def as_dict(self) -> dict[str, str]:
        return dict(self.fields)


@dataclass(frozen=True, slots=True)
class ObjectMetadata:
    """Result of a metadata-only lookup."""

    size: int = 0
    checksum: str | None = None  # base64 SHA-256, when the store reports one
    etag: str | None = None
    content_type: str | None = None


@dataclass(frozen=True, slots=True)
class Found:
    metadata: ObjectMetadata


@dataclass(frozen=True, slots=True)
class NotFound:
    key: str
    error: Exception


@dataclass(frozen=True, slots=True)
class Failed:
    key: str
    error: Exception


HeadOutcome = Union[Found, NotFound, Failed]


@runtime_checkable
class ObjectGateway(Protocol):
    """Contract for single-bucket object storage gateways."""

    def create_upload_url(
        self,
        key: str,
        *,
        max_size_bytes: int | None = None,
        expiration_seconds: Expiration | None = None,
    ) -> str:
        ...

    def create_upload_form(self, key: str, *, max_size_bytes: int | None = None) -> UploadForm:
        ...

    def create_download_url(self, key: str, *, expiration_seconds: Expiration | None = None) -> str:
        ...

    def get_public_url(self, key: str) -> str:
        ...

    def delete_object(self, key: str) -> None:
        ...

    def lookup(self, key: str) -> HeadOutcome:
        ...

    def head_object(
        self, key: str, *, on_not_found: Callable[[], object] | None = None
    ) -> ObjectMetadata:
        ...

    def exists(self, key: str) -> bool:
        ...

    def get_object_size(self, key: str) -> int:
        ...

    def get_object_checksum(self, key: str) -> str | None:
        ...


__all__ = [
    "DEFAULT_LINK_EXPIRATION_SECONDS",
    "MAX_LINK_EXPIRATION_SECONDS",
    "NO_EXPIRATION",
    "ConfigurationError",
    "Expiration",
    "Failed",
    "Found",
    "GatewayConfig",
    "HeadOutcome",
    "NoExpiration",
    "NotFound",
    "ObjectGateway",
    "ObjectMetadata",
    "StorageError",
    "UploadForm",
    "parse_expiration",
    "validate_expiration",
]
