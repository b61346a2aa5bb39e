"""S3 gateway backed by the MinIO SDK request signer and object API."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from minio import Minio
from minio.datatypes import PostPolicy
from minio.error import S3Error

from bucketgate.storage.contracts import (
    MAX_LINK_EXPIRATION_SECONDS,
    NO_EXPIRATION,
    Expiration,
    Failed,
    Found,
    GatewayConfig,
    HeadOutcome,
    NotFound,
    ObjectGateway,
    ObjectMetadata,
    UploadForm,
    validate_expiration,
)

logger = logging.getLogger(__name__)

CHECKSUM_MODE_HEADER = "x-amz-checksum-mode"
CHECKSUM_SHA256_HEADER = "x-amz-checksum-sha256"

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchObject", "NotFound"})


def is_not_found(exc: BaseException) -> bool:
    """True when a provider error carries a not-found signal.

    HEAD responses have no error body, so the SDK reports any 404 on an
    object as NoSuchKey; a missing bucket therefore also reads as not found.
    """
    if not isinstance(exc, S3Error):
        return False
    if exc.code in _NOT_FOUND_CODES:
        return True
    response = getattr(exc, "response", None)
    return getattr(response, "status", None) == 404


class S3Gateway(ObjectGateway):
    """Presigned links and metadata lookups for a single bucket.

    Every call is one independent request against the store; the only state
    held is the immutable config. Provider errors are never wrapped.
    """

    def __init__(self, config: GatewayConfig, client: Minio):
        self._config = config
        self._client = client

    @property
    def config(self) -> GatewayConfig:
        return self._config

    # ---------------
    # Presigned links
    # ---------------
    def create_upload_url(
        self,
        key: str,
        *,
        max_size_bytes: int | None = None,
        expiration_seconds: Expiration | None = None,
    ) -> str:
        """Presign a PUT of the raw object body.

        A PUT link cannot carry a size limit, so ``max_size_bytes`` is
        accepted and ignored. Use :meth:`create_upload_form` to cap uploads.

        Args:
            key: Object path in the bucket, eg "foo.png" or "foo/bar.txt".
            max_size_bytes: Ignored for PUT links.
            expiration_seconds: Overrides the configured lifetime;
                ``NO_EXPIRATION`` leaves the signer's maximum in place.
        """
        if max_size_bytes is not None:
            logger.debug("max_size_bytes has no effect on PUT links (key=%s)", key)
        return self._client.presigned_put_object(
            self._config.bucket, key, **self._expires_kwargs(expiration_seconds)
        )

    def create_upload_form(self, key: str, *, max_size_bytes: int | None = None) -> UploadForm:
        """Presign a multipart POST upload using the configured lifetime.

        When ``max_size_bytes`` is given the signed policy carries a
        content-length-range of [0, max_size_bytes] and the store itself
        rejects larger bodies.

        Returns:
            UploadForm whose fields go into the form, in order, before the file.
        """
        expires = self._resolve_expiration(None)
        if expires is None:
            expires = timedelta(seconds=MAX_LINK_EXPIRATION_SECONDS)

        policy = PostPolicy(self._config.bucket, datetime.now(timezone.utc) + expires)
        policy.add_equals_condition("key", key)
        if max_size_bytes is not None:
            policy.add_content_length_range_condition(0, max_size_bytes)

        form_data = self._client.presigned_post_policy(policy)
        fields = [("key", key)]
        fields.extend((name, value) for name, value in form_data.items() if name != "key")
        logger.debug(
            "Signed upload form for key=%s max_size_bytes=%s expires_in=%s",
            key,
            max_size_bytes,
            expires,
        )
        return UploadForm(url=self._bucket_url(), fields=tuple(fields))

    def create_download_url(self, key: str, *, expiration_seconds: Expiration | None = None) -> str:
        """Presign a time-limited GET of the object."""
        return self._client.presigned_get_object(
            self._config.bucket, key, **self._expires_kwargs(expiration_seconds)
        )

    def get_public_url(self, key: str) -> str:
        """Unsigned URL of the object.

        Whether it resolves depends entirely on the bucket's access policy;
        nothing is checked here.
        """
        return f"{self._bucket_url().rstrip('/')}/{key}"

    # --------------
    # Object actions
    # --------------
    def delete_object(self, key: str) -> None:
        # S3 answers success whether or not the key existed
        self._client.remove_object(self._config.bucket, key)
        logger.info("Deleted object bucket=%s key=%s", self._config.bucket, key)

    def lookup(self, key: str) -> HeadOutcome:
        """Metadata-only lookup reported as Found, NotFound or Failed.

        Never raises for provider or transport failures; the caught exception
        rides along on the outcome so callers can re-raise it unchanged.
        """
        try:
            stat = self._client.stat_object(
                self._config.bucket,
                key,
                extra_headers={CHECKSUM_MODE_HEADER: "ENABLED"},
            )
        except S3Error as exc:
            if is_not_found(exc):
                logger.debug("Object not found bucket=%s key=%s", self._config.bucket, key)
                return NotFound(key=key, error=exc)
            return Failed(key=key, error=exc)
        except Exception as exc:
            return Failed(key=key, error=exc)

        headers = stat.metadata or {}
        return Found(
            ObjectMetadata(
                size=stat.size or 0,
                checksum=headers.get(CHECKSUM_SHA256_HEADER) or None,
                etag=stat.etag,
                content_type=stat.content_type,
            )
        )

    def head_object(
        self, key: str, *, on_not_found: Callable[[], object] | None = None
    ) -> ObjectMetadata:
        """Fetch object metadata, raising the provider error on any failure.

        ``on_not_found`` runs before a not-found error is re-raised; it does
        not suppress the error.
        """
        outcome = self.lookup(key)
        if isinstance(outcome, NotFound) and on_not_found is not None:
            on_not_found()
        return _require_metadata(outcome)

    def exists(self, key: str) -> bool:
        outcome = self.lookup(key)
        if isinstance(outcome, Failed):
            raise outcome.error
        return isinstance(outcome, Found)

    def get_object_size(self, key: str) -> int:
        return _require_metadata(self.lookup(key)).size

    def get_object_checksum(self, key: str) -> str | None:
        """Base64 SHA-256 reported by the store.

        None for objects uploaded without a SHA-256 checksum.
        """
        return _require_metadata(self.lookup(key)).checksum

    # -------
    # Helpers
    # -------
    def _resolve_expiration(self, override: Expiration | None) -> timedelta | None:
        """Per-call value wins over config; None means leave it to the signer."""
        if override is None:
            expiration = self._config.link_expiration_seconds
        else:
            expiration = validate_expiration(override, bucket=self._config.bucket)
        if expiration is NO_EXPIRATION:
            return None
        return timedelta(seconds=expiration)

    def _expires_kwargs(self, override: Expiration | None) -> dict[str, timedelta]:
        expires = self._resolve_expiration(override)
        return {} if expires is None else {"expires": expires}

    def _bucket_url(self) -> str:
        config = self._config
        if config.endpoint is None:
            return f"https://{config.bucket}.s3.{config.region}.amazonaws.com/"
        scheme = "https" if config.secure else "http"
        return f"{scheme}://{config.endpoint}/{config.bucket}"


def _require_metadata(outcome: HeadOutcome) -> ObjectMetadata:
    if isinstance(outcome, Found):
        return outcome.metadata
    raise outcome.error


__all__ = ["S3Gateway", "is_not_found"]
