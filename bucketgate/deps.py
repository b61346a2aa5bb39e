"""Shared gateway instance for application code."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bucketgate.storage.s3_gateway import S3Gateway

_gateway: "S3Gateway | None" = None


def get_gateway() -> "S3Gateway":
    """Get or lazily initialize the gateway singleton.

    Lazy initialization keeps missing credentials from failing at import time.
    """
    global _gateway
    if _gateway is None:
        from bucketgate.storage.factory import build_gateway

        _gateway = build_gateway()
    return _gateway


def reset_gateway() -> None:
    """Drop the cached gateway so the next call rebuilds it from settings."""
    global _gateway
    _gateway = None


__all__ = ["get_gateway", "reset_gateway"]
