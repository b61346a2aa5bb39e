#!/usr/bin/env python3
"""
End-to-end demo for the storage gateway.

Prerequisites:
    1. A bucket you can write to
    2. S3_BUCKET, S3_REGION, S3_ACCESS_KEY and S3_SECRET_KEY set in .env
       (S3_ENDPOINT too when targeting MinIO or another S3-compatible store)

Usage:
    python scripts/presign_demo.py --file path/to/file.png

    # Custom key and size cap:
    python scripts/presign_demo.py --file photo.jpg --key demo/photo.jpg --max-size 5000000

    # Leave the object in place afterwards:
    python scripts/presign_demo.py --file photo.jpg --keep
"""

import argparse
import sys
import uuid
from pathlib import Path

import httpx

from bucketgate.core.config import Settings
from bucketgate.core.logging import setup_logging
from bucketgate.storage import ConfigurationError, S3Gateway, UploadForm
from bucketgate.storage.factory import build_gateway

DEFAULT_MAX_SIZE = 10 * 1024 * 1024


def upload_with_form(client: httpx.Client, form: UploadForm, file_path: Path) -> httpx.Response:
    """POST the file through a presigned form. Fields must precede the file."""
    with open(file_path, "rb") as f:
        files = {"file": (file_path.name, f, "application/octet-stream")}
        resp = client.post(form.url, data=form.as_dict(), files=files)
        resp.raise_for_status()
        return resp


def download(client: httpx.Client, url: str) -> bytes:
    resp = client.get(url)
    resp.raise_for_status()
    return resp.content


def report_metadata(gateway: S3Gateway, key: str) -> None:
    print(f"  Exists: {gateway.exists(key)}")
    print(f"  Size: {gateway.get_object_size(key)} bytes")
    print(f"  SHA-256: {gateway.get_object_checksum(key) or 'not reported'}")


def main():
    parser = argparse.ArgumentParser(description="E2E demo for the storage gateway")
    parser.add_argument("--file", "-f", type=Path, required=True, help="Path to a local file")
    parser.add_argument("--key", "-k", help="Object key (default: demo/<uuid>/<filename>)")
    parser.add_argument("--max-size", type=int, default=DEFAULT_MAX_SIZE, help="Upload size cap in bytes")
    parser.add_argument("--keep", action="store_true", help="Do not delete the object at the end")
    args = parser.parse_args()

    settings = Settings()
    setup_logging(settings.LOG_LEVEL)

    if not args.file.exists():
        print(f"Error: file not found: {args.file}")
        sys.exit(1)

    key = args.key or f"demo/{uuid.uuid4()}/{args.file.name}"

    print("=" * 60)
    print("STORAGE GATEWAY - E2E DEMO")
    print("=" * 60)

    try:
        gateway = build_gateway(settings)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    with httpx.Client(timeout=30.0) as client:
        # Step 1: Key should not exist yet
        print(f"\n[1/5] Checking key: {key}")
        if gateway.exists(key):
            print("  Error: key already exists, pick another with --key")
            sys.exit(1)
        print("  Key is free")

        # Step 2: Upload through a size-capped form
        print(f"\n[2/5] Uploading {args.file.name} (cap {args.max_size} bytes)...")
        form = gateway.create_upload_form(key, max_size_bytes=args.max_size)
        try:
            upload_with_form(client, form, args.file)
        except httpx.HTTPStatusError as e:
            print(f"  Error uploading: {e.response.text}")
            sys.exit(1)
        print("  Upload accepted")

        # Step 3: Metadata
        print("\n[3/5] Reading metadata...")
        report_metadata(gateway, key)

        # Step 4: Download through a presigned GET
        print("\n[4/5] Downloading through a presigned URL...")
        url = gateway.create_download_url(key, expiration_seconds=300)
        try:
            body = download(client, url)
        except httpx.HTTPStatusError as e:
            print(f"  Error downloading: {e.response.status_code}")
            sys.exit(1)
        matches = body == args.file.read_bytes()
        print(f"  Downloaded {len(body)} bytes, content {'matches' if matches else 'DIFFERS'}")
        print(f"  Public URL (policy dependent): {gateway.get_public_url(key)}")

        # Step 5: Cleanup
        if args.keep:
            print("\n[5/5] Keeping object")
        else:
            print("\n[5/5] Deleting object...")
            gateway.delete_object(key)
            print(f"  Exists after delete: {gateway.exists(key)}")

    print("\n" + "=" * 60)
    print("DONE")
    print("=" * 60)
    sys.exit(0)


if __name__ == "__main__":
    main()
