"""Hosted object-storage client for ebook cover images.

Responsibilities:
    * Derive unauthenticated public URLs for stored objects
    * Validate and upload new cover images
    * Remove replaced cover objects
"""
from __future__ import annotations

import os
import time
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import requests
from werkzeug.datastructures import FileStorage

from hackura import config
from hackura.utils.logging import get_logger

LOG = get_logger("hackura.storage")

ALLOWED_EXT = {"jpg", "jpeg", "png", "webp"}
MAX_IMAGE_BYTES = 3 * 1024 * 1024
_CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
}


def _storage_base() -> Optional[str]:
    base = config.supabase_url()
    if not base:
        return None
    return f"{base}/storage/v1"


def _api_headers() -> Dict[str, str]:
    key = config.supabase_api_key()
    if not key:
        return {}
    return {"Authorization": f"Bearer {key}", "apikey": key}


def _quote_object_id(object_id: str) -> str:
    return quote(object_id.strip().lstrip("/"), safe="/")


def get_public_url(object_id: Optional[str], bucket: Optional[str] = None) -> Optional[str]:
    """Return the public URL of a stored object, or None.

    None is returned for an empty object id and when the storage backend is
    not configured; templates then render the "No Image" placeholder.
    """
    if not object_id or not str(object_id).strip():
        return None
    base = _storage_base()
    if not base:
        LOG.debug("public url requested without SUPABASE_URL object=%s", object_id)
        return None
    target_bucket = bucket or config.covers_bucket()
    return f"{base}/object/public/{quote(target_bucket, safe='')}/{_quote_object_id(str(object_id))}"


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def validate_upload(file_storage: Optional[FileStorage]) -> Optional[str]:
    if not file_storage or not file_storage.filename:
        return "file_missing"
    if _extension(file_storage.filename) not in ALLOWED_EXT:
        return "unsupported_type"
    file_storage.stream.seek(0, os.SEEK_END)
    size = file_storage.stream.tell()
    file_storage.stream.seek(0)
    if size <= 0:
        return "file_missing"
    if size > MAX_IMAGE_BYTES:
        return "file_too_large"
    return None


def _generate_object_id(ext: str) -> str:
    rand = os.urandom(4).hex()
    epoch_ms = int(time.time() * 1000)
    return f"cover-{epoch_ms}-{rand}.{ext}"


def _parse_response(resp: requests.Response) -> Dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {"raw": resp.text}
    return data if isinstance(data, dict) else {"data": data}


def upload_cover(file_storage: Optional[FileStorage], timeout: int = 30) -> Tuple[bool, Dict[str, Any]]:
    err = validate_upload(file_storage)
    if err:
        return False, {"error": err}
    base = _storage_base()
    headers = _api_headers()
    if not base or not headers:
        return False, {"error": "api_key_missing"}
    ext = _extension(file_storage.filename or "")  # type: ignore[union-attr]
    object_id = _generate_object_id(ext)
    bucket = config.covers_bucket()
    headers.update({
        "Content-Type": _CONTENT_TYPES.get(ext, "application/octet-stream"),
        "x-upsert": "false",
    })
    url = f"{base}/object/{quote(bucket, safe='')}/{_quote_object_id(object_id)}"
    payload = file_storage.stream.read()  # type: ignore[union-attr]
    try:
        resp = requests.post(url, data=payload, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        LOG.warning("cover upload failed object=%s error=%s", object_id, exc)
        return False, {"error": "network_error"}
    if resp.status_code not in (200, 201):
        details = _parse_response(resp)
        LOG.warning("cover upload rejected object=%s status=%s details=%s", object_id, resp.status_code, details)
        return False, {"error": "http_error", "status": resp.status_code, "details": details}
    LOG.info("cover uploaded bucket=%s object=%s", bucket, object_id)
    return True, {"object_id": object_id, "public_url": get_public_url(object_id, bucket)}


def delete_object(object_id: Optional[str], timeout: int = 15) -> Tuple[bool, Dict[str, Any]]:
    if not object_id or not str(object_id).strip():
        return False, {"error": "object_missing"}
    base = _storage_base()
    headers = _api_headers()
    if not base or not headers:
        return False, {"error": "api_key_missing"}
    bucket = config.covers_bucket()
    try:
        resp = requests.delete(
            f"{base}/object/{quote(bucket, safe='')}",
            json={"prefixes": [str(object_id).strip()]},
            headers=headers,
            timeout=timeout,
        )
    except requests.RequestException as exc:
        LOG.warning("object delete failed object=%s error=%s", object_id, exc)
        return False, {"error": "network_error"}
    if resp.status_code != 200:
        return False, {"error": "http_error", "status": resp.status_code, "details": _parse_response(resp)}
    LOG.info("object deleted bucket=%s object=%s", bucket, object_id)
    return True, {"deleted": object_id}


__all__ = [
    "ALLOWED_EXT",
    "MAX_IMAGE_BYTES",
    "get_public_url",
    "validate_upload",
    "upload_cover",
    "delete_object",
]
