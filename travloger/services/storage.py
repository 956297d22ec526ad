"""
Supabase Storage service for media uploads (package images, hotel icons,
destination videos...).

Files are stored as {folder}/{slug}/{timestamp}-{safe-name} in a single bucket.
"""

import re
import time
from pathlib import Path
from typing import Optional, Tuple

from supabase import Client, create_client

from travloger.config import get_settings
from travloger.utils import slugify

# Maximum sizes per media kind
MAX_IMAGE_SIZE = 4 * 1024 * 1024
MAX_VIDEO_SIZE = 20 * 1024 * 1024

EXT_TO_MIME = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
}


class StorageError(Exception):
    """Raised when the storage bucket rejects an operation."""


def get_supabase_client() -> Client:
    """Get Supabase client with service role key for storage operations."""
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
    )


def get_mime_type(filename: str) -> str:
    """Get MIME type from filename extension."""
    return EXT_TO_MIME.get(Path(filename).suffix.lower(), "application/octet-stream")


def validate_media(
    file_content: bytes,
    filename: str,
    mime_type: Optional[str] = None,
) -> Tuple[bool, str]:
    """
    Validate an uploaded image or video.

    Returns (is_valid, error_message).
    """
    actual_mime = mime_type or get_mime_type(filename)

    if actual_mime.startswith("image/"):
        limit = MAX_IMAGE_SIZE
    elif actual_mime.startswith("video/"):
        limit = MAX_VIDEO_SIZE
    else:
        return False, "Invalid file type. Only images and videos are allowed"

    if not file_content:
        return False, "File is empty"

    if len(file_content) > limit:
        return False, f"File too large. Maximum size is {limit // (1024 * 1024)}MB"

    return True, ""


def safe_filename(filename: str) -> str:
    """Keep the extension, reduce the stem to [A-Za-z0-9._-]."""
    path = Path(filename or "file")
    stem = re.sub(r"[^A-Za-z0-9._-]+", "_", path.stem).strip("_") or "file"
    return f"{stem}{path.suffix.lower()}"


def build_storage_path(
    folder: str,
    slug: str,
    filename: str,
    timestamp_ms: Optional[int] = None,
) -> str:
    """Build the bucket path {folder}/{slug}/{timestamp}-{safe-name}."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    folder_part = slugify(folder) or "uploads"
    slug_part = slugify(slug) or "general"
    return f"{folder_part}/{slug_part}/{timestamp_ms}-{safe_filename(filename)}"


async def upload_media(
    file_content: bytes,
    original_filename: str,
    folder: str,
    slug: str,
    mime_type: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Upload a file to Supabase Storage.

    Returns:
        Tuple of (storage_path, public_url)
    """
    is_valid, error = validate_media(file_content, original_filename, mime_type)
    if not is_valid:
        raise ValueError(error)

    settings = get_settings()
    client = get_supabase_client()
    bucket = client.storage.from_(settings.storage_bucket)

    storage_path = build_storage_path(folder, slug, original_filename)
    actual_mime = mime_type or get_mime_type(original_filename)

    try:
        bucket.upload(
            path=storage_path,
            file=file_content,
            file_options={
                "content-type": actual_mime,
                "cache-control": "3600",
            },
        )
    except Exception as exc:
        raise StorageError(f"Upload failed: {exc}") from exc

    return storage_path, bucket.get_public_url(storage_path)


async def delete_media(storage_path: str) -> bool:
    """Delete a file from the media bucket."""
    settings = get_settings()
    client = get_supabase_client()

    try:
        client.storage.from_(settings.storage_bucket).remove([storage_path])
    except Exception as exc:
        raise StorageError(f"Delete failed: {exc}") from exc

    return True
