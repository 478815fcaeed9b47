"""
Upload storage for the document locker and disease-detection images.

Stores to Cloudflare R2 if configured, otherwise the local UPLOAD_DIR.
"""

import logging
import uuid
from io import BytesIO
from pathlib import Path

from .config import settings

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "heic": "image/heic",
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class UploadRejected(ValueError):
    """The uploaded file failed type or size validation."""


def get_extension(filename: str) -> str:
    """Extract the lowercase file extension, or '' if there is none."""
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def validate_upload(filename: str, file_bytes: bytes, allowed_extensions: set) -> str:
    """Check extension and size. Returns the extension."""
    ext = get_extension(filename)
    if ext not in allowed_extensions:
        raise UploadRejected(
            f"File type '{ext}' not allowed. Allowed: {', '.join(sorted(allowed_extensions))}"
        )
    if len(file_bytes) == 0:
        raise UploadRejected("Empty file.")
    max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024
    if len(file_bytes) > max_bytes:
        raise UploadRejected(
            f"File too large ({len(file_bytes) / 1024 / 1024:.1f}MB). "
            f"Maximum is {settings.MAX_UPLOAD_MB}MB."
        )
    return ext


def _r2_configured() -> bool:
    return bool(
        settings.CLOUDFLARE_R2_ACCOUNT_ID
        and settings.CLOUDFLARE_R2_ACCESS_KEY_ID
        and settings.CLOUDFLARE_R2_SECRET_ACCESS_KEY
    )


def _upload_to_r2(file_bytes: bytes, key: str, content_type: str) -> str:
    import boto3

    s3 = boto3.client(
        "s3",
        endpoint_url=f"https://{settings.CLOUDFLARE_R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=settings.CLOUDFLARE_R2_ACCESS_KEY_ID,
        aws_secret_access_key=settings.CLOUDFLARE_R2_SECRET_ACCESS_KEY,
    )
    s3.upload_fileobj(
        BytesIO(file_bytes),
        settings.CLOUDFLARE_R2_BUCKET,
        key,
        ExtraArgs={"ContentType": content_type},
    )
    return f"https://{settings.CLOUDFLARE_R2_BUCKET}.{settings.CLOUDFLARE_R2_ACCOUNT_ID}.r2.dev/{key}"


def _save_locally(file_bytes: bytes, subdir: str, filename: str) -> str:
    upload_dir = Path(settings.UPLOAD_DIR) / subdir
    upload_dir.mkdir(parents=True, exist_ok=True)
    with open(upload_dir / filename, "wb") as f:
        f.write(file_bytes)
    return f"/uploads/{subdir}/{filename}"


def store_file(file_bytes: bytes, ext: str, subdir: str, prefix: str = "file") -> str:
    """Persist an already-validated upload and return its URL or path."""
    unique_name = f"{prefix}_{uuid.uuid4().hex[:12]}.{ext}"
    if _r2_configured():
        url = _upload_to_r2(file_bytes, f"{subdir}/{unique_name}", CONTENT_TYPES.get(ext, "application/octet-stream"))
    else:
        url = _save_locally(file_bytes, subdir, unique_name)
    logger.info("Stored upload %s (%d bytes)", url, len(file_bytes))
    return url


def delete_local_file(url: str) -> None:
    """Remove a locally stored upload. R2 objects and missing files are left alone."""
    if not url or not url.startswith("/uploads/"):
        return
    path = Path(settings.UPLOAD_DIR) / url[len("/uploads/"):]
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("Upload %s already removed", url)
