# ============================================
# tracker/uploads.py
# ============================================
import base64
from typing import Optional, Tuple

from django.conf import settings

from tracker.exceptions import ValidationError

DEFAULT_MAX_BYTES = 5 * 1024 * 1024


def max_upload_bytes() -> int:
    return int(getattr(settings, 'UPLOAD_MAX_BYTES', DEFAULT_MAX_BYTES))


def validate_image(content_type: str, size: int, max_bytes: Optional[int] = None) -> None:
    limit = max_bytes if max_bytes is not None else max_upload_bytes()
    if not (content_type or '').startswith('image/'):
        raise ValidationError("Only image files are allowed")
    if size > limit:
        raise ValidationError(f"File size must be less than {limit / (1024 * 1024):g}MB")


def read_image(upload) -> Tuple[bytes, str]:
    """Validate an uploaded file and return (bytes, mime type)."""
    validate_image(getattr(upload, 'content_type', ''), getattr(upload, 'size', 0))
    return upload.read(), upload.content_type


def blob_payload(data, content_type: str):
    if not data:
        return None
    return {
        'data': base64.b64encode(bytes(data)).decode('ascii'),
        'contentType': content_type,
    }
