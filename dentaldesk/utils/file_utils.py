"""
File attachment utilities.

Attachments are embedded in their incident as data URIs, so every helper
here works on bytes and MIME strings rather than paths on disk.
"""

import base64
import re
from datetime import datetime
from typing import Iterable, Optional, Tuple
from urllib.parse import unquote_to_bytes

from ..core.config import get_settings
from ..schemas.records import FileAttachment

DATA_URI_PATTERN = re.compile(r"^data:([^;,]*)((?:;[^;,]+)*),(.*)$", re.DOTALL)

IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}


def is_allowed_file_type(mime_type: str, allowed_types: Optional[Iterable[str]] = None) -> bool:
    """
    Check if a MIME type may be attached to an incident.

    Args:
        mime_type: MIME type reported for the upload
        allowed_types: Allowed MIME types, defaults to the configured list

    Returns:
        True if the type is allowed, False otherwise
    """
    if allowed_types is None:
        allowed_types = get_settings().allowed_file_types
    return mime_type in set(allowed_types)


def is_image_file(mime_type: str) -> bool:
    return mime_type in IMAGE_TYPES


def is_pdf_file(mime_type: str) -> bool:
    return mime_type == "application/pdf"


def validate_file_size(size_bytes: int, max_size_mb: Optional[int] = None) -> bool:
    """True when ``size_bytes`` is within the upload limit."""
    if max_size_mb is None:
        max_size_mb = get_settings().max_file_size_mb
    return size_bytes <= max_size_mb * 1024 * 1024


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., '1.5 KB', '0 Bytes')
    """
    value = float(size_bytes)
    for unit in ["Bytes", "KB", "MB"]:
        if value < 1024.0:
            return f"{round(value, 2):g} {unit}"
        value /= 1024.0
    return f"{round(value, 2):g} GB"


def encode_data_uri(content: bytes, mime_type: str) -> str:
    """Encode raw bytes as a base64 data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def decode_data_uri(url: str) -> Tuple[str, bytes]:
    """
    Split a data URI into its MIME type and decoded bytes.

    Args:
        url: 'data:<mime>[;base64],<payload>'

    Returns:
        Tuple of (mime_type, content)

    Raises:
        ValueError: If ``url`` is not a well-formed data URI
    """
    match = DATA_URI_PATTERN.match(url or "")
    if not match:
        raise ValueError("Not a data URI")

    mime_type = match.group(1) or "text/plain"
    params = match.group(2).split(";")
    payload = match.group(3)

    if "base64" in params:
        try:
            return mime_type, base64.b64decode(payload, validate=True)
        except ValueError as e:
            raise ValueError(f"Invalid base64 payload: {e}")
    return mime_type, unquote_to_bytes(payload)


def create_file_attachment(
    name: str,
    content: bytes,
    mime_type: str,
    max_size_mb: Optional[int] = None,
    allowed_types: Optional[Iterable[str]] = None,
) -> FileAttachment:
    """
    Build an attachment record with the file content inlined.

    Args:
        name: Original file name
        content: Raw file bytes
        mime_type: MIME type of the upload
        max_size_mb: Size limit, defaults to the configured limit
        allowed_types: Allowed MIME types, defaults to the configured list

    Returns:
        FileAttachment whose url carries the content

    Raises:
        ValueError: If the type is not allowed or the file is too large
    """
    if not is_allowed_file_type(mime_type, allowed_types):
        raise ValueError(f"File type not allowed: {mime_type}")

    if not validate_file_size(len(content), max_size_mb):
        limit = max_size_mb if max_size_mb is not None else get_settings().max_file_size_mb
        raise ValueError(f"File too large: {name}. Maximum size is {limit}MB")

    return FileAttachment(
        name=name,
        type=mime_type,
        size=len(content),
        url=encode_data_uri(content, mime_type),
        uploaded_at=datetime.now(),
    )
