"""multipart/form-data body construction for media uploads."""

from __future__ import annotations

import uuid
from typing import Mapping, Optional, Sequence

from service_handler.models import MediaFile

CRLF = b"\r\n"


def new_boundary() -> str:
    """Return a fresh, unguessable boundary token."""
    return str(uuid.uuid4())


def content_type(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"


def build_multipart_body(
    media: Sequence[MediaFile],
    additional_fields: Optional[Mapping[str, str]],
    boundary: str,
) -> bytes:
    """Encode fields, then files, then the closing boundary.

    Fields come first in mapping order, files follow in sequence order.
    Every line ends with CRLF.
    """
    delimiter = f"--{boundary}".encode("utf-8")
    parts = []

    for name, value in (additional_fields or {}).items():
        parts.append(delimiter + CRLF)
        parts.append(f'Content-Disposition: form-data; name="{name}"'.encode("utf-8") + CRLF + CRLF)
        parts.append(str(value).encode("utf-8") + CRLF)

    for item in media:
        parts.append(delimiter + CRLF)
        parts.append(
            f'Content-Disposition: form-data; name="{item.field_name}"; filename="{item.file_name}"'.encode("utf-8")
            + CRLF
        )
        parts.append(f"Content-Type: {item.mime_type}".encode("utf-8") + CRLF + CRLF)
        parts.append(bytes(item.data) + CRLF)

    parts.append(delimiter + b"--" + CRLF)
    return b"".join(parts)
