"""Binary <-> text conversion for stored resume files.

Files travel and rest as data URLs: ``data:<media-type>;base64,<payload>``.
The payload is single-line standard base64 so that ``decode(encode(b)) == b``
byte for byte.
"""
from __future__ import annotations

import base64
import binascii
import re
from typing import Optional

from portfolio_admin.exceptions import CorruptPayloadError, InvalidTypeError

PDF_MEDIA_TYPE = "application/pdf"
ACCEPTED_MEDIA_TYPES = frozenset({PDF_MEDIA_TYPE})

_DATA_URL_PREFIX = re.compile(r"^data:(?P<media_type>[^;,]*)(?:;[^;,]+)*?;base64,", re.IGNORECASE)


def check_media_type(declared: Optional[str]) -> str:
    """Return the normalised media type, or raise InvalidTypeError if it is not accepted."""
    media_type = (declared or "").split(";", 1)[0].strip().lower()
    if media_type not in ACCEPTED_MEDIA_TYPES:
        raise InvalidTypeError("Please upload a PDF file only.")
    return media_type


def encode(data: bytes, media_type: str = PDF_MEDIA_TYPE) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{payload}"


def split_data_url(text: str) -> tuple[Optional[str], str]:
    """Split off the media-type marker. Returns (media_type or None, payload)."""
    match = _DATA_URL_PREFIX.match(text)
    if match is None:
        return None, text
    return (match.group("media_type").lower() or None), text[match.end():]


def decode(text: str) -> bytes:
    """Strip an optional data-URL marker and reverse the base64 encoding.

    Raises CorruptPayloadError when the payload is not strictly valid base64.
    """
    _, payload = split_data_url(text)
    try:
        return base64.b64decode(payload.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise CorruptPayloadError("Stored file data is not valid base64", cause=e) from e
