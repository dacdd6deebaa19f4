"""
Base64 payload codec.

Converts between the text form used inside JSON bodies and raw bytes.
Decoding is strict about the alphabet but forgiving about line wrapping
and missing trailing padding, which many clients produce.
"""

import base64
import binascii
import re

from src.errors import MalformedEncodingError

_WHITESPACE_RE = re.compile(r"\s+")


def decode_payload(text: str) -> bytes:
    """Decode standard base64 text into bytes.

    Raises:
        MalformedEncodingError: on characters outside the base64 alphabet
            or a length no padding can repair.
    """
    compact = _WHITESPACE_RE.sub("", text)
    remainder = len(compact) % 4
    if remainder:
        compact += "=" * (4 - remainder)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedEncodingError(
            "Payload is not valid base64",
            details=str(exc),
        ) from exc


def encode_payload(data: bytes) -> str:
    """Encode bytes as standard base64 without line breaks."""
    return base64.b64encode(data).decode("ascii")
