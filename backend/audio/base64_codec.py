"""
Base64 text <-> raw bytes for TTS audio payloads.

Standard alphabet only. Padding is optional on input and always written on
output. ASCII whitespace (line wrapping) is ignored on input.
"""

from __future__ import annotations

import base64
import binascii
import re

from audio.errors import MalformedEncodingError

_WHITESPACE_RE = re.compile(r"[\t\n\f\r ]+")
_BASE64_RE = re.compile(r"([A-Za-z0-9+/]*)(=*)")


def encode_base64(raw: bytes) -> str:
    """Encode raw bytes as padded standard base64."""
    return base64.b64encode(raw).decode("ascii")


def decode_base64(text: str | bytes) -> bytes:
    """
    Decode a base64 payload into the exact bytes it encodes.

    Raises:
        MalformedEncodingError on any character outside the alphabet, on
        padding that is misplaced or does not complete a 4-character group,
        or on a length that base64 grouping cannot produce.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("ascii")
        except UnicodeDecodeError as e:
            raise MalformedEncodingError("Base64 payload is not ASCII") from e
    elif not isinstance(text, str):
        raise MalformedEncodingError(
            f"Expected str or bytes, got {type(text).__name__}"
        )

    compact = _WHITESPACE_RE.sub("", text)

    match = _BASE64_RE.fullmatch(compact)
    if match is None:
        raise MalformedEncodingError("Base64 payload contains invalid characters")

    body, padding = match.groups()

    if len(padding) > 2:
        raise MalformedEncodingError(f"Too much padding: {len(padding)} '=' characters")

    if len(body) % 4 == 1:
        raise MalformedEncodingError(
            f"Invalid base64 length: {len(body)} significant characters"
        )

    if padding and (len(body) + len(padding)) % 4 != 0:
        raise MalformedEncodingError("Padding does not complete a 4-character group")

    padded = body + "=" * (-len(body) % 4)

    try:
        return base64.b64decode(padded, validate=True)
    except binascii.Error as e:
        raise MalformedEncodingError(f"Invalid base64 encoding: {e}") from e
