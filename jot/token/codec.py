"""Compact three-segment codec with strict unpadded base64url segments."""

import base64
import re

from jot.core.errors import InvalidEncodingError, MalformedTokenError

SEPARATOR = "."
SEGMENT_COUNT = 3

_SEGMENT_ALPHABET = re.compile(r"[A-Za-z0-9_-]+")


def encode_segment(data: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode_segment(segment: str) -> bytes:
    """Decode a canonical unpadded base64url segment.

    Padding, whitespace, characters outside the URL-safe alphabet and
    non-zero trailing bits are all rejected rather than repaired.
    """
    if not isinstance(segment, str) or not _SEGMENT_ALPHABET.fullmatch(segment):
        raise InvalidEncodingError("Segment is not unpadded base64url")
    if len(segment) % 4 == 1:
        raise InvalidEncodingError("Segment has an impossible base64 length")
    raw = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    if encode_segment(raw) != segment:
        raise InvalidEncodingError("Segment is not canonical base64url")
    return raw


def split(token: str) -> tuple[str, str, str]:
    """Split a compact token into header, claims and signature segments."""
    if not isinstance(token, str):
        raise MalformedTokenError("Token must be a string")
    parts = token.split(SEPARATOR)
    if len(parts) != SEGMENT_COUNT:
        raise MalformedTokenError(
            f"Token must have {SEGMENT_COUNT} segments, found {len(parts)}"
        )
    if not all(parts):
        raise MalformedTokenError("Token segments must not be empty")
    header, claims, signature = parts
    return header, claims, signature


def join(*segments: str) -> str:
    return SEPARATOR.join(segments)


def signing_input(header_segment: str, claims_segment: str) -> bytes:
    """Bytes covered by the signature: the two encoded segments joined by '.'."""
    return join(header_segment, claims_segment).encode("ascii")
