"""Sign, parse, and verify compact tokens.

Parsing and verification are separate on purpose. ``parse`` returns the
decoded header and claims without looking at the signature, which is
useful for picking a verification key (by ``kid`` or issuer) but yields
unauthenticated data. ``verify`` pins the algorithm the caller expects and
checks the signature; it does not enforce ``exp`` or ``nbf``, so callers
compose ``is_expired`` / ``is_not_yet_valid`` (or use TokenManager).
"""

import time
from collections.abc import Mapping
from datetime import datetime
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import PydanticSerializationError, from_json, to_json

from jot.core.errors import (
    AlgorithmMismatchError,
    InvalidSignatureError,
    MalformedTokenError,
    SerializationError,
    TokenError,
)
from jot.crypto import algorithms
from jot.crypto.algorithms import Algorithm, Key
from jot.token import codec
from jot.token.claims import Claims
from jot.token.component import Component
from jot.token.header import Header

logger = structlog.get_logger(__name__)


class Token(BaseModel):
    """An unsigned header and claims pair."""

    model_config = ConfigDict(frozen=True)

    header: Header = Field(default_factory=Header.default)
    claims: Claims = Field(default_factory=Claims)

    @classmethod
    def new(cls, header: Header, claims: Claims) -> "Token":
        return cls(header=header, claims=claims)

    def sign(self, key: Key) -> str:
        return sign(self, key)


def _serialize(fields: dict[str, Any]) -> bytes:
    try:
        return to_json(fields)
    except PydanticSerializationError as exc:
        raise SerializationError(str(exc)) from exc


def _deserialize(segment: str, part: str) -> Mapping[str, Any]:
    raw = codec.decode_segment(segment)
    try:
        data = from_json(raw, allow_inf_nan=False)
    except ValueError:
        raise MalformedTokenError(f"{part} is not valid JSON") from None
    if not isinstance(data, dict):
        raise MalformedTokenError(f"{part} must be a JSON object")
    return data


def sign(token: Token, key: Key) -> str:
    """Serialize, encode, and sign a token with its header's algorithm."""
    algorithm = token.header.algorithm
    header_segment = codec.encode_segment(_serialize(token.header.to_fields()))
    claims_segment = codec.encode_segment(_serialize(token.claims.to_fields()))
    signature = algorithms.sign(
        algorithm, key, codec.signing_input(header_segment, claims_segment)
    )
    logger.debug("token_signed", alg=algorithm.value)
    return codec.join(header_segment, claims_segment, codec.encode_segment(signature))


def parse(
    token: str,
    header_type: type[Component] | None = None,
    claims_type: type[Component] | None = None,
) -> Token:
    """Decode a token WITHOUT checking its signature.

    The result is attacker-controlled data; only use it to decide how to
    verify (for example, which key to load), never to authorize.
    """
    header_segment, claims_segment, signature_segment = codec.split(token)
    header = Header.from_fields(_deserialize(header_segment, "Header"), header_type)
    claims = Claims.from_fields(_deserialize(claims_segment, "Claims"), claims_type)
    codec.decode_segment(signature_segment)
    return Token(header=header, claims=claims)


def verify(
    token: str,
    key: Key,
    expected_algorithm: Algorithm | str,
    header_type: type[Component] | None = None,
    claims_type: type[Component] | None = None,
) -> Token:
    """Verify a token signed with expected_algorithm and return its contents.

    The header's alg must equal expected_algorithm; the header alone never
    selects the verification primitive. Expiry is not checked here.
    """
    expected = Algorithm.from_name(expected_algorithm)
    try:
        header_segment, claims_segment, signature_segment = codec.split(token)
        header = Header.from_fields(
            _deserialize(header_segment, "Header"), header_type
        )
        if header.algorithm is not expected:
            raise AlgorithmMismatchError(expected.value, header.algorithm.value)
        signature = codec.decode_segment(signature_segment)
        message = codec.signing_input(header_segment, claims_segment)
        if not algorithms.verify(expected, key, message, signature):
            raise InvalidSignatureError()
        claims = Claims.from_fields(
            _deserialize(claims_segment, "Claims"), claims_type
        )
    except TokenError as exc:
        logger.info("token_rejected", alg=expected.value, reason=type(exc).__name__)
        raise
    logger.debug("token_verified", alg=expected.value)
    return Token(header=header, claims=claims)


def epoch_seconds(now: datetime | float | None) -> float:
    """Epoch seconds for an aware datetime or a number. None means now."""
    if now is None:
        return time.time()
    if isinstance(now, datetime):
        if now.tzinfo is None or now.utcoffset() is None:
            raise ValueError("now must be a timezone-aware datetime")
        return now.timestamp()
    return float(now)


def is_expired(
    claims: Claims, now: datetime | float | None = None, leeway: int = 0
) -> bool:
    """True once now reaches exp (plus leeway). No exp means never expired."""
    if claims.expiration_time is None:
        return False
    return epoch_seconds(now) >= claims.expiration_time + leeway


def is_not_yet_valid(
    claims: Claims, now: datetime | float | None = None, leeway: int = 0
) -> bool:
    """True while now is before nbf (minus leeway). No nbf means always valid."""
    if claims.not_before is None:
        return False
    return epoch_seconds(now) < claims.not_before - leeway
