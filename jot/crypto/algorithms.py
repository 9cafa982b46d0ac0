"""Signing algorithm registry backed by PyJWT's HMAC and RSA primitives."""

from enum import StrEnum

import structlog
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from jwt.algorithms import HMACAlgorithm, RSAAlgorithm
from jwt.exceptions import InvalidKeyError

from jot.core.errors import KeyAlgorithmMismatchError, SigningError, UnknownAlgorithmError

logger = structlog.get_logger(__name__)

Key = bytes | RSAPrivateKey | RSAPublicKey


class KeyKind(StrEnum):
    """Shape of key material an algorithm requires."""

    SYMMETRIC = "symmetric"
    ASYMMETRIC = "asymmetric"


class Algorithm(StrEnum):
    """Supported signing algorithms, valued by their declared header name."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"

    @classmethod
    def from_name(cls, name: object) -> "Algorithm":
        """Resolve a declared name, case-sensitively."""
        if not isinstance(name, str):
            raise UnknownAlgorithmError(name)
        try:
            return cls(name)
        except ValueError:
            raise UnknownAlgorithmError(name) from None

    @property
    def key_kind(self) -> KeyKind:
        return _KEY_KINDS[self]


_KEY_KINDS: dict[Algorithm, KeyKind] = {
    Algorithm.HS256: KeyKind.SYMMETRIC,
    Algorithm.HS384: KeyKind.SYMMETRIC,
    Algorithm.HS512: KeyKind.SYMMETRIC,
    Algorithm.RS256: KeyKind.ASYMMETRIC,
    Algorithm.RS384: KeyKind.ASYMMETRIC,
    Algorithm.RS512: KeyKind.ASYMMETRIC,
}

_PRIMITIVES: dict[Algorithm, HMACAlgorithm | RSAAlgorithm] = {
    Algorithm.HS256: HMACAlgorithm(HMACAlgorithm.SHA256),
    Algorithm.HS384: HMACAlgorithm(HMACAlgorithm.SHA384),
    Algorithm.HS512: HMACAlgorithm(HMACAlgorithm.SHA512),
    Algorithm.RS256: RSAAlgorithm(RSAAlgorithm.SHA256),
    Algorithm.RS384: RSAAlgorithm(RSAAlgorithm.SHA384),
    Algorithm.RS512: RSAAlgorithm(RSAAlgorithm.SHA512),
}


def name_of(algorithm: Algorithm) -> str:
    """Return the declared header name of an algorithm."""
    return algorithm.value


def from_name(name: object) -> Algorithm:
    """Resolve a declared header name to an Algorithm."""
    return Algorithm.from_name(name)


def _hmac_secret(algorithm: Algorithm, key: object) -> bytes:
    if not isinstance(key, bytes | bytearray):
        raise KeyAlgorithmMismatchError(
            f"{algorithm} requires a bytes secret, got {type(key).__name__}"
        )
    if not key:
        raise KeyAlgorithmMismatchError(f"{algorithm} secret must not be empty")
    try:
        return _PRIMITIVES[algorithm].prepare_key(bytes(key))
    except InvalidKeyError as exc:
        # PEM or SSH material passed where a shared secret belongs
        raise KeyAlgorithmMismatchError(str(exc)) from None


def _signing_key(algorithm: Algorithm, key: object) -> bytes | RSAPrivateKey:
    if algorithm.key_kind is KeyKind.SYMMETRIC:
        return _hmac_secret(algorithm, key)
    if not isinstance(key, RSAPrivateKey):
        raise KeyAlgorithmMismatchError(
            f"{algorithm} signing requires an RSA private key, got {type(key).__name__}"
        )
    return key


def _verifying_key(algorithm: Algorithm, key: object) -> bytes | RSAPublicKey:
    if algorithm.key_kind is KeyKind.SYMMETRIC:
        return _hmac_secret(algorithm, key)
    if isinstance(key, RSAPrivateKey):
        return key.public_key()
    if not isinstance(key, RSAPublicKey):
        raise KeyAlgorithmMismatchError(
            f"{algorithm} verification requires an RSA key, got {type(key).__name__}"
        )
    return key


def sign(algorithm: Algorithm, key: Key, message: bytes) -> bytes:
    """Sign message bytes with the primitive registered for algorithm."""
    prepared = _signing_key(algorithm, key)
    try:
        return _PRIMITIVES[algorithm].sign(message, prepared)
    except (TypeError, ValueError) as exc:
        raise SigningError(f"{algorithm} signing failed") from exc


def verify(algorithm: Algorithm, key: Key, message: bytes, signature: bytes) -> bool:
    """Check a signature; HMAC comparison is constant-time."""
    prepared = _verifying_key(algorithm, key)
    try:
        return _PRIMITIVES[algorithm].verify(message, prepared, signature)
    except (TypeError, ValueError):
        logger.debug("signature_unusable", alg=algorithm.value)
        return False
