"""RSA key generation, PEM loading, and JWK conversion."""

import uuid_utils
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from jot.core.errors import KeyAlgorithmMismatchError
from jot.crypto.algorithms import Algorithm, KeyKind
from jot.crypto.types import OctetJWK, RSAJWK, SigningKeyData
from jot.token.codec import decode_segment, encode_segment

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537


def generate_rsa_keypair(key_size: int = RSA_KEY_SIZE) -> SigningKeyData:
    """Generate a new RSA keypair for RS* signing."""
    private_key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=key_size,
    )
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    kid = str(uuid_utils.uuid7())
    return SigningKeyData(
        kid=kid, private_key_pem=private_pem, public_key_pem=public_pem
    )


def load_private_key_pem(pem: str | bytes) -> RSAPrivateKey:
    """Load an unencrypted PEM private key, which must be RSA."""
    data = pem.encode() if isinstance(pem, str) else pem
    loaded = serialization.load_pem_private_key(data, password=None)
    if not isinstance(loaded, RSAPrivateKey):
        raise KeyAlgorithmMismatchError("PEM private key is not an RSA key")
    return loaded


def load_public_key_pem(pem: str | bytes) -> RSAPublicKey:
    """Load a PEM public key, which must be RSA."""
    data = pem.encode() if isinstance(pem, str) else pem
    loaded = serialization.load_pem_public_key(data)
    if not isinstance(loaded, RSAPublicKey):
        raise KeyAlgorithmMismatchError("PEM public key is not an RSA key")
    return loaded


def _int_to_base64url(value: int) -> str:
    """Encode an integer as big-endian base64url without padding."""
    byte_length = max(1, (value.bit_length() + 7) // 8)
    return encode_segment(value.to_bytes(byte_length, byteorder="big"))


def _base64url_to_int(value: str) -> int:
    return int.from_bytes(decode_segment(value), byteorder="big")


def _require_kind(algorithm: Algorithm, kind: KeyKind) -> None:
    if algorithm.key_kind is not kind:
        raise KeyAlgorithmMismatchError(f"{algorithm} does not use {kind} keys")


def rsa_key_to_jwk(
    key: RSAPrivateKey | RSAPublicKey,
    kid: str,
    algorithm: Algorithm = Algorithm.RS256,
) -> RSAJWK:
    """Convert an RSA key to JWK form, keeping private parameters if present."""
    _require_kind(algorithm, KeyKind.ASYMMETRIC)
    if isinstance(key, RSAPrivateKey):
        numbers = key.private_numbers()
        public = numbers.public_numbers
        return RSAJWK(
            alg=algorithm,
            kid=kid,
            n=_int_to_base64url(public.n),
            e=_int_to_base64url(public.e),
            d=_int_to_base64url(numbers.d),
            p=_int_to_base64url(numbers.p),
            q=_int_to_base64url(numbers.q),
            dp=_int_to_base64url(numbers.dmp1),
            dq=_int_to_base64url(numbers.dmq1),
            qi=_int_to_base64url(numbers.iqmp),
        )
    public = key.public_numbers()
    return RSAJWK(
        alg=algorithm,
        kid=kid,
        n=_int_to_base64url(public.n),
        e=_int_to_base64url(public.e),
    )


def pem_to_jwk_entry(
    public_key_pem: str, kid: str, algorithm: Algorithm = Algorithm.RS256
) -> RSAJWK:
    """Convert a PEM public key to JWK format."""
    return rsa_key_to_jwk(load_public_key_pem(public_key_pem), kid, algorithm)


def jwk_to_rsa_key(entry: RSAJWK) -> RSAPrivateKey | RSAPublicKey:
    """Rebuild a cryptography RSA key from a JWK."""
    public = rsa.RSAPublicNumbers(
        e=_base64url_to_int(entry.e),
        n=_base64url_to_int(entry.n),
    )
    if not entry.is_private:
        return public.public_key()
    private = rsa.RSAPrivateNumbers(
        p=_base64url_to_int(entry.p or ""),
        q=_base64url_to_int(entry.q or ""),
        d=_base64url_to_int(entry.d or ""),
        dmp1=_base64url_to_int(entry.dp or ""),
        dmq1=_base64url_to_int(entry.dq or ""),
        iqmp=_base64url_to_int(entry.qi or ""),
        public_numbers=public,
    )
    return private.private_key()


def secret_to_jwk(
    secret: bytes, kid: str, algorithm: Algorithm = Algorithm.HS256
) -> OctetJWK:
    """Wrap an HMAC secret as an octet-sequence JWK."""
    _require_kind(algorithm, KeyKind.SYMMETRIC)
    if not secret:
        raise KeyAlgorithmMismatchError(f"{algorithm} secret must not be empty")
    return OctetJWK(alg=algorithm, kid=kid, k=encode_segment(secret))


def jwk_to_secret(entry: OctetJWK) -> bytes:
    return decode_segment(entry.k)
