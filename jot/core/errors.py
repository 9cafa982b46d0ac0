"""Exception taxonomy for token encoding, signing, and verification.

Every failure raised by jot derives from TokenError. None of them are
transient: they signal either a programming error (key/algorithm mismatch,
field collision) or untrusted input that must be rejected.
"""


class TokenError(Exception):
    """Base class for all token errors."""


class UnknownAlgorithmError(TokenError):
    """An algorithm name does not match any registry entry."""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Unknown signing algorithm: {name!r}")


class KeyAlgorithmMismatchError(TokenError):
    """The supplied key cannot be used with the requested algorithm."""


class SerializationError(TokenError):
    """A header or claims object could not be serialized."""


class SigningError(TokenError):
    """The signing primitive failed."""


class FieldCollisionError(TokenError):
    """An extension component redefines a registered field."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"Extension redefines registered fields: {', '.join(fields)}")


class HeaderFieldCollisionError(FieldCollisionError):
    """A header extension redefines alg or typ."""


class ClaimsFieldCollisionError(FieldCollisionError):
    """A claims extension redefines a registered claim."""


class MalformedTokenError(TokenError):
    """A token string or one of its segments has an invalid structure."""


class InvalidEncodingError(MalformedTokenError):
    """A segment is not canonical unpadded base64url."""


class VerificationError(TokenError):
    """A token was rejected during verification."""


class AlgorithmMismatchError(VerificationError):
    """The token header declares a different algorithm than expected."""

    def __init__(self, expected: str, declared: str) -> None:
        self.expected = expected
        self.declared = declared
        super().__init__(f"Token algorithm {declared} does not match expected {expected}")


class InvalidSignatureError(VerificationError):
    """The signature does not match the signed segments."""

    def __init__(self) -> None:
        super().__init__("Signature verification failed")


class ExpiredTokenError(VerificationError):
    """The token's exp claim has passed."""


class ImmatureTokenError(VerificationError):
    """The token's nbf claim lies in the future."""
