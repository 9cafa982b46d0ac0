"""Type definitions for signing keys and JSON Web Keys."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from jot.crypto.algorithms import Algorithm


class SigningKeyData(BaseModel):
    """An RSA keypair in PEM form with its key id."""

    kid: str
    private_key_pem: str
    public_key_pem: str


class RSAJWK(BaseModel):
    """RSA JWK; private when the CRT parameters are present."""

    model_config = ConfigDict(frozen=True)

    kty: Literal["RSA"] = "RSA"
    use: str = "sig"
    alg: Algorithm = Algorithm.RS256
    kid: str
    n: str
    e: str
    d: str | None = None
    p: str | None = None
    q: str | None = None
    dp: str | None = None
    dq: str | None = None
    qi: str | None = None

    @property
    def is_private(self) -> bool:
        return all(
            v is not None for v in (self.d, self.p, self.q, self.dp, self.dq, self.qi)
        )


class OctetJWK(BaseModel):
    """Symmetric JWK holding an HMAC secret."""

    model_config = ConfigDict(frozen=True)

    kty: Literal["oct"] = "oct"
    use: str = "sig"
    alg: Algorithm = Algorithm.HS256
    kid: str
    k: str


JWKEntry = Annotated[RSAJWK | OctetJWK, Field(discriminator="kty")]


class JWKSet(BaseModel):
    """JSON Web Key Set."""

    keys: list[JWKEntry] = Field(default_factory=list)

    def find(self, kid: str) -> RSAJWK | OctetJWK | None:
        """Return the key with the given id, if any."""
        for key in self.keys:
            if key.kid == kid:
                return key
        return None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def from_json(cls, raw: str | bytes) -> "JWKSet":
        return cls.model_validate_json(raw)
