"""Token issuing and verification bound to one key and algorithm."""

from datetime import datetime

import structlog

from jot.core.errors import ExpiredTokenError, ImmatureTokenError
from jot.core.settings import TokenSettings
from jot.crypto.algorithms import Algorithm, Key
from jot.token.claims import Claims
from jot.token.component import Component
from jot.token.engine import (
    Token,
    epoch_seconds,
    is_expired,
    is_not_yet_valid,
    sign,
    verify,
)
from jot.token.header import Header, KeyIdHeader

TOKEN_DEFAULT_TTL = 3600

logger = structlog.get_logger(__name__)


class TokenManager:
    """Issues and verifies tokens, enforcing exp and nbf on verification."""

    def __init__(
        self,
        signing_key: Key,
        verifying_key: Key | None = None,
        algorithm: Algorithm = Algorithm.HS256,
        issuer: str | None = None,
        kid: str | None = None,
        default_ttl: int = TOKEN_DEFAULT_TTL,
        leeway: int = 0,
    ) -> None:
        self._signing_key = signing_key
        self._verifying_key = signing_key if verifying_key is None else verifying_key
        self._algorithm = Algorithm.from_name(algorithm)
        self._issuer = issuer
        self._kid = kid
        self._default_ttl = default_ttl
        self._leeway = leeway

    @classmethod
    def from_settings(
        cls,
        settings: TokenSettings,
        signing_key: Key,
        verifying_key: Key | None = None,
    ) -> "TokenManager":
        return cls(
            signing_key,
            verifying_key,
            algorithm=settings.algorithm,
            issuer=settings.issuer,
            kid=settings.key_id,
            default_ttl=settings.token_ttl,
            leeway=settings.leeway_seconds,
        )

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def issue(
        self,
        claims: Claims | None = None,
        ttl_seconds: int | None = None,
        now: datetime | float | None = None,
    ) -> str:
        """Sign claims with iss, iat and exp stamped from the TTL."""
        claims = claims or Claims()
        issued_at = int(epoch_seconds(now))
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        stamped = claims.replace(
            issuer=self._issuer if self._issuer is not None else claims.issuer,
            issued_at=issued_at,
            expiration_time=issued_at + ttl,
        )
        header = Header(algorithm=self._algorithm)
        if self._kid is not None:
            header = header.with_extension(KeyIdHeader(kid=self._kid))
        return sign(Token.new(header, stamped), self._signing_key)

    def verify_token(
        self,
        token: str,
        claims_type: type[Component] | None = None,
        now: datetime | float | None = None,
    ) -> Token:
        """Verify the signature, then reject expired or not-yet-valid tokens."""
        header_type = KeyIdHeader if self._kid is not None else None
        verified = verify(
            token,
            self._verifying_key,
            self._algorithm,
            header_type=header_type,
            claims_type=claims_type,
        )
        current = epoch_seconds(now)
        if is_expired(verified.claims, current, self._leeway):
            logger.info("token_rejected", alg=self._algorithm.value, reason="expired")
            raise ExpiredTokenError("Token has expired")
        if is_not_yet_valid(verified.claims, current, self._leeway):
            logger.info("token_rejected", alg=self._algorithm.value, reason="immature")
            raise ImmatureTokenError("Token is not yet valid")
        return verified
