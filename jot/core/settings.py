"""Token settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from jot.crypto.algorithms import Algorithm

TOKEN_TTL_DEFAULT = 3600
LEEWAY_DEFAULT = 0


class TokenSettings(BaseSettings):
    """Issuing and verification defaults for TokenManager."""

    model_config = SettingsConfigDict(env_prefix="JOT_")

    issuer: str | None = None
    algorithm: Algorithm = Algorithm.HS256
    key_id: str | None = None
    token_ttl: int = TOKEN_TTL_DEFAULT
    leeway_seconds: int = LEEWAY_DEFAULT
    log_level: str = "INFO"
    log_format: str = "console"
