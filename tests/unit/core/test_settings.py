"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from jot.core.settings import LEEWAY_DEFAULT, TOKEN_TTL_DEFAULT, TokenSettings
from jot.crypto.algorithms import Algorithm


class TestTokenSettings:
    """Tests for TokenSettings."""

    def test_defaults(self) -> None:
        settings = TokenSettings()
        assert settings.issuer is None
        assert settings.algorithm is Algorithm.HS256
        assert settings.token_ttl == TOKEN_TTL_DEFAULT
        assert settings.leeway_seconds == LEEWAY_DEFAULT

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JOT_ALGORITHM", "RS384")
        monkeypatch.setenv("JOT_KEY_ID", "key-7")
        monkeypatch.setenv("JOT_LEEWAY_SECONDS", "15")
        settings = TokenSettings()
        assert settings.algorithm is Algorithm.RS384
        assert settings.key_id == "key-7"
        assert settings.leeway_seconds == 15

    def test_unknown_algorithm_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JOT_ALGORITHM", "none")
        with pytest.raises(ValidationError):
            TokenSettings()
