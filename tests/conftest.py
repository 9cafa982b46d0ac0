"""Shared test fixtures for jot."""

import pytest
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from jot.crypto.keys import generate_rsa_keypair, load_private_key_pem, load_public_key_pem
from jot.crypto.types import SigningKeyData

SECRET = b"secret_key"


@pytest.fixture(autouse=True)
def _set_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear JOT_ settings so tests see the defaults."""
    for name in (
        "JOT_ISSUER",
        "JOT_ALGORITHM",
        "JOT_KEY_ID",
        "JOT_TOKEN_TTL",
        "JOT_LEEWAY_SECONDS",
        "JOT_LOG_LEVEL",
        "JOT_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def rsa_keypair() -> SigningKeyData:
    """One RSA keypair per session; generation is slow."""
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def rsa_private_key(rsa_keypair: SigningKeyData) -> RSAPrivateKey:
    return load_private_key_pem(rsa_keypair.private_key_pem)


@pytest.fixture(scope="session")
def rsa_public_key(rsa_keypair: SigningKeyData) -> RSAPublicKey:
    return load_public_key_pem(rsa_keypair.public_key_pem)


@pytest.fixture(scope="session")
def other_rsa_private_key() -> RSAPrivateKey:
    return load_private_key_pem(generate_rsa_keypair().private_key_pem)
