"""Tests for the header model."""

import pytest
from pydantic import Field, ValidationError

from jot.core.errors import (
    FieldCollisionError,
    HeaderFieldCollisionError,
    MalformedTokenError,
    UnknownAlgorithmError,
)
from jot.crypto.algorithms import Algorithm
from jot.token.component import Component
from jot.token.header import Header, KeyIdHeader


class CustomHeaders(Component):
    kid: str
    cty: str | None = None


class TypedHeaders(Component):
    typ: str


class AliasedAlg(Component):
    algorithm_name: str = Field(alias="alg")


class TestConstruction:
    """Tests for header construction."""

    def test_default(self) -> None:
        header = Header.default()
        assert header.algorithm is Algorithm.HS256
        assert header.token_type == "JWT"
        assert header.extension is None

    def test_with_extension_returns_new_header(self) -> None:
        base = Header(algorithm=Algorithm.RS512)
        extended = base.with_extension(KeyIdHeader(kid="1KSF3g"))
        assert base.extension is None
        assert extended.algorithm is Algorithm.RS512
        assert extended.extension == KeyIdHeader(kid="1KSF3g")

    def test_typ_collision(self) -> None:
        with pytest.raises(HeaderFieldCollisionError) as exc_info:
            Header.default().with_extension(TypedHeaders(typ="JWT"))
        assert exc_info.value.fields == ["typ"]

    def test_alg_alias_collision(self) -> None:
        with pytest.raises(FieldCollisionError):
            Header(extension=AliasedAlg(alg="none"))

    def test_extension_must_be_component(self) -> None:
        with pytest.raises(ValidationError):
            Header(extension={"kid": "abc"})  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        header = Header.default()
        with pytest.raises(ValidationError):
            header.algorithm = Algorithm.RS256  # type: ignore[misc]

    def test_equality_includes_extension(self) -> None:
        a = Header(extension=CustomHeaders(kid="a"))
        assert a == Header(extension=CustomHeaders(kid="a"))
        assert a != Header(extension=CustomHeaders(kid="b"))
        assert a != Header.default()


class TestFields:
    """Tests for flat field merging."""

    def test_default_fields(self) -> None:
        assert Header.default().to_fields() == {"alg": "HS256", "typ": "JWT"}

    def test_extension_fields_merged(self) -> None:
        header = Header(algorithm=Algorithm.RS256, extension=CustomHeaders(kid="k1"))
        assert header.to_fields() == {
            "alg": "RS256",
            "typ": "JWT",
            "kid": "k1",
            "cty": None,
        }

    def test_typ_omitted_when_none(self) -> None:
        assert Header(token_type=None).to_fields() == {"alg": "HS256"}

    def test_from_fields_with_extension(self) -> None:
        header = Header.from_fields(
            {"alg": "HS512", "typ": "JWT", "kid": "1KSF3g"}, CustomHeaders
        )
        assert header == Header(
            algorithm=Algorithm.HS512, extension=CustomHeaders(kid="1KSF3g")
        )

    def test_from_fields_without_typ(self) -> None:
        header = Header.from_fields({"alg": "HS256"})
        assert header.token_type is None

    def test_missing_alg(self) -> None:
        with pytest.raises(MalformedTokenError):
            Header.from_fields({"typ": "JWT"})

    @pytest.mark.parametrize("alg", ["none", "HS999", "hs256", 256])
    def test_unknown_alg(self, alg: object) -> None:
        with pytest.raises(MalformedTokenError) as exc_info:
            Header.from_fields({"alg": alg})
        assert isinstance(exc_info.value.__cause__, UnknownAlgorithmError)

    def test_non_string_typ(self) -> None:
        with pytest.raises(MalformedTokenError):
            Header.from_fields({"alg": "HS256", "typ": 1})

    def test_extension_mismatch(self) -> None:
        with pytest.raises(MalformedTokenError):
            Header.from_fields({"alg": "HS256"}, CustomHeaders)
