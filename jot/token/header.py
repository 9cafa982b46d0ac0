"""Token header: registered alg/typ fields plus an optional extension."""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, InstanceOf, model_validator

from jot.core.errors import (
    HeaderFieldCollisionError,
    MalformedTokenError,
    UnknownAlgorithmError,
)
from jot.crypto.algorithms import Algorithm
from jot.token.component import (
    Component,
    colliding_fields,
    extension_fields,
    merge_fields,
)

TOKEN_TYPE_JWT = "JWT"
REGISTERED_HEADER_FIELDS = frozenset({"alg", "typ"})


class KeyIdHeader(Component):
    """Header extension carrying the signing key id."""

    kid: str


class Header(BaseModel):
    """Registered header fields and a caller-defined extension."""

    model_config = ConfigDict(frozen=True)

    algorithm: Algorithm = Algorithm.HS256
    token_type: str | None = TOKEN_TYPE_JWT
    extension: InstanceOf[Component] | None = None

    @model_validator(mode="after")
    def reject_collisions(self) -> Self:
        if self.extension is not None:
            clashes = colliding_fields(self.extension, REGISTERED_HEADER_FIELDS)
            if clashes:
                raise HeaderFieldCollisionError(clashes)
        return self

    @classmethod
    def default(cls) -> "Header":
        """HS256 header with typ JWT and no extension."""
        return cls()

    def with_extension(self, extension: Component) -> "Header":
        return Header(
            algorithm=self.algorithm,
            token_type=self.token_type,
            extension=extension,
        )

    def to_fields(self) -> dict[str, Any]:
        registered: dict[str, Any] = {"alg": self.algorithm.value}
        if self.token_type is not None:
            registered["typ"] = self.token_type
        return merge_fields(registered, self.extension)

    @classmethod
    def from_fields(
        cls,
        data: Mapping[str, Any],
        extension_type: type[Component] | None = None,
    ) -> "Header":
        """Rebuild a header from a decoded JSON object."""
        if "alg" not in data:
            raise MalformedTokenError("Header is missing alg")
        try:
            algorithm = Algorithm.from_name(data["alg"])
        except UnknownAlgorithmError as exc:
            raise MalformedTokenError("Header declares an unsupported alg") from exc
        token_type = data.get("typ")
        if token_type is not None and not isinstance(token_type, str):
            raise MalformedTokenError("Header typ must be a string")
        extension = None
        if extension_type is not None:
            extension = extension_type.from_fields(
                extension_fields(data, REGISTERED_HEADER_FIELDS)
            )
        return cls(algorithm=algorithm, token_type=token_type, extension=extension)
