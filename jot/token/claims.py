"""Token claims: the registered claim set plus an optional extension."""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, InstanceOf, ValidationError, model_validator

from jot.core.errors import ClaimsFieldCollisionError, MalformedTokenError
from jot.token.component import (
    Component,
    colliding_fields,
    extension_fields,
    merge_fields,
)

# attribute name -> registered claim name
CLAIM_NAMES: dict[str, str] = {
    "issuer": "iss",
    "subject": "sub",
    "audience": "aud",
    "expiration_time": "exp",
    "not_before": "nbf",
    "issued_at": "iat",
    "jwt_id": "jti",
}
REGISTERED_CLAIMS = frozenset(CLAIM_NAMES.values())


class Claims(BaseModel):
    """Registered claims, all optional, with times in epoch seconds.

    A field left as None is not asserted and is omitted from the token.
    The model performs no clock comparison; see jot.token.engine.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    issuer: str | None = None
    subject: str | None = None
    audience: str | list[str] | None = None
    expiration_time: int | None = None
    not_before: int | None = None
    issued_at: int | None = None
    jwt_id: str | None = None
    extension: InstanceOf[Component] | None = None

    @model_validator(mode="after")
    def reject_collisions(self) -> Self:
        if self.extension is not None:
            clashes = colliding_fields(self.extension, REGISTERED_CLAIMS)
            if clashes:
                raise ClaimsFieldCollisionError(clashes)
        return self

    def replace(self, **changes: Any) -> Self:
        """Return a validated copy with the given fields changed."""
        values = {name: getattr(self, name) for name in type(self).model_fields}
        values.update(changes)
        return type(self)(**values)

    def with_extension(self, extension: Component) -> Self:
        return self.replace(extension=extension)

    def to_fields(self) -> dict[str, Any]:
        registered = {
            claim: getattr(self, attr)
            for attr, claim in CLAIM_NAMES.items()
            if getattr(self, attr) is not None
        }
        return merge_fields(registered, self.extension)

    @classmethod
    def from_fields(
        cls,
        data: Mapping[str, Any],
        extension_type: type[Component] | None = None,
    ) -> "Claims":
        """Rebuild claims from a decoded JSON object."""
        values = {
            attr: data[claim] for attr, claim in CLAIM_NAMES.items() if claim in data
        }
        if extension_type is not None:
            values["extension"] = extension_type.from_fields(
                extension_fields(data, REGISTERED_CLAIMS)
            )
        try:
            return cls(**values)
        except ValidationError as exc:
            raise MalformedTokenError(
                f"Registered claims are invalid: {exc.error_count()} error(s)"
            ) from None
