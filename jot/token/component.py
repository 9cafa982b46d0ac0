"""Caller-defined extension payloads for headers and claims."""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_core import PydanticSerializationError

from jot.core.errors import MalformedTokenError, SerializationError


class Component(BaseModel):
    """Base class extension types must subclass to be carried in a token.

    Fields are flattened into the header or claims object next to the
    registered fields. Unknown fields in a decoded token are ignored.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def field_names(cls) -> set[str]:
        """Serialized names of the declared fields."""
        return {
            info.serialization_alias or info.alias or name
            for name, info in cls.model_fields.items()
        }

    def to_fields(self) -> dict[str, Any]:
        """JSON-ready field mapping. A field set to None is kept as null."""
        try:
            return self.model_dump(mode="json", by_alias=True)
        except PydanticSerializationError as exc:
            raise SerializationError(str(exc)) from exc

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> Self:
        try:
            return cls.model_validate(dict(fields))
        except ValidationError as exc:
            raise MalformedTokenError(
                f"Fields do not match {cls.__name__}: {exc.error_count()} error(s)"
            ) from None


def colliding_fields(extension: Component, registered: frozenset[str]) -> list[str]:
    """Registered names the extension would overwrite when merged."""
    names = extension.field_names() | set(extension.to_fields())
    return sorted(names & registered)


def merge_fields(
    registered: dict[str, Any], extension: Component | None
) -> dict[str, Any]:
    """Flat-merge registered fields with extension fields."""
    merged = dict(registered)
    if extension is not None:
        merged.update(extension.to_fields())
    return merged


def extension_fields(
    data: Mapping[str, Any], registered: frozenset[str]
) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in registered}
