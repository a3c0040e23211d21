"""Base class for resource models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Resource(BaseModel):
    """A property bag returned by (or sent to) the Okta API.

    Declared fields are typed; anything else the server returns is kept in
    ``model_extra`` and written back by :meth:`to_payload`.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    links: Optional[dict[str, Any]] = Field(default=None, alias="_links")
    embedded: Optional[dict[str, Any]] = Field(default=None, alias="_embedded")

    def get_property(self, name: str, default: Any = None) -> Any:
        """Return a property by wire name, checking declared fields then extras."""
        for field_name, info in type(self).model_fields.items():
            if name in (field_name, info.alias):
                return getattr(self, field_name)
        return (self.model_extra or {}).get(name, default)

    def to_payload(self) -> dict[str, Any]:
        """Serialise for a request body: wire names, ``None`` and read-only links dropped."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={"links", "embedded"},
        )
