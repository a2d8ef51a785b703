"""
Shared pydantic plumbing for Reddit response structures.

Every structure tolerates missing fields and keeps unknown ones, so
an error body deserializes into the declared type and is caught by
validation instead of failing the parse.
"""
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RedditModel(BaseModel):
    """
    Base class for all response structures.

    Unknown keys are kept as extra attributes; camelCase keys used by
    the modmail API can be populated by either alias or field name.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)


DataT = TypeVar("DataT")


class JsonEnvelope(RedditModel, Generic[DataT]):
    """
    The `{"errors": [...], "data": ...}` body of an `api_type=json` response.

    Attributes:
        errors: Raw error triples `[code, message, field]`
        data: Payload, absent when the request was rejected
    """

    errors: list[list[Any]] = Field(
        default_factory=list,
        description="Error triples reported by Reddit",
    )
    data: Optional[DataT] = Field(
        None,
        description="Call-specific payload",
    )


class Thing(RedditModel):
    """
    A `{"kind": ..., "data": {...}}` wrapper as found in listings.

    The payload stays untyped here; callers pick the structure that
    matches `kind`.
    """

    kind: str = Field(
        "",
        description="Type prefix without underscore, e.g. t1, t3, t5",
    )
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Thing payload",
    )


def parse_edited(value: Any) -> Optional[datetime]:
    """Reddit sends `false` for never-edited things and an epoch otherwise."""
    if value is False or value is None:
        return None
    return value


class EditedMixin(RedditModel):
    """Adds the `edited` timestamp shared by posts and comments."""

    edited: Optional[datetime] = Field(
        None,
        description="Last edit time, None if never edited",
    )

    @field_validator("edited", mode="before")
    @classmethod
    def _edited_false_is_none(cls, value: Any) -> Any:
        return parse_edited(value)
