"""
Response structures for link and comment write endpoints.
"""
from typing import Any, Optional

from pydantic import Field

from redditkit.models.base import JsonEnvelope, RedditModel, Thing


class PostResultShortData(RedditModel):
    """
    Payload returned by `/api/submit`.

    Only the server-assigned identity comes back; the rest of the post
    is whatever the caller submitted.
    """

    url: Optional[str] = None
    drafts_count: int = 0
    id: Optional[str] = None
    name: Optional[str] = Field(None, description="Fullname of the new post")


class PostResultShortContainer(RedditModel):
    """`{"json": {"errors": [...], "data": PostResultShortData}}`."""

    json_data: JsonEnvelope[PostResultShortData] = Field(
        default_factory=JsonEnvelope,
        alias="json",
    )

    @property
    def data(self) -> Optional[PostResultShortData]:
        return self.json_data.data


class ThingListData(RedditModel):
    """`{"things": [...]}` payload of edit and comment responses."""

    things: list[Thing] = Field(default_factory=list)


class ThingResultContainer(RedditModel):
    """
    Response of `/api/editusertext` and `/api/comment`.

    Both endpoints answer with the full, updated thing.
    """

    json_data: JsonEnvelope[ThingListData] = Field(
        default_factory=JsonEnvelope,
        alias="json",
    )

    @property
    def things(self) -> list[Thing]:
        if self.json_data.data is None:
            return []
        return self.json_data.data.things

    def first_thing_data(self) -> Optional[dict[str, Any]]:
        """Payload of the first returned thing, or None if nothing came back."""
        things = self.things
        return things[0].data if things else None
