"""
Listing structures for links (posts) and comments.

Field names follow the Reddit JSON keys so that a listing can be
validated straight from the wire and dumped back unchanged.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from redditkit.models.base import EditedMixin, RedditModel, Thing

POST_KIND = "t3"
COMMENT_KIND = "t1"


class PostData(EditedMixin):
    """
    The `data` payload of a `t3` (link) thing.

    Self posts carry `selftext`/`selftext_html`; link posts carry a
    target `url`. Both share the rest of the fields.
    """

    id: Optional[str] = Field(None, description="Base36 id without prefix")
    name: Optional[str] = Field(None, description="Fullname, e.g. t3_abc123")
    subreddit: Optional[str] = Field(None, description="Subreddit display name")
    title: str = ""
    author: Optional[str] = None
    selftext: str = ""
    selftext_html: Optional[str] = None
    url: Optional[str] = None
    permalink: Optional[str] = None
    created_utc: Optional[datetime] = None
    is_self: bool = True
    score: int = 0
    ups: int = 0
    downs: int = 0
    likes: Optional[bool] = Field(None, description="Vote by the current user")
    num_comments: int = Field(0, ge=0)
    removed: bool = False
    spam: bool = False
    over_18: bool = False
    spoiler: bool = False
    locked: bool = False
    stickied: bool = False
    hidden: bool = False
    saved: bool = False
    link_flair_text: Optional[str] = None


class CommentData(EditedMixin):
    """The `data` payload of a `t1` (comment) thing."""

    id: Optional[str] = Field(None, description="Base36 id without prefix")
    name: Optional[str] = Field(None, description="Fullname, e.g. t1_def456")
    subreddit: Optional[str] = None
    author: Optional[str] = None
    body: str = ""
    body_html: Optional[str] = None
    parent_id: Optional[str] = Field(None, description="Fullname of the parent thing")
    link_id: Optional[str] = Field(None, description="Fullname of the post")
    permalink: Optional[str] = None
    created_utc: Optional[datetime] = None
    score: int = 0
    ups: int = 0
    downs: int = 0
    likes: Optional[bool] = None
    removed: bool = False
    spam: bool = False
    locked: bool = False
    stickied: bool = False
    saved: bool = False
    depth: int = 0


class ListingData(RedditModel):
    """Children and pagination cursors of a listing."""

    children: list[Thing] = Field(default_factory=list)
    after: Optional[str] = None
    before: Optional[str] = None
    dist: Optional[int] = None


class Info(RedditModel):
    """
    Result of `/api/info`: a listing of arbitrary things.

    Children are split by kind on access.

    Example:
        >>> info = Info.model_validate(raw)
        >>> [post.name for post in info.posts]
        ['t3_abc123']
    """

    kind: str = "Listing"
    data: ListingData = Field(default_factory=ListingData)

    def _of_kind(self, kind: str) -> list[dict[str, Any]]:
        return [child.data for child in self.data.children if child.kind == kind]

    @property
    def posts(self) -> list[PostData]:
        return [PostData.model_validate(data) for data in self._of_kind(POST_KIND)]

    @property
    def comments(self) -> list[CommentData]:
        return [CommentData.model_validate(data) for data in self._of_kind(COMMENT_KIND)]
