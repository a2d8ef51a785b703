"""
Comment controller.
"""

import copy
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Union

from redditkit.api.endpoints.links_and_comments import DOWNVOTE, NO_VOTE, UPVOTE
from redditkit.api.exceptions import ControllerError, RetrievalError
from redditkit.controllers.base import (
    Controller,
    ResourceIdentity,
    hydrate,
    import_data,
)
from redditkit.models.things import CommentData
from redditkit.utils.logger import get_logger

if TYPE_CHECKING:
    from redditkit.api.client import Dispatch

logger = get_logger(__name__)


def _as_comment_data(data: Union[CommentData, Mapping[str, Any]]) -> CommentData:
    if isinstance(data, CommentData):
        return data
    return CommentData.model_validate(data)


class Comment(Controller):
    """
    Mutable controller for a Reddit comment (`t1_` thing).

    Attributes:
        subreddit: Subreddit display name
        author: Author username, None for drafts
        body: Raw markdown body
        body_html: Rendered body as last seen
        parent_fullname: Fullname of the post or comment replied to
        link_fullname: Fullname of the post the comment belongs to
        edited: Last edit time, None if never edited
        score, up_votes, down_votes: Vote counts as last seen
        likes: Current user's vote (True up, False down, None)
        removed, spam, locked, stickied, saved: Flags
        depth: Nesting depth (0 = top-level)
    """

    MUTABLE_FIELDS = (
        "body",
        "body_html",
        "edited",
        "score",
        "up_votes",
        "down_votes",
        "likes",
        "removed",
        "spam",
        "locked",
        "stickied",
        "saved",
    )

    def __init__(
        self,
        dispatch: "Dispatch",
        parent_fullname: Optional[str] = None,
        body: str = "",
        subreddit: Optional[str] = None,
        author: Optional[str] = None,
        identity: Optional[ResourceIdentity] = None,
        body_html: Optional[str] = None,
        link_fullname: Optional[str] = None,
        edited: Optional[datetime] = None,
        score: int = 0,
        up_votes: int = 0,
        down_votes: int = 0,
        likes: Optional[bool] = None,
        removed: bool = False,
        spam: bool = False,
        locked: bool = False,
        stickied: bool = False,
        saved: bool = False,
        depth: int = 0,
        hydrated: bool = False,
    ) -> None:
        super().__init__(dispatch, identity=identity, hydrated=hydrated)
        self.parent_fullname = parent_fullname
        self.body = body
        self.subreddit = subreddit
        self.author = author
        self.body_html = body_html
        self.link_fullname = link_fullname
        self.edited = edited
        self.score = score
        self.up_votes = up_votes
        self.down_votes = down_votes
        self.likes = likes
        self.removed = removed
        self.spam = spam
        self.locked = locked
        self.stickied = stickied
        self.saved = saved
        self.depth = depth

    @classmethod
    def draft(
        cls,
        dispatch: "Dispatch",
        parent_fullname: str,
        body: str,
        subreddit: Optional[str] = None,
    ) -> "Comment":
        """Draft a reply to `parent_fullname`; nothing is sent until submit()."""
        return cls(dispatch, parent_fullname=parent_fullname, body=body, subreddit=subreddit)

    @classmethod
    def stub(
        cls,
        dispatch: "Dispatch",
        fullname: str,
        subreddit: Optional[str] = None,
    ) -> "Comment":
        """A comment known only by fullname, to be hydrated with about()."""
        return cls(dispatch, subreddit=subreddit, identity=ResourceIdentity(fullname=fullname))

    @classmethod
    def from_listing(
        cls,
        dispatch: "Dispatch",
        listing: Union[CommentData, Mapping[str, Any]],
    ) -> "Comment":
        """Build a hydrated comment from a `t1` listing payload."""
        return hydrate(cls(dispatch), _as_comment_data(listing))

    def to_listing(self) -> CommentData:
        """Re-extract the advertised fields as a listing payload."""
        return CommentData(
            id=self.id,
            name=self.fullname,
            subreddit=self.subreddit,
            author=self.author,
            body=self.body,
            body_html=self.body_html,
            parent_id=self.parent_fullname,
            link_id=self.link_fullname,
            permalink=self.permalink,
            created_utc=self.created,
            edited=self.edited,
            score=self.score,
            ups=self.up_votes,
            downs=self.down_votes,
            likes=self.likes,
            removed=self.removed,
            spam=self.spam,
            locked=self.locked,
            stickied=self.stickied,
            saved=self.saved,
            depth=self.depth,
        )

    def _identity_from(self, data: Any) -> ResourceIdentity:
        comment = _as_comment_data(data)
        return ResourceIdentity(
            fullname=comment.name,
            id=comment.id,
            permalink=comment.permalink,
            created=comment.created_utc,
        )

    def _fields_from(self, data: Any) -> dict[str, Any]:
        comment = _as_comment_data(data)
        return {
            "parent_fullname": comment.parent_id,
            "body": comment.body,
            "subreddit": comment.subreddit,
            "author": comment.author,
            "body_html": comment.body_html,
            "link_fullname": comment.link_id,
            "edited": comment.edited,
            "score": comment.score,
            "up_votes": comment.ups,
            "down_votes": comment.downs,
            "likes": comment.likes,
            "removed": comment.removed,
            "spam": comment.spam,
            "locked": comment.locked,
            "stickied": comment.stickied,
            "saved": comment.saved,
            "depth": comment.depth,
        }

    def submit(self) -> "Comment":
        """
        Post this draft as a reply to its parent.

        The draft itself is left unchanged.

        Returns:
            A new Comment hydrated from the comment Reddit created

        Raises:
            ControllerError: If already submitted or no parent is set
            RetrievalError: If Reddit accepts the reply without returning it
        """
        self._require_draft("submit")
        if not self.parent_fullname:
            raise ControllerError("Cannot submit a Comment without a parent fullname")

        result = self._validate(
            self.dispatch.links_and_comments.comment(self.parent_fullname, self.body)
        )
        data = result.first_thing_data()
        if data is None:
            raise RetrievalError(None, "reply accepted but no comment was returned")

        submitted = hydrate(copy.copy(self), data)

        logger.info(
            "comment_submitted",
            fullname=submitted.fullname,
            parent=self.parent_fullname,
        )
        return submitted

    def edit(self, text: str) -> "Comment":
        """
        Replace the body of this comment, updating this instance in place.

        Returns:
            This instance
        """
        fullname = self._require_identity("edit")

        result = self._validate(self.dispatch.links_and_comments.edit_user_text(fullname, text))
        data = result.first_thing_data()
        if data is None:
            raise RetrievalError(fullname, "edit accepted but no comment was returned")

        import_data(self, data)
        logger.info("comment_edited", fullname=fullname)
        return self

    def about(self) -> "Comment":
        """
        Fetch this comment by fullname and hydrate this instance in place.

        Raises:
            RetrievalError: If Reddit returns no comment or a different one
        """
        fullname = self._require_identity("fetch")

        info = self._validate(
            self.dispatch.links_and_comments.info([fullname], subreddit=self.subreddit)
        )
        comments = info.comments
        if not comments:
            raise RetrievalError(fullname, "no matching comment returned")
        if comments[0].name != fullname:
            raise RetrievalError(fullname, f"server returned '{comments[0].name}' instead")

        return hydrate(self, comments[0])

    def _act_then_refresh(self, operation: str, call: Callable[[str], Any]) -> "Comment":
        fullname = self._require_identity(operation)
        self._validate(call(fullname))
        logger.info("comment_action", action=operation, fullname=fullname)
        return self.about()

    def upvote(self) -> "Comment":
        return self._act_then_refresh(
            "upvote", lambda fullname: self.dispatch.links_and_comments.vote(fullname, UPVOTE)
        )

    def downvote(self) -> "Comment":
        return self._act_then_refresh(
            "downvote", lambda fullname: self.dispatch.links_and_comments.vote(fullname, DOWNVOTE)
        )

    def unvote(self) -> "Comment":
        return self._act_then_refresh(
            "unvote", lambda fullname: self.dispatch.links_and_comments.vote(fullname, NO_VOTE)
        )

    def lock(self) -> "Comment":
        return self._act_then_refresh("lock", self.dispatch.links_and_comments.lock)

    def unlock(self) -> "Comment":
        return self._act_then_refresh("unlock", self.dispatch.links_and_comments.unlock)

    def save(self, category: Optional[str] = None) -> "Comment":
        return self._act_then_refresh(
            "save", lambda fullname: self.dispatch.links_and_comments.save(fullname, category)
        )

    def unsave(self) -> "Comment":
        return self._act_then_refresh("unsave", self.dispatch.links_and_comments.unsave)

    def delete(self) -> None:
        """Delete this comment on Reddit; this instance becomes a stale snapshot."""
        fullname = self._require_identity("delete")
        self._validate(self.dispatch.links_and_comments.delete(fullname))
        logger.info("comment_deleted", fullname=fullname)

    def reply(self, text: str) -> "Comment":
        """Reply to this comment, returning the new hydrated Comment."""
        fullname = self._require_identity("reply to")
        return Comment.draft(self.dispatch, fullname, text, subreddit=self.subreddit).submit()

    # Async counterparts

    async def submit_async(self) -> "Comment":
        return await self._in_worker(self.submit)

    async def edit_async(self, text: str) -> "Comment":
        return await self._in_worker(self.edit, text)

    async def about_async(self) -> "Comment":
        return await self._in_worker(self.about)

    async def upvote_async(self) -> "Comment":
        return await self._in_worker(self.upvote)

    async def downvote_async(self) -> "Comment":
        return await self._in_worker(self.downvote)

    async def unvote_async(self) -> "Comment":
        return await self._in_worker(self.unvote)

    async def lock_async(self) -> "Comment":
        return await self._in_worker(self.lock)

    async def unlock_async(self) -> "Comment":
        return await self._in_worker(self.unlock)

    async def save_async(self, category: Optional[str] = None) -> "Comment":
        return await self._in_worker(self.save, category)

    async def unsave_async(self) -> "Comment":
        return await self._in_worker(self.unsave)

    async def delete_async(self) -> None:
        await self._in_worker(self.delete)

    async def reply_async(self, text: str) -> "Comment":
        return await self._in_worker(self.reply, text)
