"""
Post controller.

A post is either a self post (markdown body) or a link post (target
URL). The difference is carried by the `content` variant instead of
a subclass:

    >>> draft = Post.new_self_post(dispatch, "test", "Hello", "World")
    >>> post = draft.submit()
    >>> post.self_text
    'World'
    >>> draft.fullname is None
    True
"""

import copy
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Mapping, Optional, Union
from urllib.parse import urlsplit

from redditkit.api.endpoints.links_and_comments import DOWNVOTE, NO_VOTE, UPVOTE
from redditkit.api.exceptions import ControllerError, RetrievalError
from redditkit.controllers.base import (
    Controller,
    ResourceIdentity,
    hydrate,
    import_data,
)
from redditkit.controllers.comment import Comment
from redditkit.models.things import PostData
from redditkit.utils.logger import get_logger

if TYPE_CHECKING:
    from redditkit.api.client import Dispatch

logger = get_logger(__name__)


@dataclass(frozen=True)
class SelfText:
    """Body of a self post."""

    text: str = ""
    html: Optional[str] = None

    kind: ClassVar[str] = "self"


@dataclass(frozen=True)
class LinkTarget:
    """Target of a link post."""

    url: str

    kind: ClassVar[str] = "link"


PostContent = Union[SelfText, LinkTarget]


def _as_post_data(data: Union[PostData, Mapping[str, Any]]) -> PostData:
    if isinstance(data, PostData):
        return data
    return PostData.model_validate(data)


def _permalink_from_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    return urlsplit(url).path or None


class Post(Controller):
    """
    Mutable controller for a Reddit post (`t3_` thing).

    Attributes:
        subreddit: Subreddit display name
        title: Post title
        author: Author username, None for drafts
        content: SelfText or LinkTarget
        url: URL reported by Reddit (comments page for self posts)
        edited: Last edit time, None if never edited
        score, up_votes, down_votes: Vote counts as last seen
        likes: Current user's vote (True up, False down, None)
        num_comments: Comment count as last seen
        removed, spam, nsfw, spoiler, locked, stickied, hidden, saved: Flags
    """

    MUTABLE_FIELDS = (
        "content",
        "edited",
        "score",
        "up_votes",
        "down_votes",
        "likes",
        "num_comments",
        "removed",
        "spam",
        "nsfw",
        "spoiler",
        "locked",
        "stickied",
        "hidden",
        "saved",
    )

    def __init__(
        self,
        dispatch: "Dispatch",
        subreddit: Optional[str] = None,
        title: str = "",
        content: Optional[PostContent] = None,
        author: Optional[str] = None,
        identity: Optional[ResourceIdentity] = None,
        url: Optional[str] = None,
        edited: Optional[datetime] = None,
        score: int = 0,
        up_votes: int = 0,
        down_votes: int = 0,
        likes: Optional[bool] = None,
        num_comments: int = 0,
        removed: bool = False,
        spam: bool = False,
        nsfw: bool = False,
        spoiler: bool = False,
        locked: bool = False,
        stickied: bool = False,
        hidden: bool = False,
        saved: bool = False,
        flair_text: Optional[str] = None,
        hydrated: bool = False,
    ) -> None:
        super().__init__(dispatch, identity=identity, hydrated=hydrated)
        self.subreddit = subreddit
        self.title = title
        self.content = content if content is not None else SelfText()
        self.author = author
        self.url = url
        self.edited = edited
        self.score = score
        self.up_votes = up_votes
        self.down_votes = down_votes
        self.likes = likes
        self.num_comments = num_comments
        self.removed = removed
        self.spam = spam
        self.nsfw = nsfw
        self.spoiler = spoiler
        self.locked = locked
        self.stickied = stickied
        self.hidden = hidden
        self.saved = saved
        self.flair_text = flair_text

    # Construction

    @classmethod
    def new_self_post(
        cls,
        dispatch: "Dispatch",
        subreddit: str,
        title: str,
        self_text: str,
        self_text_html: Optional[str] = None,
        nsfw: bool = False,
        spoiler: bool = False,
        author: Optional[str] = None,
    ) -> "Post":
        """Draft a self post; nothing is sent until submit()."""
        return cls(
            dispatch,
            subreddit=subreddit,
            title=title,
            content=SelfText(self_text, self_text_html),
            author=author,
            nsfw=nsfw,
            spoiler=spoiler,
        )

    @classmethod
    def new_link_post(
        cls,
        dispatch: "Dispatch",
        subreddit: str,
        title: str,
        url: str,
        nsfw: bool = False,
        spoiler: bool = False,
        author: Optional[str] = None,
    ) -> "Post":
        """Draft a link post; nothing is sent until submit()."""
        return cls(
            dispatch,
            subreddit=subreddit,
            title=title,
            content=LinkTarget(url),
            author=author,
            nsfw=nsfw,
            spoiler=spoiler,
        )

    @classmethod
    def stub(
        cls,
        dispatch: "Dispatch",
        fullname: str,
        subreddit: Optional[str] = None,
    ) -> "Post":
        """
        A post known only by fullname, to be hydrated with about().

        Example:
            >>> post = Post.stub(dispatch, "t3_abc123").about()
        """
        return cls(dispatch, subreddit=subreddit, identity=ResourceIdentity(fullname=fullname))

    @classmethod
    def from_listing(
        cls,
        dispatch: "Dispatch",
        listing: Union[PostData, Mapping[str, Any]],
    ) -> "Post":
        """Build a hydrated post from a `t3` listing payload."""
        return hydrate(cls(dispatch), _as_post_data(listing))

    def to_listing(self) -> PostData:
        """
        Re-extract the advertised fields as a listing payload.

        `Post.from_listing(d, listing).to_listing()` reproduces every
        field of `listing` that Post models.
        """
        is_self = isinstance(self.content, SelfText)
        return PostData(
            id=self.id,
            name=self.fullname,
            subreddit=self.subreddit,
            title=self.title,
            author=self.author,
            selftext=self.content.text if is_self else "",
            selftext_html=self.content.html if is_self else None,
            url=self.url,
            permalink=self.permalink,
            created_utc=self.created,
            edited=self.edited,
            is_self=is_self,
            score=self.score,
            ups=self.up_votes,
            downs=self.down_votes,
            likes=self.likes,
            num_comments=self.num_comments,
            removed=self.removed,
            spam=self.spam,
            over_18=self.nsfw,
            spoiler=self.spoiler,
            locked=self.locked,
            stickied=self.stickied,
            hidden=self.hidden,
            saved=self.saved,
            link_flair_text=self.flair_text,
        )

    def _identity_from(self, data: Any) -> ResourceIdentity:
        post = _as_post_data(data)
        return ResourceIdentity(
            fullname=post.name,
            id=post.id,
            permalink=post.permalink,
            created=post.created_utc,
        )

    def _fields_from(self, data: Any) -> dict[str, Any]:
        post = _as_post_data(data)
        if post.is_self:
            content: PostContent = SelfText(post.selftext, post.selftext_html)
        else:
            content = LinkTarget(post.url or "")

        return {
            "subreddit": post.subreddit,
            "title": post.title,
            "author": post.author,
            "content": content,
            "url": post.url,
            "edited": post.edited,
            "score": post.score,
            "up_votes": post.ups,
            "down_votes": post.downs,
            "likes": post.likes,
            "num_comments": post.num_comments,
            "removed": post.removed,
            "spam": post.spam,
            "nsfw": post.over_18,
            "spoiler": post.spoiler,
            "locked": post.locked,
            "stickied": post.stickied,
            "hidden": post.hidden,
            "saved": post.saved,
            "flair_text": post.link_flair_text,
        }

    # Content accessors

    @property
    def is_self(self) -> bool:
        return isinstance(self.content, SelfText)

    @property
    def self_text(self) -> Optional[str]:
        """Markdown body of a self post, None for link posts."""
        return self.content.text if isinstance(self.content, SelfText) else None

    @property
    def self_text_html(self) -> Optional[str]:
        return self.content.html if isinstance(self.content, SelfText) else None

    @property
    def link_url(self) -> Optional[str]:
        """Target URL of a link post, None for self posts."""
        return self.content.url if isinstance(self.content, LinkTarget) else None

    # Operations

    def submit(
        self,
        send_replies: bool = True,
        resubmit: bool = False,
        flair_id: Optional[str] = None,
        flair_text: Optional[str] = None,
        ad: bool = False,
        app: Optional[str] = None,
        extension: Optional[str] = None,
        g_recaptcha_response: Optional[str] = None,
        video_poster_url: Optional[str] = None,
    ) -> "Post":
        """
        Submit this draft to Reddit.

        The draft itself is left unchanged and can be reused as a
        template.

        Returns:
            A new Post with this draft's content plus the id and
            fullname assigned by Reddit

        Raises:
            ControllerError: If this post was already submitted
            ApplicationError: If Reddit rejects the submission
            RetrievalError: If Reddit accepts it without returning a fullname
        """
        self._require_draft("submit")

        result = self._validate(
            self.dispatch.links_and_comments.submit(
                kind=self.content.kind,
                sr=self.subreddit,
                title=self.title,
                text=self.self_text,
                url=self.link_url,
                nsfw=self.nsfw,
                spoiler=self.spoiler,
                send_replies=send_replies,
                resubmit=resubmit,
                flair_id=flair_id,
                flair_text=flair_text,
                ad=ad,
                app=app,
                extension=extension,
                g_recaptcha_response=g_recaptcha_response,
                video_poster_url=video_poster_url,
            )
        )

        data = result.data
        if data is None or not data.name:
            raise RetrievalError(None, "submission accepted but no fullname was returned")

        submitted = copy.copy(self)
        submitted._identity = ResourceIdentity(
            fullname=data.name,
            id=data.id,
            permalink=_permalink_from_url(data.url),
        )
        submitted.url = data.url
        if flair_text is not None:
            submitted.flair_text = flair_text
        submitted._hydrated = True

        logger.info(
            "post_submitted",
            fullname=submitted.fullname,
            subreddit=self.subreddit,
            kind=self.content.kind,
        )
        return submitted

    def edit(self, text: str) -> "Post":
        """
        Replace the body of this self post.

        This instance is updated in place with the post returned by
        Reddit.

        Args:
            text: New raw markdown body

        Returns:
            This instance

        Raises:
            ControllerError: If this is a draft or a link post
        """
        fullname = self._require_identity("edit")
        if not self.is_self:
            raise ControllerError(f"Cannot edit link post '{fullname}'; only self posts have a body")

        result = self._validate(self.dispatch.links_and_comments.edit_user_text(fullname, text))
        data = result.first_thing_data()
        if data is None:
            raise RetrievalError(fullname, "edit accepted but no post was returned")

        import_data(self, data)
        logger.info("post_edited", fullname=fullname)
        return self

    def about(self) -> "Post":
        """
        Fetch this post by fullname and hydrate this instance in place.

        Returns:
            This instance

        Raises:
            RetrievalError: If Reddit returns no post or a different one
        """
        fullname = self._require_identity("fetch")

        info = self._validate(
            self.dispatch.links_and_comments.info([fullname], subreddit=self.subreddit)
        )
        posts = info.posts
        if not posts:
            raise RetrievalError(fullname, "no matching post returned")
        if posts[0].name != fullname:
            raise RetrievalError(fullname, f"server returned '{posts[0].name}' instead")

        return hydrate(self, posts[0])

    def _act_then_refresh(self, operation: str, call: Callable[[str], Any]) -> "Post":
        """Run a call whose response carries no post, then re-fetch."""
        fullname = self._require_identity(operation)
        self._validate(call(fullname))
        logger.info("post_action", action=operation, fullname=fullname)
        return self.about()

    def upvote(self) -> "Post":
        return self._act_then_refresh(
            "upvote", lambda fullname: self.dispatch.links_and_comments.vote(fullname, UPVOTE)
        )

    def downvote(self) -> "Post":
        return self._act_then_refresh(
            "downvote", lambda fullname: self.dispatch.links_and_comments.vote(fullname, DOWNVOTE)
        )

    def unvote(self) -> "Post":
        return self._act_then_refresh(
            "unvote", lambda fullname: self.dispatch.links_and_comments.vote(fullname, NO_VOTE)
        )

    def lock(self) -> "Post":
        return self._act_then_refresh("lock", self.dispatch.links_and_comments.lock)

    def unlock(self) -> "Post":
        return self._act_then_refresh("unlock", self.dispatch.links_and_comments.unlock)

    def mark_nsfw(self) -> "Post":
        return self._act_then_refresh("mark_nsfw", self.dispatch.links_and_comments.mark_nsfw)

    def unmark_nsfw(self) -> "Post":
        return self._act_then_refresh("unmark_nsfw", self.dispatch.links_and_comments.unmark_nsfw)

    def mark_spoiler(self) -> "Post":
        return self._act_then_refresh("spoiler", self.dispatch.links_and_comments.spoiler)

    def unmark_spoiler(self) -> "Post":
        return self._act_then_refresh("unspoiler", self.dispatch.links_and_comments.unspoiler)

    def hide(self) -> "Post":
        return self._act_then_refresh("hide", self.dispatch.links_and_comments.hide)

    def unhide(self) -> "Post":
        return self._act_then_refresh("unhide", self.dispatch.links_and_comments.unhide)

    def save(self, category: Optional[str] = None) -> "Post":
        return self._act_then_refresh(
            "save", lambda fullname: self.dispatch.links_and_comments.save(fullname, category)
        )

    def unsave(self) -> "Post":
        return self._act_then_refresh("unsave", self.dispatch.links_and_comments.unsave)

    def delete(self) -> None:
        """
        Delete this post on Reddit.

        The instance is not modified and remains a stale snapshot.
        """
        fullname = self._require_identity("delete")
        self._validate(self.dispatch.links_and_comments.delete(fullname))
        logger.info("post_deleted", fullname=fullname)

    def reply(self, text: str) -> Comment:
        """
        Comment on this post.

        Returns:
            The new, hydrated Comment
        """
        fullname = self._require_identity("reply to")
        draft = Comment.draft(self.dispatch, fullname, text, subreddit=self.subreddit)
        return draft.submit()

    # Async counterparts

    async def submit_async(self, **kwargs: Any) -> "Post":
        return await self._in_worker(self.submit, **kwargs)

    async def edit_async(self, text: str) -> "Post":
        return await self._in_worker(self.edit, text)

    async def about_async(self) -> "Post":
        return await self._in_worker(self.about)

    async def upvote_async(self) -> "Post":
        return await self._in_worker(self.upvote)

    async def downvote_async(self) -> "Post":
        return await self._in_worker(self.downvote)

    async def unvote_async(self) -> "Post":
        return await self._in_worker(self.unvote)

    async def lock_async(self) -> "Post":
        return await self._in_worker(self.lock)

    async def unlock_async(self) -> "Post":
        return await self._in_worker(self.unlock)

    async def mark_nsfw_async(self) -> "Post":
        return await self._in_worker(self.mark_nsfw)

    async def unmark_nsfw_async(self) -> "Post":
        return await self._in_worker(self.unmark_nsfw)

    async def mark_spoiler_async(self) -> "Post":
        return await self._in_worker(self.mark_spoiler)

    async def unmark_spoiler_async(self) -> "Post":
        return await self._in_worker(self.unmark_spoiler)

    async def hide_async(self) -> "Post":
        return await self._in_worker(self.hide)

    async def unhide_async(self) -> "Post":
        return await self._in_worker(self.unhide)

    async def save_async(self, category: Optional[str] = None) -> "Post":
        return await self._in_worker(self.save, category)

    async def unsave_async(self) -> "Post":
        return await self._in_worker(self.unsave)

    async def delete_async(self) -> None:
        await self._in_worker(self.delete)

    async def reply_async(self, text: str) -> Comment:
        return await self._in_worker(self.reply, text)
