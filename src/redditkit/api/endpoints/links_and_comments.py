"""
Endpoint model for links (posts) and comments.
"""

from typing import Any, Iterable, Optional, Union

from redditkit.api.endpoints.base import BaseEndpoint
from redditkit.models.links_and_comments import (
    PostResultShortContainer,
    ThingResultContainer,
)
from redditkit.models.things import Info

# Vote directions accepted by /api/vote
UPVOTE = 1
NO_VOTE = 0
DOWNVOTE = -1


class LinksAndComments(BaseEndpoint):
    """
    Submit, edit, fetch and moderate posts and comments.

    Write endpoints are called with `api_type=json` so that errors
    come back in the `{"json": {"errors": [...]}}` envelope.
    """

    def submit(
        self,
        kind: str,
        sr: str,
        title: str,
        text: Optional[str] = None,
        url: Optional[str] = None,
        nsfw: bool = False,
        spoiler: bool = False,
        send_replies: bool = True,
        resubmit: bool = False,
        flair_id: Optional[str] = None,
        flair_text: Optional[str] = None,
        ad: bool = False,
        app: Optional[str] = None,
        extension: Optional[str] = None,
        g_recaptcha_response: Optional[str] = None,
        video_poster_url: Optional[str] = None,
    ) -> PostResultShortContainer:
        """
        Submit a new link or self post.

        Args:
            kind: One of (link, self, image, video, videogif)
            sr: Subreddit display name
            title: Title, no longer than 300 characters
            text: Raw markdown body for self posts
            url: Target URL for link posts
            nsfw: Mark the post NSFW
            spoiler: Mark the post as a spoiler
            send_replies: Send inbox replies to the author
            resubmit: Allow resubmitting an already posted URL
            flair_id: Flair template id, no longer than 36 characters
            flair_text: Flair text, no longer than 64 characters
            ad: Submit as an ad
            app: Client app identifier
            extension: Extension used for redirects
            g_recaptcha_response: Captcha response
            video_poster_url: Poster image for video posts

        Returns:
            Container holding the new post's id, fullname and URL
        """
        return self._execute_as(
            PostResultShortContainer,
            "POST",
            "api/submit",
            data={
                "api_type": "json",
                "kind": kind,
                "sr": sr,
                "title": title,
                "text": text,
                "url": url,
                "nsfw": nsfw,
                "spoiler": spoiler,
                "sendreplies": send_replies,
                "resubmit": resubmit,
                "flair_id": flair_id,
                "flair_text": flair_text,
                "ad": ad,
                "app": app,
                "extension": extension,
                "g-recaptcha-response": g_recaptcha_response,
                "video_poster_url": video_poster_url,
            },
        )

    def edit_user_text(
        self,
        thing_id: str,
        text: str,
        return_rtjson: bool = False,
        richtext_json: Optional[str] = None,
    ) -> ThingResultContainer:
        """
        Edit the body of a self post or comment.

        Args:
            thing_id: Fullname of the thing to edit
            text: New raw markdown body
            return_rtjson: Ask for the rich-text JSON in the response
            richtext_json: Rich-text body instead of markdown

        Returns:
            Container holding the full, updated thing
        """
        return self._execute_as(
            ThingResultContainer,
            "POST",
            "api/editusertext",
            data={
                "api_type": "json",
                "thing_id": thing_id,
                "text": text,
                "return_rtjson": return_rtjson,
                "richtext_json": richtext_json,
            },
        )

    def comment(
        self,
        parent: str,
        text: str,
        return_rtjson: bool = False,
        richtext_json: Optional[str] = None,
    ) -> ThingResultContainer:
        """
        Reply to a post, comment or message.

        Args:
            parent: Fullname of the thing being replied to
            text: Raw markdown body

        Returns:
            Container holding the new comment
        """
        return self._execute_as(
            ThingResultContainer,
            "POST",
            "api/comment",
            data={
                "api_type": "json",
                "thing_id": parent,
                "text": text,
                "return_rtjson": return_rtjson,
                "richtext_json": richtext_json,
            },
        )

    def info(
        self,
        fullnames: Union[str, Iterable[str], None] = None,
        subreddit: Optional[str] = None,
        url: Optional[str] = None,
    ) -> Info:
        """
        Fetch things by fullname (or by URL).

        Args:
            fullnames: One fullname or several
            subreddit: Restrict the lookup to one subreddit
            url: Look up posts linking to this URL instead

        Returns:
            Listing of the matching things
        """
        path = f"r/{subreddit}/api/info" if subreddit else "api/info"
        return self._execute_as(
            Info,
            "GET",
            path,
            params={
                "id": self._join(fullnames) if fullnames is not None else None,
                "url": url,
            },
        )

    def vote(self, fullname: str, direction: int) -> Any:
        """
        Cast a vote: 1 up, 0 clear, -1 down.

        Returns:
            The (normally empty) JSON body
        """
        return self._execute("POST", "api/vote", data={"id": fullname, "dir": direction})

    def delete(self, fullname: str) -> Any:
        """Delete a post or comment authored by the user."""
        return self._execute("POST", "api/del", data={"id": fullname})

    def hide(self, fullnames: Union[str, Iterable[str]]) -> Any:
        """Hide one or more posts from the user's listings."""
        return self._execute("POST", "api/hide", data={"id": self._join(fullnames)})

    def unhide(self, fullnames: Union[str, Iterable[str]]) -> Any:
        return self._execute("POST", "api/unhide", data={"id": self._join(fullnames)})

    def save(self, fullname: str, category: Optional[str] = None) -> Any:
        """Save a post or comment, optionally into a category (gold only)."""
        return self._execute("POST", "api/save", data={"id": fullname, "category": category})

    def unsave(self, fullname: str) -> Any:
        return self._execute("POST", "api/unsave", data={"id": fullname})

    def lock(self, fullname: str) -> Any:
        """Lock a post or comment against new replies (moderators only)."""
        return self._execute("POST", "api/lock", data={"id": fullname})

    def unlock(self, fullname: str) -> Any:
        return self._execute("POST", "api/unlock", data={"id": fullname})

    def mark_nsfw(self, fullname: str) -> Any:
        return self._execute("POST", "api/marknsfw", data={"id": fullname})

    def unmark_nsfw(self, fullname: str) -> Any:
        return self._execute("POST", "api/unmarknsfw", data={"id": fullname})

    def spoiler(self, fullname: str) -> Any:
        return self._execute("POST", "api/spoiler", data={"id": fullname})

    def unspoiler(self, fullname: str) -> Any:
        return self._execute("POST", "api/unspoiler", data={"id": fullname})
