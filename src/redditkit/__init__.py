"""
redditkit: stateful Reddit resource controllers.

Controllers (Post, Comment, Conversation) wrap thin per-family
REST models reached through a shared Dispatch. Every response is
validated before a controller acts on it, and mutating calls
re-apply the server's data onto the controller in place.

Example:
    >>> from redditkit import Dispatch, Post
    >>> dispatch = Dispatch.from_env()
    >>> draft = Post.new_self_post(dispatch, "test", "Hello", "World")
    >>> post = draft.submit()
    >>> post.edit("new body")
"""

__version__ = "0.1.0"

from redditkit.api.client import Dispatch, get_dispatch, reset_dispatch  # noqa: E402
from redditkit.config import RedditSettings  # noqa: E402
from redditkit.controllers import (  # noqa: E402
    Comment,
    ControllerState,
    Conversation,
    LinkTarget,
    Post,
    ResourceIdentity,
    SelfText,
)

__all__ = [
    "__version__",
    "Dispatch",
    "get_dispatch",
    "reset_dispatch",
    "RedditSettings",
    "Comment",
    "ControllerState",
    "Conversation",
    "LinkTarget",
    "Post",
    "ResourceIdentity",
    "SelfText",
]
