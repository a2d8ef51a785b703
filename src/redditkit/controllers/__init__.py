"""
Stateful resource controllers.

Each controller wraps one remote thing (post, comment, modmail
conversation) and turns endpoint calls plus validation into
lifecycle operations: draft, submit, fetch, edit and moderate.
"""

from redditkit.controllers.base import (
    Controller,
    ControllerState,
    ResourceIdentity,
    hydrate,
    import_data,
)
from redditkit.controllers.comment import Comment
from redditkit.controllers.conversation import Conversation
from redditkit.controllers.post import LinkTarget, Post, SelfText

__all__ = [
    "Controller",
    "ControllerState",
    "ResourceIdentity",
    "hydrate",
    "import_data",
    "Comment",
    "Conversation",
    "LinkTarget",
    "Post",
    "SelfText",
]
