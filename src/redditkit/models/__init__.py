"""
Pydantic response structures mirroring Reddit's JSON shapes.

These are data-transfer objects only: an endpoint model builds one
per call and a controller consumes it; nothing retains them.
"""

from redditkit.models.base import JsonEnvelope, RedditModel, Thing
from redditkit.models.links_and_comments import (
    PostResultShortContainer,
    PostResultShortData,
    ThingListData,
    ThingResultContainer,
)
from redditkit.models.modmail import (
    ConversationContainer,
    ModmailAuthor,
    ModmailConversation,
    ModmailConversationContainer,
    ModmailMessage,
    ModmailModAction,
    ModmailObjId,
    ModmailOwner,
    ModmailSubreddit,
    ModmailSubredditContainer,
    ModmailUnreadCount,
    ModmailUser,
)
from redditkit.models.things import (
    COMMENT_KIND,
    POST_KIND,
    CommentData,
    Info,
    ListingData,
    PostData,
)

__all__ = [
    # Shared
    "JsonEnvelope",
    "RedditModel",
    "Thing",
    # Listings
    "COMMENT_KIND",
    "POST_KIND",
    "CommentData",
    "Info",
    "ListingData",
    "PostData",
    # Links and comments
    "PostResultShortContainer",
    "PostResultShortData",
    "ThingListData",
    "ThingResultContainer",
    # Modmail
    "ConversationContainer",
    "ModmailAuthor",
    "ModmailConversation",
    "ModmailConversationContainer",
    "ModmailMessage",
    "ModmailModAction",
    "ModmailObjId",
    "ModmailOwner",
    "ModmailSubreddit",
    "ModmailSubredditContainer",
    "ModmailUnreadCount",
    "ModmailUser",
]
