"""
Response structures for the new modmail API.

Modmail speaks camelCase; fields are snake_case with the wire name
as alias.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from redditkit.models.base import RedditModel


class ModmailAuthor(RedditModel):
    """A participant or message author in a modmail conversation."""

    id: Optional[int] = None
    name: Optional[str] = None
    is_mod: bool = Field(False, alias="isMod")
    is_admin: bool = Field(False, alias="isAdmin")
    is_op: bool = Field(False, alias="isOp")
    is_participant: bool = Field(False, alias="isParticipant")
    is_hidden: bool = Field(False, alias="isHidden")
    is_deleted: bool = Field(False, alias="isDeleted")


class ModmailOwner(RedditModel):
    """The subreddit that owns a conversation."""

    display_name: Optional[str] = Field(None, alias="displayName")
    type: Optional[str] = None
    id: Optional[str] = Field(None, description="Subreddit fullname (t5_)")


class ModmailObjId(RedditModel):
    """Ordered reference to a message or mod action of a conversation."""

    id: str
    key: str


class ModmailMessage(RedditModel):
    """A single modmail message."""

    id: Optional[str] = None
    body: str = Field("", description="Rendered HTML body")
    body_markdown: str = Field("", alias="bodyMarkdown")
    author: Optional[ModmailAuthor] = None
    is_internal: bool = Field(False, alias="isInternal")
    date: Optional[datetime] = None


class ModmailModAction(RedditModel):
    """A moderator action recorded on a conversation."""

    id: Optional[str] = None
    action_type_id: Optional[int] = Field(None, alias="actionTypeId")
    date: Optional[datetime] = None
    author: Optional[ModmailAuthor] = None


class ModmailConversation(RedditModel):
    """Conversation metadata as returned inside containers."""

    id: Optional[str] = Field(None, description="Base36 conversation id")
    subject: str = ""
    state: Optional[int] = None
    is_highlighted: bool = Field(False, alias="isHighlighted")
    is_internal: bool = Field(False, alias="isInternal")
    is_auto: bool = Field(False, alias="isAuto")
    last_updated: Optional[datetime] = Field(None, alias="lastUpdated")
    last_user_update: Optional[datetime] = Field(None, alias="lastUserUpdate")
    last_mod_update: Optional[datetime] = Field(None, alias="lastModUpdate")
    last_unread: Optional[datetime] = Field(None, alias="lastUnread")
    num_messages: int = Field(0, ge=0, alias="numMessages")
    owner: Optional[ModmailOwner] = None
    participant: Optional[ModmailAuthor] = None
    authors: list[ModmailAuthor] = Field(default_factory=list)
    obj_ids: list[ModmailObjId] = Field(default_factory=list, alias="objIds")


class ModmailUser(RedditModel):
    """
    Recent activity of the non-moderator in a conversation.

    The nested collections are keyed by fullname and vary by account,
    so they stay untyped.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    created: Optional[datetime] = None
    is_suspended: bool = Field(False, alias="isSuspended")
    is_shadow_banned: bool = Field(False, alias="isShadowBanned")
    mute_status: dict[str, Any] = Field(default_factory=dict, alias="muteStatus")
    ban_status: dict[str, Any] = Field(default_factory=dict, alias="banStatus")
    recent_comments: dict[str, Any] = Field(default_factory=dict, alias="recentComments")
    recent_posts: dict[str, Any] = Field(default_factory=dict, alias="recentPosts")
    recent_convos: dict[str, Any] = Field(default_factory=dict, alias="recentConvos")


class ModmailConversationContainer(RedditModel):
    """
    A single conversation with its messages and mod actions.

    Returned by get, create, reply, highlight and mute calls.
    """

    conversation: Optional[ModmailConversation] = None
    messages: dict[str, ModmailMessage] = Field(default_factory=dict)
    mod_actions: dict[str, ModmailModAction] = Field(default_factory=dict, alias="modActions")
    user: Optional[ModmailUser] = None

    def ordered_messages(self) -> list[ModmailMessage]:
        """
        Messages in conversation order.

        Follows the conversation's `objIds`; falls back to date order when
        the conversation metadata is missing.
        """
        if self.conversation is not None and self.conversation.obj_ids:
            return [
                self.messages[ref.id]
                for ref in self.conversation.obj_ids
                if ref.key == "messages" and ref.id in self.messages
            ]
        return sorted(
            self.messages.values(),
            key=lambda message: message.date.timestamp() if message.date else 0.0,
        )


class ConversationContainer(RedditModel):
    """
    A page of conversations as returned by `GET /api/mod/conversations`.

    Example:
        >>> container = ConversationContainer.model_validate(raw)
        >>> [c.subject for c in container.ordered()]
    """

    conversations: dict[str, ModmailConversation] = Field(default_factory=dict)
    conversation_ids: list[str] = Field(default_factory=list, alias="conversationIds")
    messages: dict[str, ModmailMessage] = Field(default_factory=dict)
    viewer_id: Optional[str] = Field(None, alias="viewerId")

    def ordered(self) -> list[ModmailConversation]:
        """Conversations in the order chosen by the requested sort."""
        return [
            self.conversations[conversation_id]
            for conversation_id in self.conversation_ids
            if conversation_id in self.conversations
        ]


class ModmailSubreddit(RedditModel):
    """A subreddit enrolled in new modmail that the user moderates."""

    display_name: Optional[str] = None
    name: Optional[str] = None
    last_updated: Optional[datetime] = Field(None, alias="lastUpdated")
    key_color: Optional[str] = Field(None, alias="keyColor")
    subscribers: int = 0
    id: Optional[str] = None
    icon: Optional[str] = None


class ModmailSubredditContainer(RedditModel):
    """Subreddits keyed by fullname."""

    subreddits: dict[str, ModmailSubreddit] = Field(default_factory=dict)


class ModmailUnreadCount(RedditModel):
    """Unread conversation counts per conversation state."""

    highlighted: int = Field(0, ge=0)
    notifications: int = Field(0, ge=0)
    archived: int = Field(0, ge=0)
    new: int = Field(0, ge=0)
    inprogress: int = Field(0, ge=0)
    mod: int = Field(0, ge=0)
