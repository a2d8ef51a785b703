"""
Endpoint model for the new modmail API.

State and sort values are plain strings and are not checked
locally; Reddit rejects invalid ones.
"""

from typing import Any, Iterable, Optional, Union

from redditkit.api.endpoints.base import BaseEndpoint, unstable_endpoint
from redditkit.models.modmail import (
    ConversationContainer,
    ModmailConversationContainer,
    ModmailSubredditContainer,
    ModmailUnreadCount,
    ModmailUser,
)

CONVERSATION_STATES = (
    "new",
    "inprogress",
    "mod",
    "notifications",
    "archived",
    "highlighted",
    "all",
)

CONVERSATION_SORTS = ("recent", "mod", "user", "unread")

CONVERSATIONS_PATH = "api/mod/conversations"


class Modmail(BaseEndpoint):
    """Conversations, messages and moderation actions of new modmail."""

    @unstable_endpoint("live service answers 404 for subreddit names and fullnames alike")
    def bulk_read(self, entity: Union[str, Iterable[str]], state: str) -> Any:
        """
        Mark all conversations of a state read for the given subreddits.

        Args:
            entity: Subreddit names (comma-delimited string or iterable)
            state: One of CONVERSATION_STATES

        Returns:
            Loosely typed JSON body
        """
        return self._execute(
            "POST",
            "api/mod/bulk_read",
            data={"entity": self._join(entity), "state": state},
        )

    def get_conversations(
        self,
        after: Optional[str] = None,
        entity: Union[str, Iterable[str], None] = None,
        sort: Optional[str] = None,
        state: Optional[str] = None,
        limit: int = 25,
    ) -> ConversationContainer:
        """
        List conversations of the user or of the given subreddits.

        Args:
            after: Base36 conversation id to page after
            entity: Subreddit names to restrict to
            sort: One of CONVERSATION_SORTS
            state: One of CONVERSATION_STATES
            limit: Page size (server default 25, max 100)

        Returns:
            Page of conversations

        Example:
            >>> page = dispatch.modmail.get_conversations(state="archived", limit=10)
            >>> len(page.conversations) <= 10
            True
        """
        return self._execute_as(
            ConversationContainer,
            "GET",
            CONVERSATIONS_PATH,
            params={
                "after": after,
                "entity": self._join(entity) if entity is not None else None,
                "sort": sort,
                "state": state,
                "limit": limit,
            },
        )

    def new_conversation(
        self,
        body: str,
        is_author_hidden: bool,
        sr_name: str,
        subject: str,
        to: Optional[str] = None,
    ) -> ModmailConversationContainer:
        """
        Create a conversation together with its first message.

        Args:
            body: Raw markdown body
            is_author_hidden: Send as the subreddit instead of the moderator
            sr_name: Subreddit display name
            subject: Subject, no longer than 100 characters
            to: Recipient username; None for a mod discussion

        Returns:
            Container with the new conversation
        """
        return self._execute_as(
            ModmailConversationContainer,
            "POST",
            CONVERSATIONS_PATH,
            data={
                "body": body,
                "isAuthorHidden": is_author_hidden,
                "srName": sr_name,
                "subject": subject,
                "to": to,
            },
        )

    def get_conversation(
        self,
        conversation_id: str,
        mark_read: bool = False,
    ) -> ModmailConversationContainer:
        """Fetch all messages, mod actions and metadata of one conversation."""
        return self._execute_as(
            ModmailConversationContainer,
            "GET",
            f"{CONVERSATIONS_PATH}/{conversation_id}",
            params={"markRead": mark_read},
        )

    def new_message(
        self,
        conversation_id: str,
        body: str,
        is_author_hidden: bool = False,
        is_internal: bool = False,
    ) -> ModmailConversationContainer:
        """
        Add a message to a conversation.

        Args:
            conversation_id: Base36 conversation id
            body: Raw markdown body
            is_author_hidden: Send as the subreddit
            is_internal: Private moderator note

        Returns:
            Container with the updated conversation
        """
        return self._execute_as(
            ModmailConversationContainer,
            "POST",
            f"{CONVERSATIONS_PATH}/{conversation_id}",
            data={
                "body": body,
                "isAuthorHidden": is_author_hidden,
                "isInternal": is_internal,
            },
        )

    @unstable_endpoint("live service answers 422 'not archivable' without a reason")
    def archive_conversation(self, conversation_id: str) -> Any:
        return self._execute("POST", f"{CONVERSATIONS_PATH}/{conversation_id}/archive")

    @unstable_endpoint("untested against the live service; depends on archive working")
    def unarchive_conversation(self, conversation_id: str) -> Any:
        return self._execute("POST", f"{CONVERSATIONS_PATH}/{conversation_id}/unarchive")

    def remove_highlight(self, conversation_id: str) -> ModmailConversationContainer:
        return self._execute_as(
            ModmailConversationContainer,
            "DELETE",
            f"{CONVERSATIONS_PATH}/{conversation_id}/highlight",
        )

    def mark_highlighted(self, conversation_id: str) -> ModmailConversationContainer:
        return self._execute_as(
            ModmailConversationContainer,
            "POST",
            f"{CONVERSATIONS_PATH}/{conversation_id}/highlight",
        )

    def mute(self, conversation_id: str) -> ModmailConversationContainer:
        """Mute the non-moderator participant of a conversation."""
        return self._execute_as(
            ModmailConversationContainer,
            "POST",
            f"{CONVERSATIONS_PATH}/{conversation_id}/mute",
        )

    def unmute(self, conversation_id: str) -> ModmailConversationContainer:
        return self._execute_as(
            ModmailConversationContainer,
            "POST",
            f"{CONVERSATIONS_PATH}/{conversation_id}/unmute",
        )

    def user(self, conversation_id: str) -> ModmailUser:
        """Recent posts, comments and conversations of the conversation's user."""
        return self._execute_as(
            ModmailUser,
            "GET",
            f"{CONVERSATIONS_PATH}/{conversation_id}/user",
        )

    def mark_read(self, conversation_ids: Union[str, Iterable[str]]) -> Any:
        """Mark conversations read; returns the decoded body for validation."""
        return self._execute(
            "POST",
            f"{CONVERSATIONS_PATH}/read",
            data={"conversationIds": self._join(conversation_ids)},
        )

    def mark_unread(self, conversation_ids: Union[str, Iterable[str]]) -> Any:
        return self._execute(
            "POST",
            f"{CONVERSATIONS_PATH}/unread",
            data={"conversationIds": self._join(conversation_ids)},
        )

    def subreddits(self) -> ModmailSubredditContainer:
        """Subreddits the user moderates that are enrolled in new modmail."""
        return self._execute_as(
            ModmailSubredditContainer,
            "GET",
            f"{CONVERSATIONS_PATH}/subreddits",
        )

    def unread_count(self) -> ModmailUnreadCount:
        """Unread conversation counts by state."""
        return self._execute_as(
            ModmailUnreadCount,
            "GET",
            f"{CONVERSATIONS_PATH}/unread/count",
        )
