"""
Modmail conversation controller.

Unlike posts and comments a conversation has no fullname; it is
identified by its base36 conversation id.
"""

import copy
from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from redditkit.api.exceptions import ControllerError, RetrievalError
from redditkit.controllers.base import (
    Controller,
    ResourceIdentity,
    hydrate,
    import_data,
)
from redditkit.models.modmail import (
    ModmailAuthor,
    ModmailConversationContainer,
    ModmailMessage,
    ModmailModAction,
    ModmailUser,
)
from redditkit.utils.logger import get_logger

if TYPE_CHECKING:
    from redditkit.api.client import Dispatch

logger = get_logger(__name__)

ContainerLike = Union[ModmailConversationContainer, Mapping[str, Any]]


def _as_container(data: ContainerLike) -> ModmailConversationContainer:
    if isinstance(data, ModmailConversationContainer):
        return data
    return ModmailConversationContainer.model_validate(data)


class Conversation(Controller):
    """
    Mutable controller for one new-modmail conversation.

    A draft carries what is needed to open the conversation
    (subreddit, subject, first message body, optional recipient).
    Everything else is filled from the conversation container Reddit
    returns.

    Example:
        >>> draft = Conversation.draft(dispatch, "mysub", "Welcome", "Hi!", to="someuser")
        >>> conversation = draft.submit()
        >>> conversation.reply("Following up", is_internal=True)
    """

    IDENTITY_KEY = "id"
    MUTABLE_FIELDS = (
        "conversation_state",
        "is_highlighted",
        "is_internal",
        "is_auto",
        "last_updated",
        "last_user_update",
        "last_mod_update",
        "last_unread",
        "num_messages",
        "participant",
        "authors",
        "messages",
        "mod_actions",
    )

    def __init__(
        self,
        dispatch: "Dispatch",
        subreddit: Optional[str] = None,
        subject: str = "",
        body: str = "",
        recipient: Optional[str] = None,
        is_author_hidden: bool = False,
        identity: Optional[ResourceIdentity] = None,
        hydrated: bool = False,
    ) -> None:
        super().__init__(dispatch, identity=identity, hydrated=hydrated)
        self.subreddit = subreddit
        self.subject = subject
        self.body = body
        self.recipient = recipient
        self.is_author_hidden = is_author_hidden

        self.conversation_state: Optional[int] = None
        self.is_highlighted = False
        self.is_internal = False
        self.is_auto = False
        self.last_updated: Optional[datetime] = None
        self.last_user_update: Optional[datetime] = None
        self.last_mod_update: Optional[datetime] = None
        self.last_unread: Optional[datetime] = None
        self.num_messages = 0
        self.participant: Optional[ModmailAuthor] = None
        self.authors: list[ModmailAuthor] = []
        self.messages: list[ModmailMessage] = []
        self.mod_actions: list[ModmailModAction] = []
        self.user_info: Optional[ModmailUser] = None

    @classmethod
    def draft(
        cls,
        dispatch: "Dispatch",
        subreddit: str,
        subject: str,
        body: str,
        to: Optional[str] = None,
        is_author_hidden: bool = False,
    ) -> "Conversation":
        """
        Draft a new conversation; nothing is sent until submit().

        Args:
            dispatch: Shared Dispatch
            subreddit: Subreddit display name the conversation belongs to
            subject: Subject line (Reddit allows up to 100 characters)
            body: Raw markdown body of the first message
            to: Recipient username; None opens a moderator discussion
            is_author_hidden: Send as the subreddit instead of the moderator
        """
        return cls(
            dispatch,
            subreddit=subreddit,
            subject=subject,
            body=body,
            recipient=to,
            is_author_hidden=is_author_hidden,
        )

    @classmethod
    def stub(cls, dispatch: "Dispatch", conversation_id: str) -> "Conversation":
        return cls(dispatch, identity=ResourceIdentity(id=conversation_id))

    @classmethod
    def from_container(cls, dispatch: "Dispatch", container: ContainerLike) -> "Conversation":
        """Build a hydrated conversation from a conversation container."""
        return hydrate(cls(dispatch), _as_container(container))

    def _identity_from(self, data: Any) -> ResourceIdentity:
        container = _as_container(data)
        conversation = container.conversation
        return ResourceIdentity(id=conversation.id if conversation is not None else None)

    def _fields_from(self, data: Any) -> dict[str, Any]:
        container = _as_container(data)
        conversation = container.conversation
        if conversation is None:
            raise ControllerError("Conversation container carries no conversation")

        fields: dict[str, Any] = {
            "subject": conversation.subject,
            "conversation_state": conversation.state,
            "is_highlighted": conversation.is_highlighted,
            "is_internal": conversation.is_internal,
            "is_auto": conversation.is_auto,
            "last_updated": conversation.last_updated,
            "last_user_update": conversation.last_user_update,
            "last_mod_update": conversation.last_mod_update,
            "last_unread": conversation.last_unread,
            "num_messages": conversation.num_messages,
            "participant": conversation.participant,
            "authors": list(conversation.authors),
            "messages": container.ordered_messages(),
            "mod_actions": list(container.mod_actions.values()),
        }
        if conversation.owner is not None and conversation.owner.display_name:
            fields["subreddit"] = conversation.owner.display_name
        if container.user is not None:
            fields["user_info"] = container.user
        return fields

    def _import_container(
        self,
        operation: str,
        container: ModmailConversationContainer,
    ) -> "Conversation":
        if container.conversation is None:
            raise RetrievalError(self.id, f"{operation} accepted but no conversation was returned")
        import_data(self, container)
        logger.info("conversation_updated", action=operation, conversation_id=self.id)
        return self

    def submit(self) -> "Conversation":
        """
        Open this draft as a new conversation.

        The draft itself is left unchanged.

        Returns:
            A new Conversation hydrated from the created conversation

        Raises:
            ControllerError: If already submitted or subreddit/subject are missing
            RetrievalError: If Reddit accepts the request without returning it
        """
        self._require_draft("submit")
        if not self.subreddit or not self.subject:
            raise ControllerError("A Conversation needs a subreddit and a subject")

        container = self._validate(
            self.dispatch.modmail.new_conversation(
                body=self.body,
                is_author_hidden=self.is_author_hidden,
                sr_name=self.subreddit,
                subject=self.subject,
                to=self.recipient,
            )
        )
        if container.conversation is None:
            raise RetrievalError(None, "conversation accepted but none was returned")

        submitted = hydrate(copy.copy(self), container)

        logger.info(
            "conversation_submitted",
            conversation_id=submitted.id,
            subreddit=self.subreddit,
            has_recipient=self.recipient is not None,
        )
        return submitted

    def about(self, mark_read: bool = False) -> "Conversation":
        """
        Fetch this conversation and hydrate this instance in place.

        Args:
            mark_read: Also mark the conversation read

        Raises:
            RetrievalError: If Reddit returns no conversation or a different one
        """
        conversation_id = self._require_identity("fetch")

        container = self._validate(
            self.dispatch.modmail.get_conversation(conversation_id, mark_read=mark_read)
        )
        if container.conversation is None:
            raise RetrievalError(conversation_id, "no conversation returned")
        if container.conversation.id != conversation_id:
            raise RetrievalError(
                conversation_id,
                f"server returned '{container.conversation.id}' instead",
            )

        return hydrate(self, container)

    def reply(
        self,
        body: str,
        is_author_hidden: bool = False,
        is_internal: bool = False,
    ) -> "Conversation":
        """
        Add a message to this conversation and import the updated thread.

        Args:
            body: Raw markdown body
            is_author_hidden: Send as the subreddit
            is_internal: Private moderator note
        """
        conversation_id = self._require_identity("reply to")
        container = self._validate(
            self.dispatch.modmail.new_message(
                conversation_id,
                body,
                is_author_hidden=is_author_hidden,
                is_internal=is_internal,
            )
        )
        return self._import_container("reply", container)

    def highlight(self) -> "Conversation":
        conversation_id = self._require_identity("highlight")
        container = self._validate(self.dispatch.modmail.mark_highlighted(conversation_id))
        return self._import_container("highlight", container)

    def unhighlight(self) -> "Conversation":
        conversation_id = self._require_identity("unhighlight")
        container = self._validate(self.dispatch.modmail.remove_highlight(conversation_id))
        return self._import_container("unhighlight", container)

    def mute(self) -> "Conversation":
        conversation_id = self._require_identity("mute")
        container = self._validate(self.dispatch.modmail.mute(conversation_id))
        return self._import_container("mute", container)

    def unmute(self) -> "Conversation":
        conversation_id = self._require_identity("unmute")
        container = self._validate(self.dispatch.modmail.unmute(conversation_id))
        return self._import_container("unmute", container)

    def archive(self) -> Any:
        """
        Archive this conversation.

        The endpoint is unreliable on the live service; the raw JSON
        body is returned and nothing is imported.
        """
        conversation_id = self._require_identity("archive")
        result = self._validate(self.dispatch.modmail.archive_conversation(conversation_id))
        logger.info("conversation_archived", conversation_id=conversation_id)
        return result

    def unarchive(self) -> Any:
        conversation_id = self._require_identity("unarchive")
        result = self._validate(self.dispatch.modmail.unarchive_conversation(conversation_id))
        logger.info("conversation_unarchived", conversation_id=conversation_id)
        return result

    def mark_read(self) -> None:
        conversation_id = self._require_identity("mark read")
        self._validate(self.dispatch.modmail.mark_read(conversation_id))

    def mark_unread(self) -> None:
        conversation_id = self._require_identity("mark unread")
        self._validate(self.dispatch.modmail.mark_unread(conversation_id))

    def user(self) -> ModmailUser:
        """Fetch the non-moderator participant's recent activity and keep it on `user_info`."""
        conversation_id = self._require_identity("look up the user of")
        self.user_info = self._validate(self.dispatch.modmail.user(conversation_id))
        return self.user_info

    # Async counterparts

    async def submit_async(self) -> "Conversation":
        return await self._in_worker(self.submit)

    async def about_async(self, mark_read: bool = False) -> "Conversation":
        return await self._in_worker(self.about, mark_read)

    async def reply_async(
        self,
        body: str,
        is_author_hidden: bool = False,
        is_internal: bool = False,
    ) -> "Conversation":
        return await self._in_worker(
            self.reply,
            body,
            is_author_hidden=is_author_hidden,
            is_internal=is_internal,
        )

    async def highlight_async(self) -> "Conversation":
        return await self._in_worker(self.highlight)

    async def unhighlight_async(self) -> "Conversation":
        return await self._in_worker(self.unhighlight)

    async def mute_async(self) -> "Conversation":
        return await self._in_worker(self.mute)

    async def unmute_async(self) -> "Conversation":
        return await self._in_worker(self.unmute)

    async def archive_async(self) -> Any:
        return await self._in_worker(self.archive)

    async def unarchive_async(self) -> Any:
        return await self._in_worker(self.unarchive)

    async def mark_read_async(self) -> None:
        await self._in_worker(self.mark_read)

    async def mark_unread_async(self) -> None:
        await self._in_worker(self.mark_unread)

    async def user_async(self) -> ModmailUser:
        return await self._in_worker(self.user)
