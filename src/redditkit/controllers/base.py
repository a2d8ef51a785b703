"""
Shared lifecycle for resource controllers.

A controller is a single-owner mutable record describing the
client's current belief about one remote thing. It moves through
three states:

- DRAFT: caller-populated, no identity yet (not submitted)
- STUB: identity known, content not fetched
- HYDRATED: content populated from a listing or a fetch

`import_data` and `hydrate` are the only ways server data flows
into an existing controller. Both refuse data that belongs to a
different thing.
"""

import asyncio
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Optional, TypeVar

from redditkit.api.exceptions import ControllerError, IdentityMismatchError
from redditkit.api.validation import validate
from redditkit.utils.logger import get_logger

if TYPE_CHECKING:
    from redditkit.api.client import Dispatch

logger = get_logger(__name__)

ControllerT = TypeVar("ControllerT", bound="Controller")
ResultT = TypeVar("ResultT")


class ControllerState(str, Enum):
    """Lifecycle state of a controller instance."""

    DRAFT = "draft"
    STUB = "stub"
    HYDRATED = "hydrated"


@dataclass(frozen=True)
class ResourceIdentity:
    """
    Identity fields shared by every kind of remote resource.

    Attributes:
        fullname: Type-prefixed id assigned by Reddit (e.g. "t3_abc123")
        id: Bare base36 id
        permalink: Path of the thing on reddit.com
        created: Creation time (UTC)
    """

    fullname: Optional[str] = None
    id: Optional[str] = None
    permalink: Optional[str] = None
    created: Optional[datetime] = None

    def filled_from(self, other: "ResourceIdentity") -> "ResourceIdentity":
        """Copy of this identity with unknown fields taken from `other`."""
        return replace(
            self,
            fullname=self.fullname if self.fullname is not None else other.fullname,
            id=self.id if self.id is not None else other.id,
            permalink=self.permalink if self.permalink is not None else other.permalink,
            created=self.created if self.created is not None else other.created,
        )


class Controller:
    """
    Base class for Post, Comment and Conversation.

    Subclasses declare which attribute of ResourceIdentity is the
    thing's key (`IDENTITY_KEY`), which attributes a server refresh
    may overwrite (`MUTABLE_FIELDS`), and how to read identity and
    fields out of a response payload.

    The Dispatch reference is shared, never owned: any number of
    controllers may point at the same Dispatch.
    """

    IDENTITY_KEY: ClassVar[str] = "fullname"
    MUTABLE_FIELDS: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        dispatch: "Dispatch",
        identity: Optional[ResourceIdentity] = None,
        hydrated: bool = False,
    ) -> None:
        self._dispatch = dispatch
        self._identity = identity or ResourceIdentity()
        self._hydrated = hydrated

    @property
    def dispatch(self) -> "Dispatch":
        return self._dispatch

    @property
    def identity(self) -> ResourceIdentity:
        return self._identity

    @property
    def fullname(self) -> Optional[str]:
        return self._identity.fullname

    @property
    def id(self) -> Optional[str]:
        return self._identity.id

    @property
    def permalink(self) -> Optional[str]:
        return self._identity.permalink

    @property
    def created(self) -> Optional[datetime]:
        return self._identity.created

    @property
    def identity_key(self) -> Optional[str]:
        """Value of the identity attribute named by IDENTITY_KEY."""
        return getattr(self._identity, self.IDENTITY_KEY)

    @property
    def state(self) -> ControllerState:
        if self.identity_key is None:
            return ControllerState.DRAFT
        if self._hydrated:
            return ControllerState.HYDRATED
        return ControllerState.STUB

    def _identity_from(self, data: Any) -> ResourceIdentity:
        """Read the identity carried by a response payload."""
        raise NotImplementedError

    def _fields_from(self, data: Any) -> dict[str, Any]:
        """Read controller attribute values out of a response payload."""
        raise NotImplementedError

    def _validate(self, response: ResultT) -> ResultT:
        return validate(response)

    def _require_identity(self, operation: str) -> str:
        """Return the identity key, refusing to act on a draft."""
        key = self.identity_key
        if key is None:
            raise ControllerError(
                f"Cannot {operation} a draft {type(self).__name__}; submit it first"
            )
        return key

    def _require_draft(self, operation: str) -> None:
        if self.identity_key is not None:
            raise ControllerError(
                f"Cannot {operation} {type(self).__name__} '{self.identity_key}': "
                "it already exists on Reddit"
            )

    async def _in_worker(
        self,
        func: Callable[..., ResultT],
        *args: Any,
        **kwargs: Any,
    ) -> ResultT:
        """
        Run a synchronous operation on a worker thread.

        Errors surface on the awaited result; there is no cancellation
        and no ordering relative to other operations on this instance.
        """
        return await asyncio.to_thread(func, *args, **kwargs)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.IDENTITY_KEY}={self.identity_key!r}, "
            f"state={self.state.value})"
        )


def _check_identity(
    controller: Controller,
    incoming: ResourceIdentity,
    allow_unset: bool,
) -> None:
    expected = controller.identity_key
    actual = getattr(incoming, controller.IDENTITY_KEY)

    if expected is None:
        if allow_unset:
            return
        raise ControllerError(
            f"Cannot import into a draft {type(controller).__name__}; submit it first"
        )
    if actual != expected:
        logger.error(
            "identity_mismatch",
            controller=type(controller).__name__,
            expected=expected,
            actual=actual,
        )
        raise IdentityMismatchError(expected, actual)


def import_data(controller: ControllerT, data: Any) -> ControllerT:
    """
    Overwrite a controller's mutable fields with fresh server data, in place.

    Identity fields are never touched. The data must describe the
    same thing as the controller.

    Args:
        controller: Receiver, mutated in place
        data: Validated payload describing the same thing

    Returns:
        The same controller instance

    Raises:
        IdentityMismatchError: If `data` belongs to another thing
    """
    _check_identity(controller, controller._identity_from(data), allow_unset=False)

    fields = controller._fields_from(data)
    for name in controller.MUTABLE_FIELDS:
        setattr(controller, name, fields[name])
    controller._hydrated = True

    logger.debug(
        "controller_imported",
        controller=type(controller).__name__,
        identity=controller.identity_key,
        fields=len(controller.MUTABLE_FIELDS),
    )
    return controller


def hydrate(controller: ControllerT, data: Any) -> ControllerT:
    """
    Populate a controller from a full description of its thing, in place.

    Unlike import_data this sets every field and fills identity
    attributes that are still unknown (id, permalink, created).
    A draft controller accepts any identity; otherwise the identity
    key must match.

    Args:
        controller: Receiver, mutated in place
        data: Validated payload (listing or fetch result)

    Returns:
        The same controller instance

    Raises:
        IdentityMismatchError: If `data` belongs to another thing
    """
    incoming = controller._identity_from(data)
    _check_identity(controller, incoming, allow_unset=True)

    controller._identity = controller._identity.filled_from(incoming)
    for name, value in controller._fields_from(data).items():
        setattr(controller, name, value)
    controller._hydrated = True

    logger.debug(
        "controller_hydrated",
        controller=type(controller).__name__,
        identity=controller.identity_key,
    )
    return controller
