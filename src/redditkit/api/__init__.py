"""
Reddit API integration layer on top of praw's authenticated transport.

This package provides:
- Dispatch: credentials, transport, and endpoint models
- Endpoint models (LinksAndComments, Modmail)
- Custom exception hierarchy for error handling
- validate(): the application-error chokepoint

Example:
    >>> from redditkit.api import Dispatch, validate
    >>> dispatch = Dispatch.from_env()
    >>> page = validate(dispatch.modmail.get_conversations(state="new"))
"""

from redditkit.api.client import Dispatch, get_dispatch, reset_dispatch
from redditkit.api.endpoints import (
    CONVERSATION_SORTS,
    CONVERSATION_STATES,
    UNSTABLE_ENDPOINTS,
    LinksAndComments,
    Modmail,
)
from redditkit.api.exceptions import (
    ApplicationError,
    AuthenticationError,
    ControllerError,
    ErrorItem,
    IdentityMismatchError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    RedditAPIError,
    ResponseParseError,
    RetrievalError,
    ServerError,
    TransportError,
)
from redditkit.api.validation import find_errors, has_error_envelope, validate

__all__ = [
    # Dispatch
    "Dispatch",
    "get_dispatch",
    "reset_dispatch",
    # Endpoint models
    "CONVERSATION_SORTS",
    "CONVERSATION_STATES",
    "UNSTABLE_ENDPOINTS",
    "LinksAndComments",
    "Modmail",
    # Exceptions
    "ApplicationError",
    "AuthenticationError",
    "ControllerError",
    "ErrorItem",
    "IdentityMismatchError",
    "NotFoundError",
    "PermissionError",
    "RateLimitError",
    "RedditAPIError",
    "ResponseParseError",
    "RetrievalError",
    "ServerError",
    "TransportError",
    # Validation
    "find_errors",
    "has_error_envelope",
    "validate",
]
