"""
Custom exceptions for Reddit API integration.

Three kinds of failure reach callers:

- Transport failures (network, timeout, non-2xx without an API
  error body). Raised by prawcore and propagated unmodified by the
  endpoint models; wrapped as TransportError only while a Dispatch
  is being constructed.
- Application errors. The HTTP call succeeded but the body carries
  an error envelope. Raised as ApplicationError or a subclass.
- Consistency errors. The call succeeded but produced data a
  controller cannot trust. Raised as ControllerError or a subclass.
"""

from dataclasses import dataclass
from typing import Iterable, Optional


class RedditAPIError(Exception):
    """
    Base exception for all Reddit API related errors.

    This is the parent class for all redditkit exceptions.
    Use this for catching any Reddit-related error.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Initialize RedditAPIError.

        Args:
            message: Error description
            status_code: Optional HTTP status code from Reddit API
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(RedditAPIError):
    """
    Raised when Reddit API authentication fails.

    This occurs when:
    - The app id or refresh token is missing
    - The refresh token is invalid, revoked or expired
    - The identity check made by Dispatch is rejected

    Example:
        >>> raise AuthenticationError("REDDIT_REFRESH_TOKEN is required")
    """

    def __init__(self, message: str = "Reddit authentication failed") -> None:
        super().__init__(message, status_code=401)


class ServerError(RedditAPIError):
    """
    Raised when Reddit API returns a server error during Dispatch setup.

    Example:
        >>> raise ServerError("Reddit API returned 503", status_code=503)
    """

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message, status_code=status_code)


class TransportError(RedditAPIError):
    """
    Raised when Reddit cannot be reached while constructing a Dispatch.

    Endpoint calls let the underlying prawcore exception through
    instead; this class only exists so that construction failures
    share the RedditAPIError base.
    """

    def __init__(self, message: str = "Failed to connect to Reddit API") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ErrorItem:
    """
    One application error reported by Reddit.

    Attributes:
        code: Machine-readable error code (e.g. "RATELIMIT", "NO_TEXT")
        message: Human-readable explanation
        field: Request field the error refers to, if any
    """

    code: str
    message: str = ""
    field: Optional[str] = None

    def __str__(self) -> str:
        text = f"{self.code}: {self.message}" if self.message else self.code
        if self.field:
            text = f"{text} on field '{self.field}'"
        return text


class ApplicationError(RedditAPIError):
    """
    Raised when a response body encodes a server-side rejection.

    The HTTP exchange itself succeeded. Every error item Reddit
    reported is kept on the exception.

    Attributes:
        errors: Reported error items, in server order

    Example:
        >>> raise ApplicationError([ErrorItem("NO_TEXT", "we need something here", "title")])
    """

    default_status_code: Optional[int] = None

    def __init__(
        self,
        errors: Iterable[ErrorItem],
        status_code: Optional[int] = None,
    ) -> None:
        self.errors = list(errors)
        if status_code is None:
            status_code = self.default_status_code

        if self.errors:
            message = "; ".join(str(error) for error in self.errors)
        else:
            message = "Reddit API rejected the request"

        super().__init__(message, status_code=status_code)

    @property
    def codes(self) -> list[str]:
        """Error codes in server order."""
        return [error.code for error in self.errors]


class RateLimitError(ApplicationError):
    """
    Raised when Reddit reports that the caller is rate limited.

    redditkit does not wait or retry; the caller decides.
    """

    default_status_code = 429


class NotFoundError(ApplicationError):
    """Raised when Reddit reports that the requested resource does not exist."""

    default_status_code = 404


class PermissionError(ApplicationError):
    """
    Raised when Reddit refuses the request for the authenticated user.

    This occurs when:
    - The token lacks the required OAuth scope
    - The user is not a moderator of the target subreddit
    - The user is banned or the thing is locked/archived
    """

    default_status_code = 403


class ResponseParseError(RedditAPIError):
    """
    Raised when a response body cannot be mapped to its declared structure.

    Attributes:
        response_type: Name of the structure the body was parsed into
    """

    def __init__(self, response_type: str, detail: str) -> None:
        self.response_type = response_type
        super().__init__(f"Could not parse {response_type}: {detail}")


class ControllerError(RedditAPIError):
    """
    Raised when a controller detects a locally inconsistent state.

    Covers lifecycle misuse (editing a draft, submitting an already
    submitted thing) as well as the retrieval and identity failures
    below.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class RetrievalError(ControllerError):
    """
    Raised when a fetch succeeds but does not return the requested thing.

    Example:
        >>> raise RetrievalError("t3_abc123", "no matching thing returned")
    """

    def __init__(self, identity: Optional[str], reason: str) -> None:
        self.identity = identity
        super().__init__(f"Unable to retrieve '{identity}': {reason}")


class IdentityMismatchError(ControllerError):
    """
    Raised when data for one thing is imported into a controller of another.

    Attributes:
        expected: Identity of the receiving controller
        actual: Identity carried by the imported data
    """

    def __init__(self, expected: Optional[str], actual: Optional[str]) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Cannot import data for '{actual}' into controller for '{expected}'"
        )
