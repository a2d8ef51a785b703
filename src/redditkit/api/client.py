"""
Dispatch: the shared capability bundle for authenticated API access.

A Dispatch owns one authenticated praw transport and exposes one
endpoint model per resource family on top of it. Controllers keep
a reference to a Dispatch so that every call they make reuses the
same authenticated connection.
"""

import threading
from typing import Optional

import praw
from praw.exceptions import PRAWException
from prawcore.exceptions import (
    InvalidToken,
    OAuthException,
    RequestException,
    ResponseException,
)

from redditkit.api.endpoints.links_and_comments import LinksAndComments
from redditkit.api.endpoints.modmail import Modmail
from redditkit.api.exceptions import (
    AuthenticationError,
    RedditAPIError,
    ServerError,
    TransportError,
)
from redditkit.config import RedditSettings
from redditkit.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


class Dispatch:
    """
    Authenticated transport plus one endpoint model per resource family.

    Construction fails fast: missing credentials raise
    AuthenticationError immediately, and unless
    `validate_credentials=False` one identity call is made so that a
    bad refresh token fails here rather than on first use.

    Dispatch performs no business logic and may be shared by any
    number of controllers and threads; thread safety of the
    connection pool is praw's responsibility.

    Attributes:
        links_and_comments: Endpoint model for posts and comments
        modmail: Endpoint model for new modmail

    Example:
        >>> dispatch = Dispatch(RedditSettings(app_id="abc", refresh_token="xyz"))
        >>> info = dispatch.links_and_comments.info(["t3_abc123"])
    """

    def __init__(
        self,
        settings: RedditSettings,
        validate_credentials: bool = True,
    ) -> None:
        """
        Initialize Dispatch.

        Args:
            settings: Credentials and transport options
            validate_credentials: Make one identity call to check the token

        Raises:
            AuthenticationError: If credentials are missing or rejected
            ServerError: If Reddit answers the identity call with a 5xx
            TransportError: If Reddit cannot be reached
        """
        if not settings.app_id:
            logger.error("missing_credential", credential="REDDIT_CLIENT_ID")
            raise AuthenticationError("REDDIT_CLIENT_ID is required")

        if not settings.refresh_token:
            logger.error("missing_credential", credential="REDDIT_REFRESH_TOKEN")
            raise AuthenticationError("REDDIT_REFRESH_TOKEN is required")

        self._settings = settings

        logger.info(
            "initializing_dispatch",
            user_agent=settings.user_agent,
            app_id=f"{settings.app_id[:8]}...",
            installed_app=settings.client_secret is None,
        )

        try:
            self._transport = praw.Reddit(
                client_id=settings.app_id,
                client_secret=settings.client_secret,
                refresh_token=settings.refresh_token,
                user_agent=settings.user_agent,
                timeout=settings.timeout,
            )
        except PRAWException as e:
            logger.error("transport_init_failed", error=str(e))
            raise AuthenticationError(f"Invalid Reddit credentials: {e}") from e

        if validate_credentials:
            self._validate_credentials()

        self._links_and_comments = LinksAndComments(self._transport)
        self._modmail = Modmail(self._transport)

        logger.info("dispatch_initialized", validated=validate_credentials)

    @classmethod
    def from_env(cls, validate_credentials: bool = True) -> "Dispatch":
        """
        Build a Dispatch from REDDIT_* environment variables.

        Also configures structlog at the level named by LOG_LEVEL.

        Returns:
            Dispatch configured from the environment
        """
        settings = RedditSettings.from_env()
        setup_logging(settings.log_level)
        return cls(settings, validate_credentials=validate_credentials)

    def _validate_credentials(self) -> None:
        """
        Check the refresh token by fetching the authenticated identity.

        Raises:
            AuthenticationError: If the token is rejected
            ServerError: If Reddit API returns server error
            TransportError: If the request cannot be made
        """
        try:
            self._transport.user.me()
            logger.debug("credential_validation_successful")

        except (InvalidToken, OAuthException) as e:
            logger.error("credential_validation_failed", error=str(e))
            raise AuthenticationError("Invalid Reddit OAuth token") from e

        except ResponseException as e:
            status_code = e.response.status_code
            if status_code >= 500:
                raise ServerError(
                    "Reddit API unavailable during validation",
                    status_code=status_code,
                ) from e
            raise AuthenticationError(f"Authentication failed: {status_code}") from e

        except RequestException as e:
            logger.error("credential_validation_unreachable", error=str(e))
            raise TransportError("Failed to connect to Reddit API") from e

        except PRAWException as e:
            raise RedditAPIError(f"Credential validation failed: {e}") from e

    @property
    def settings(self) -> RedditSettings:
        return self._settings

    @property
    def transport(self) -> praw.Reddit:
        """The shared authenticated praw.Reddit instance."""
        return self._transport

    @property
    def links_and_comments(self) -> LinksAndComments:
        return self._links_and_comments

    @property
    def modmail(self) -> Modmail:
        return self._modmail


_dispatch: Optional[Dispatch] = None
_dispatch_lock = threading.Lock()


def get_dispatch() -> Dispatch:
    """
    Return the process-wide Dispatch, building it from the environment once.

    Example:
        >>> from redditkit import get_dispatch, Post
        >>> post = Post.stub(get_dispatch(), "t3_abc123").about()
    """
    global _dispatch

    with _dispatch_lock:
        if _dispatch is None:
            _dispatch = Dispatch.from_env()
        return _dispatch


def reset_dispatch() -> None:
    """
    Drop the process-wide Dispatch.

    The next get_dispatch() call re-reads the environment. Useful for
    credential rotation and tests.
    """
    global _dispatch

    logger.info("resetting_dispatch")
    with _dispatch_lock:
        _dispatch = None
