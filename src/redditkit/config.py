"""
Runtime settings for the Reddit client.

Credentials and transport options are read from environment
variables, the same ones praw's own tooling documents:
REDDIT_CLIENT_ID, REDDIT_CLIENT_SECRET, REDDIT_REFRESH_TOKEN,
REDDIT_USER_AGENT, REDDIT_TIMEOUT and LOG_LEVEL.
"""
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from redditkit import __version__

DEFAULT_USER_AGENT = f"redditkit/{__version__} (by /u/redditkit)"


class RedditSettings(BaseModel):
    """
    Credentials and transport options for a Dispatch.

    Empty credentials are accepted here. Dispatch rejects them at
    construction time with AuthenticationError.

    Example:
        >>> settings = RedditSettings(app_id="abc", refresh_token="xyz")
        >>> settings.timeout
        30
    """

    app_id: str = Field(
        "",
        description="OAuth application (client) id",
    )
    client_secret: Optional[str] = Field(
        None,
        description="OAuth client secret; None for installed apps",
    )
    refresh_token: str = Field(
        "",
        description="OAuth refresh token used to mint access tokens",
    )
    user_agent: str = Field(
        DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent header sent with every request",
    )
    timeout: int = Field(
        30,
        gt=0,
        description="Transport timeout in seconds",
    )
    log_level: str = Field(
        "INFO",
        description="structlog filtering level",
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RedditSettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            RedditSettings populated from the environment
        """
        env = os.environ if environ is None else environ

        values = {
            "app_id": env.get("REDDIT_CLIENT_ID", ""),
            "client_secret": env.get("REDDIT_CLIENT_SECRET") or None,
            "refresh_token": env.get("REDDIT_REFRESH_TOKEN", ""),
            "log_level": env.get("LOG_LEVEL", "INFO"),
        }
        if env.get("REDDIT_USER_AGENT"):
            values["user_agent"] = env["REDDIT_USER_AGENT"]
        if env.get("REDDIT_TIMEOUT"):
            values["timeout"] = env["REDDIT_TIMEOUT"]

        return cls(**values)
