"""
Shared fixtures for redditkit tests.

The praw transport is always a MagicMock; no test touches the network.
Payload builders return raw JSON the way Reddit sends it so that the
real endpoint models and structures do the parsing.
"""

from unittest.mock import MagicMock, patch

import pytest

from redditkit.api.client import Dispatch, reset_dispatch
from redditkit.config import RedditSettings

CREATED_UTC = 1700000000.0


@pytest.fixture
def settings():
    return RedditSettings(
        app_id="test_app_id",
        client_secret="test_secret",
        refresh_token="test_refresh_token",
        user_agent="redditkit-tests/0.1",
    )


@pytest.fixture
def transport():
    """Mock praw.Reddit; tests program `transport.request`."""
    return MagicMock()


@pytest.fixture
def dispatch(settings, transport):
    with patch("praw.Reddit", return_value=transport):
        yield Dispatch(settings, validate_credentials=False)


@pytest.fixture(autouse=True)
def _clear_dispatch_singleton():
    reset_dispatch()
    yield
    reset_dispatch()


def post_payload(fullname="t3_abc123", **overrides):
    """Data of a `t3` thing as found in listings."""
    post_id = fullname.split("_", 1)[1]
    data = {
        "id": post_id,
        "name": fullname,
        "subreddit": "test",
        "title": "Hello",
        "author": "someuser",
        "selftext": "World",
        "selftext_html": "<p>World</p>",
        "url": f"https://www.reddit.com/r/test/comments/{post_id}/hello/",
        "permalink": f"/r/test/comments/{post_id}/hello/",
        "created_utc": CREATED_UTC,
        "edited": False,
        "is_self": True,
        "score": 1,
        "ups": 1,
        "downs": 0,
        "likes": True,
        "num_comments": 0,
        "removed": False,
        "spam": False,
        "over_18": False,
        "spoiler": False,
        "locked": False,
        "stickied": False,
        "hidden": False,
        "saved": False,
        "link_flair_text": None,
        "gilded": 0,
    }
    data.update(overrides)
    return data


def comment_payload(fullname="t1_def456", **overrides):
    """Data of a `t1` thing as found in listings."""
    comment_id = fullname.split("_", 1)[1]
    data = {
        "id": comment_id,
        "name": fullname,
        "subreddit": "test",
        "author": "someuser",
        "body": "Nice post",
        "body_html": "<p>Nice post</p>",
        "parent_id": "t3_abc123",
        "link_id": "t3_abc123",
        "permalink": f"/r/test/comments/abc123/hello/{comment_id}/",
        "created_utc": CREATED_UTC,
        "edited": False,
        "score": 1,
        "ups": 1,
        "downs": 0,
        "likes": True,
        "removed": False,
        "spam": False,
        "locked": False,
        "stickied": False,
        "saved": False,
        "depth": 0,
    }
    data.update(overrides)
    return data


def info_response(*things):
    """`/api/info` listing; each thing is a (kind, data) pair."""
    return {
        "kind": "Listing",
        "data": {
            "after": None,
            "before": None,
            "dist": len(things),
            "children": [{"kind": kind, "data": data} for kind, data in things],
        },
    }


def thing_result(kind, data):
    """Response of `/api/editusertext` and `/api/comment`."""
    return {"json": {"errors": [], "data": {"things": [{"kind": kind, "data": data}]}}}


def json_errors(*triples):
    return {"json": {"errors": [list(triple) for triple in triples]}}


def conversation_container(conversation_id="2f4k1", **overrides):
    """Single-conversation container of the modmail API."""
    conversation = {
        "id": conversation_id,
        "subject": "Welcome",
        "state": 0,
        "isHighlighted": False,
        "isInternal": False,
        "isAuto": False,
        "lastUpdated": "2024-05-01T12:00:00.000000+00:00",
        "lastUserUpdate": None,
        "lastModUpdate": "2024-05-01T12:00:00.000000+00:00",
        "lastUnread": None,
        "numMessages": 1,
        "owner": {"displayName": "test", "type": "subreddit", "id": "t5_2qh1i"},
        "participant": {"id": 42, "name": "someuser", "isMod": False},
        "authors": [{"id": 7, "name": "moduser", "isMod": True}],
        "objIds": [{"id": "m1", "key": "messages"}],
    }
    conversation.update(overrides)
    return {
        "conversation": conversation,
        "messages": {
            "m1": {
                "id": "m1",
                "body": "<p>Hi!</p>",
                "bodyMarkdown": "Hi!",
                "author": {"id": 7, "name": "moduser", "isMod": True},
                "isInternal": False,
                "date": "2024-05-01T12:00:00.000000+00:00",
            },
        },
        "modActions": {},
    }
