"""
Unit tests for the LinksAndComments endpoint model.

Each test checks the request sent to the transport and the
structure built from the response.
"""

from unittest.mock import MagicMock

import pytest

from conftest import comment_payload, info_response, post_payload, thing_result
from redditkit.api.endpoints.links_and_comments import (
    DOWNVOTE,
    NO_VOTE,
    UPVOTE,
    LinksAndComments,
)
from redditkit.models import Info, PostResultShortContainer, ThingResultContainer


class TestLinksAndComments:
    """Test suite for LinksAndComments."""

    def setup_method(self):
        self.transport = MagicMock()
        self.endpoint = LinksAndComments(self.transport)

    def last_request(self):
        return self.transport.request.call_args.kwargs

    def test_submit_self_post(self):
        self.transport.request.return_value = {
            "json": {
                "errors": [],
                "data": {
                    "url": "https://www.reddit.com/r/test/comments/abc123/hello/",
                    "drafts_count": 0,
                    "id": "abc123",
                    "name": "t3_abc123",
                },
            }
        }

        result = self.endpoint.submit(kind="self", sr="test", title="Hello", text="World")

        assert isinstance(result, PostResultShortContainer)
        assert result.data.name == "t3_abc123"
        assert result.data.id == "abc123"

        request = self.last_request()
        assert request["method"] == "POST"
        assert request["path"] == "api/submit"
        assert request["data"]["api_type"] == "json"
        assert request["data"]["kind"] == "self"
        assert request["data"]["sr"] == "test"
        assert request["data"]["text"] == "World"
        assert request["data"]["sendreplies"] == "true"
        assert "url" not in request["data"]
        assert "flair_id" not in request["data"]

    def test_submit_link_post(self):
        self.transport.request.return_value = {"json": {"errors": [], "data": {"name": "t3_x"}}}

        self.endpoint.submit(
            kind="link",
            sr="test",
            title="A link",
            url="https://example.com",
            nsfw=True,
            g_recaptcha_response="token",
        )

        data = self.last_request()["data"]
        assert data["url"] == "https://example.com"
        assert data["nsfw"] == "true"
        assert data["g-recaptcha-response"] == "token"
        assert "text" not in data

    def test_submit_error_envelope_is_parsed_not_raised(self):
        self.transport.request.return_value = {
            "json": {"errors": [["NO_TEXT", "we need something here", "title"]]}
        }

        result = self.endpoint.submit(kind="self", sr="test", title="")

        assert result.data is None
        assert result.json_data.errors == [["NO_TEXT", "we need something here", "title"]]

    def test_edit_user_text(self):
        self.transport.request.return_value = thing_result(
            "t3", post_payload(selftext="new body")
        )

        result = self.endpoint.edit_user_text("t3_abc123", "new body")

        assert isinstance(result, ThingResultContainer)
        assert result.first_thing_data()["selftext"] == "new body"

        request = self.last_request()
        assert request["path"] == "api/editusertext"
        assert request["data"]["thing_id"] == "t3_abc123"
        assert request["data"]["text"] == "new body"
        assert request["data"]["return_rtjson"] == "false"

    def test_comment(self):
        self.transport.request.return_value = thing_result("t1", comment_payload())

        result = self.endpoint.comment("t3_abc123", "Nice post")

        assert result.things[0].kind == "t1"
        request = self.last_request()
        assert request["path"] == "api/comment"
        assert request["data"]["thing_id"] == "t3_abc123"

    def test_comment_without_things(self):
        self.transport.request.return_value = {"json": {"errors": []}}

        result = self.endpoint.comment("t3_abc123", "Nice post")

        assert result.things == []
        assert result.first_thing_data() is None

    def test_info_by_fullnames(self):
        self.transport.request.return_value = info_response(
            ("t3", post_payload()),
            ("t1", comment_payload()),
        )

        info = self.endpoint.info(["t3_abc123", "t1_def456"])

        assert isinstance(info, Info)
        assert [post.name for post in info.posts] == ["t3_abc123"]
        assert [comment.name for comment in info.comments] == ["t1_def456"]

        request = self.last_request()
        assert request["method"] == "GET"
        assert request["path"] == "api/info"
        assert request["params"] == {"id": "t3_abc123,t1_def456"}

    def test_info_in_subreddit(self):
        self.transport.request.return_value = info_response()

        info = self.endpoint.info("t3_abc123", subreddit="test")

        assert info.posts == []
        request = self.last_request()
        assert request["path"] == "r/test/api/info"
        assert request["params"] == {"id": "t3_abc123"}

    def test_info_by_url(self):
        self.transport.request.return_value = info_response()

        self.endpoint.info(url="https://example.com")

        assert self.last_request()["params"] == {"url": "https://example.com"}

    @pytest.mark.parametrize("direction", [UPVOTE, NO_VOTE, DOWNVOTE])
    def test_vote(self, direction):
        self.transport.request.return_value = {}

        assert self.endpoint.vote("t3_abc123", direction) == {}
        assert self.last_request()["data"] == {"id": "t3_abc123", "dir": direction}

    def test_delete(self):
        self.transport.request.return_value = {}

        self.endpoint.delete("t1_def456")

        assert self.last_request()["path"] == "api/del"
        assert self.last_request()["data"] == {"id": "t1_def456"}

    def test_hide_many(self):
        self.transport.request.return_value = {}

        self.endpoint.hide(["t3_a", "t3_b"])

        assert self.last_request()["data"] == {"id": "t3_a,t3_b"}

    def test_save_without_category(self):
        self.transport.request.return_value = {}

        self.endpoint.save("t3_abc123")

        assert self.last_request()["data"] == {"id": "t3_abc123"}

    def test_save_with_category(self):
        self.transport.request.return_value = {}

        self.endpoint.save("t3_abc123", category="later")

        assert self.last_request()["data"] == {"id": "t3_abc123", "category": "later"}

    @pytest.mark.parametrize(
        "method_name, path",
        [
            ("unhide", "api/unhide"),
            ("unsave", "api/unsave"),
            ("lock", "api/lock"),
            ("unlock", "api/unlock"),
            ("mark_nsfw", "api/marknsfw"),
            ("unmark_nsfw", "api/unmarknsfw"),
            ("spoiler", "api/spoiler"),
            ("unspoiler", "api/unspoiler"),
        ],
    )
    def test_flag_endpoints(self, method_name, path):
        self.transport.request.return_value = {}

        getattr(self.endpoint, method_name)("t3_abc123")

        request = self.last_request()
        assert request["method"] == "POST"
        assert request["path"] == path
        assert request["data"] == {"id": "t3_abc123"}
