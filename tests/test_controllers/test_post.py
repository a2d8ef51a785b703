"""
Unit tests for the Post controller.

Requests go through the real endpoint models; only the praw
transport is mocked.
"""

from unittest.mock import MagicMock

import pytest
from prawcore.exceptions import Forbidden

from conftest import comment_payload, info_response, json_errors, post_payload, thing_result
from redditkit.api.exceptions import (
    ApplicationError,
    ControllerError,
    PermissionError,
    RateLimitError,
    RetrievalError,
)
from redditkit.controllers import (
    Comment,
    ControllerState,
    LinkTarget,
    Post,
    SelfText,
)
from redditkit.models import PostData


def submit_response(fullname="t3_abc123"):
    post_id = fullname.split("_", 1)[1]
    return {
        "json": {
            "errors": [],
            "data": {
                "url": f"https://www.reddit.com/r/test/comments/{post_id}/hello/",
                "drafts_count": 0,
                "id": post_id,
                "name": fullname,
            },
        }
    }


class TestPostConstruction:
    """Test drafts, stubs and listings."""

    def test_new_self_post(self, dispatch):
        post = Post.new_self_post(dispatch, "test", "Hello", "World")

        assert post.is_self
        assert post.self_text == "World"
        assert post.link_url is None
        assert post.state is ControllerState.DRAFT

    def test_new_link_post(self, dispatch):
        post = Post.new_link_post(dispatch, "test", "A link", "https://example.com", nsfw=True)

        assert not post.is_self
        assert post.content == LinkTarget("https://example.com")
        assert post.self_text is None
        assert post.nsfw is True

    def test_from_listing_self(self, dispatch):
        post = Post.from_listing(dispatch, post_payload())

        assert post.fullname == "t3_abc123"
        assert post.content == SelfText("World", "<p>World</p>")
        assert post.up_votes == 1
        assert post.likes is True

    def test_from_listing_link(self, dispatch):
        post = Post.from_listing(
            dispatch,
            post_payload(is_self=False, selftext="", selftext_html=None, url="https://example.com"),
        )

        assert post.link_url == "https://example.com"

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"is_self": False, "selftext": "", "selftext_html": None, "url": "https://example.com"},
            {"edited": 1700000600.0, "over_18": True, "link_flair_text": "Meta", "likes": None},
        ],
    )
    def test_listing_round_trip(self, dispatch, overrides):
        listing = post_payload(**overrides)

        extracted = Post.from_listing(dispatch, listing).to_listing()
        original = PostData.model_validate(listing)

        for name in PostData.model_fields:
            assert getattr(extracted, name) == getattr(original, name), name


class TestPostSubmit:
    """Test submit()."""

    def test_submit_self_post(self, dispatch, transport):
        transport.request.return_value = submit_response("t3_abc123")
        draft = Post.new_self_post(dispatch, "test", "Hello", "World")

        post = draft.submit()

        assert post is not draft
        assert post.fullname.startswith("t3_")
        assert post.id == "abc123"
        assert post.self_text == "World"
        assert post.title == "Hello"
        assert post.permalink == "/r/test/comments/abc123/hello/"
        assert post.state is ControllerState.HYDRATED

        assert draft.fullname is None
        assert draft.state is ControllerState.DRAFT

        data = transport.request.call_args.kwargs["data"]
        assert data["kind"] == "self"
        assert data["text"] == "World"
        assert data["sr"] == "test"

    def test_submit_link_post(self, dispatch, transport):
        transport.request.return_value = submit_response("t3_lnk1")
        draft = Post.new_link_post(dispatch, "test", "A link", "https://example.com")

        post = draft.submit(resubmit=True)

        assert post.link_url == "https://example.com"
        data = transport.request.call_args.kwargs["data"]
        assert data["kind"] == "link"
        assert data["url"] == "https://example.com"
        assert data["resubmit"] == "true"
        assert "text" not in data

    def test_submit_twice_rejected(self, dispatch, transport):
        transport.request.return_value = submit_response()
        post = Post.new_self_post(dispatch, "test", "Hello", "World").submit()

        with pytest.raises(ControllerError):
            post.submit()

        assert transport.request.call_count == 1

    def test_draft_is_reusable_template(self, dispatch, transport):
        transport.request.side_effect = [submit_response("t3_one"), submit_response("t3_two")]
        draft = Post.new_self_post(dispatch, "test", "Hello", "World")

        first = draft.submit()
        second = draft.submit()

        assert first.fullname == "t3_one"
        assert second.fullname == "t3_two"

    def test_submit_application_error(self, dispatch, transport):
        transport.request.return_value = json_errors(["NO_TEXT", "we need something here", "title"])

        with pytest.raises(ApplicationError) as exc_info:
            Post.new_self_post(dispatch, "test", "", "World").submit()

        assert exc_info.value.codes == ["NO_TEXT"]

    def test_submit_rate_limited(self, dispatch, transport):
        transport.request.return_value = json_errors(["RATELIMIT", "you are doing that too much", "ratelimit"])

        with pytest.raises(RateLimitError):
            Post.new_self_post(dispatch, "test", "Hello", "World").submit()

    def test_submit_without_fullname(self, dispatch, transport):
        transport.request.return_value = {"json": {"errors": [], "data": {}}}

        with pytest.raises(RetrievalError):
            Post.new_self_post(dispatch, "test", "Hello", "World").submit()


class TestPostEdit:
    """Test edit()."""

    def test_edit_updates_in_place(self, dispatch, transport):
        transport.request.return_value = thing_result(
            "t3", post_payload(selftext="new body", selftext_html="<p>new body</p>", edited=1700000600.0)
        )
        post = Post.stub(dispatch, "t3_abc123")

        result = post.edit("new body")

        assert result is post
        assert post.self_text == "new body"
        assert post.edited is not None
        assert post.fullname == "t3_abc123"

        data = transport.request.call_args.kwargs["data"]
        assert data["thing_id"] == "t3_abc123"
        assert data["text"] == "new body"

    def test_edit_link_post_rejected(self, dispatch, transport):
        post = Post.from_listing(
            dispatch,
            post_payload(is_self=False, selftext="", url="https://example.com"),
        )

        with pytest.raises(ControllerError):
            post.edit("text")

        transport.request.assert_not_called()

    def test_edit_returns_other_thing(self, dispatch, transport):
        transport.request.return_value = thing_result("t3", post_payload("t3_zzz999"))
        post = Post.stub(dispatch, "t3_abc123")

        with pytest.raises(ControllerError):
            post.edit("new body")

        assert post.fullname == "t3_abc123"


class TestPostAbout:
    """Test about()."""

    def test_about_hydrates(self, dispatch, transport):
        transport.request.return_value = info_response(("t3", post_payload(score=12)))
        post = Post.stub(dispatch, "t3_abc123", subreddit="test")

        result = post.about()

        assert result is post
        assert post.score == 12
        assert post.title == "Hello"
        assert post.state is ControllerState.HYDRATED
        assert transport.request.call_args.kwargs["path"] == "r/test/api/info"

    def test_about_no_results(self, dispatch, transport):
        transport.request.return_value = info_response()

        with pytest.raises(RetrievalError) as exc_info:
            Post.stub(dispatch, "t3_abc123").about()

        assert exc_info.value.identity == "t3_abc123"

    def test_about_other_thing(self, dispatch, transport):
        transport.request.return_value = info_response(("t3", post_payload("t3_zzz999")))

        with pytest.raises(RetrievalError):
            Post.stub(dispatch, "t3_abc123").about()

    def test_about_ignores_comments(self, dispatch, transport):
        transport.request.return_value = info_response(("t1", comment_payload()))

        with pytest.raises(RetrievalError):
            Post.stub(dispatch, "t3_abc123").about()


class TestPostActions:
    """Test actions that re-fetch after the call."""

    @pytest.mark.parametrize(
        "method_name, path, extra",
        [
            ("upvote", "api/vote", {"dir": 1}),
            ("downvote", "api/vote", {"dir": -1}),
            ("unvote", "api/vote", {"dir": 0}),
            ("lock", "api/lock", {}),
            ("unlock", "api/unlock", {}),
            ("mark_nsfw", "api/marknsfw", {}),
            ("unmark_nsfw", "api/unmarknsfw", {}),
            ("mark_spoiler", "api/spoiler", {}),
            ("unmark_spoiler", "api/unspoiler", {}),
            ("hide", "api/hide", {}),
            ("unhide", "api/unhide", {}),
            ("save", "api/save", {}),
            ("unsave", "api/unsave", {}),
        ],
    )
    def test_action_then_refresh(self, dispatch, transport, method_name, path, extra):
        transport.request.side_effect = [{}, info_response(("t3", post_payload(score=5)))]
        post = Post.stub(dispatch, "t3_abc123")

        result = getattr(post, method_name)()

        assert result is post
        assert post.score == 5
        action_call, refresh_call = transport.request.call_args_list
        assert action_call.kwargs["path"] == path
        assert action_call.kwargs["data"] == {"id": "t3_abc123", **extra}
        assert refresh_call.kwargs["path"] == "api/info"

    def test_action_error_skips_refresh(self, dispatch, transport):
        transport.request.return_value = json_errors(["USER_REQUIRED", "please login", None])
        post = Post.stub(dispatch, "t3_abc123")

        with pytest.raises(ApplicationError):
            post.upvote()

        assert transport.request.call_count == 1

    def test_action_forbidden_status(self, dispatch, transport):
        response = MagicMock(status_code=403, headers={}, text="")
        response.json.return_value = {"message": "Forbidden", "error": 403}
        transport.request.side_effect = Forbidden(response)
        post = Post.stub(dispatch, "t3_abc123")

        with pytest.raises(PermissionError) as exc_info:
            post.lock()

        assert exc_info.value.status_code == 403
        assert transport.request.call_count == 1

    def test_delete(self, dispatch, transport):
        transport.request.return_value = {}
        post = Post.from_listing(dispatch, post_payload())

        assert post.delete() is None

        assert transport.request.call_count == 1
        assert transport.request.call_args.kwargs["path"] == "api/del"
        assert post.fullname == "t3_abc123"

    def test_reply(self, dispatch, transport):
        transport.request.return_value = thing_result(
            "t1", comment_payload("t1_new1", body="First!")
        )
        post = Post.from_listing(dispatch, post_payload())

        comment = post.reply("First!")

        assert isinstance(comment, Comment)
        assert comment.fullname == "t1_new1"
        assert comment.parent_fullname == "t3_abc123"
        assert comment.state is ControllerState.HYDRATED
        assert transport.request.call_args.kwargs["data"]["thing_id"] == "t3_abc123"


class TestPostAsync:
    """Test async counterparts."""

    @pytest.mark.asyncio
    async def test_submit_async(self, dispatch, transport):
        transport.request.return_value = submit_response("t3_abc123")
        draft = Post.new_self_post(dispatch, "test", "Hello", "World")

        post = await draft.submit_async()

        assert post.fullname == "t3_abc123"
        assert draft.fullname is None

    @pytest.mark.asyncio
    async def test_about_async_error_surfaces(self, dispatch, transport):
        transport.request.return_value = info_response()

        with pytest.raises(RetrievalError):
            await Post.stub(dispatch, "t3_abc123").about_async()

    @pytest.mark.asyncio
    async def test_edit_async(self, dispatch, transport):
        transport.request.return_value = thing_result("t3", post_payload(selftext="async body"))
        post = Post.stub(dispatch, "t3_abc123")

        result = await post.edit_async("async body")

        assert result is post
        assert post.self_text == "async body"
