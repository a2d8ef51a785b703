"""
Unit tests for the Comment controller.
"""

import pytest

from conftest import comment_payload, info_response, json_errors, post_payload, thing_result
from redditkit.api.exceptions import (
    ControllerError,
    IdentityMismatchError,
    PermissionError,
    RetrievalError,
)
from redditkit.controllers import Comment, ControllerState
from redditkit.models import CommentData


class TestCommentConstruction:
    """Test drafts, stubs and listings."""

    def test_draft(self, dispatch):
        comment = Comment.draft(dispatch, "t3_abc123", "Nice post")

        assert comment.state is ControllerState.DRAFT
        assert comment.parent_fullname == "t3_abc123"
        assert comment.body == "Nice post"

    def test_stub(self, dispatch):
        comment = Comment.stub(dispatch, "t1_def456", subreddit="test")

        assert comment.state is ControllerState.STUB
        assert comment.subreddit == "test"

    def test_listing_round_trip(self, dispatch):
        listing = comment_payload(depth=3, edited=1700000600.0, likes=None)

        extracted = Comment.from_listing(dispatch, listing).to_listing()
        original = CommentData.model_validate(listing)

        for name in CommentData.model_fields:
            assert getattr(extracted, name) == getattr(original, name), name


class TestCommentOperations:
    """Test comment operations against a mocked transport."""

    def test_submit(self, dispatch, transport):
        transport.request.return_value = thing_result("t1", comment_payload("t1_new1"))
        draft = Comment.draft(dispatch, "t3_abc123", "Nice post")

        comment = draft.submit()

        assert comment is not draft
        assert comment.fullname == "t1_new1"
        assert comment.author == "someuser"
        assert comment.state is ControllerState.HYDRATED
        assert draft.fullname is None

        request = transport.request.call_args.kwargs
        assert request["path"] == "api/comment"
        assert request["data"]["thing_id"] == "t3_abc123"
        assert request["data"]["text"] == "Nice post"

    def test_submit_without_parent(self, dispatch, transport):
        comment = Comment(dispatch, body="orphan")

        with pytest.raises(ControllerError):
            comment.submit()

        transport.request.assert_not_called()

    def test_submit_locked_thread(self, dispatch, transport):
        transport.request.return_value = json_errors(["THREAD_LOCKED", "comments are locked", "parent"])

        with pytest.raises(PermissionError):
            Comment.draft(dispatch, "t3_abc123", "Nice post").submit()

    def test_submit_returns_nothing(self, dispatch, transport):
        transport.request.return_value = {"json": {"errors": [], "data": {"things": []}}}

        with pytest.raises(RetrievalError):
            Comment.draft(dispatch, "t3_abc123", "Nice post").submit()

    def test_edit(self, dispatch, transport):
        transport.request.return_value = thing_result("t1", comment_payload(body="fixed typo"))
        comment = Comment.from_listing(dispatch, comment_payload())

        result = comment.edit("fixed typo")

        assert result is comment
        assert comment.body == "fixed typo"

    def test_edit_rejects_other_thing(self, dispatch, transport):
        transport.request.return_value = thing_result("t1", comment_payload("t1_other"))
        comment = Comment.stub(dispatch, "t1_def456")

        with pytest.raises(IdentityMismatchError):
            comment.edit("fixed typo")

    def test_about(self, dispatch, transport):
        transport.request.return_value = info_response(("t1", comment_payload(score=7)))
        comment = Comment.stub(dispatch, "t1_def456")

        comment.about()

        assert comment.score == 7
        assert comment.link_fullname == "t3_abc123"
        assert transport.request.call_args.kwargs["params"] == {"id": "t1_def456"}

    def test_about_ignores_posts(self, dispatch, transport):
        transport.request.return_value = info_response(("t3", post_payload()))

        with pytest.raises(RetrievalError):
            Comment.stub(dispatch, "t1_def456").about()

    @pytest.mark.parametrize(
        "method_name, path",
        [
            ("upvote", "api/vote"),
            ("downvote", "api/vote"),
            ("unvote", "api/vote"),
            ("save", "api/save"),
            ("unsave", "api/unsave"),
            ("lock", "api/lock"),
            ("unlock", "api/unlock"),
        ],
    )
    def test_action_then_refresh(self, dispatch, transport, method_name, path):
        transport.request.side_effect = [{}, info_response(("t1", comment_payload(saved=True)))]
        comment = Comment.stub(dispatch, "t1_def456")

        getattr(comment, method_name)()

        assert comment.saved is True
        assert transport.request.call_args_list[0].kwargs["path"] == path

    def test_delete(self, dispatch, transport):
        transport.request.return_value = {}
        comment = Comment.stub(dispatch, "t1_def456")

        comment.delete()

        assert transport.request.call_args.kwargs["data"] == {"id": "t1_def456"}

    def test_reply(self, dispatch, transport):
        transport.request.return_value = thing_result(
            "t1", comment_payload("t1_child", parent_id="t1_def456", depth=1)
        )
        comment = Comment.from_listing(dispatch, comment_payload())

        child = comment.reply("Agreed")

        assert child.fullname == "t1_child"
        assert child.parent_fullname == "t1_def456"
        assert child.depth == 1
        assert child.subreddit == "test"


class TestCommentAsync:
    """Test async counterparts."""

    @pytest.mark.asyncio
    async def test_submit_async(self, dispatch, transport):
        transport.request.return_value = thing_result("t1", comment_payload("t1_new1"))

        comment = await Comment.draft(dispatch, "t3_abc123", "Nice post").submit_async()

        assert comment.fullname == "t1_new1"

    @pytest.mark.asyncio
    async def test_upvote_async(self, dispatch, transport):
        transport.request.side_effect = [{}, info_response(("t1", comment_payload(likes=True)))]
        comment = Comment.stub(dispatch, "t1_def456")

        await comment.upvote_async()

        assert comment.likes is True
