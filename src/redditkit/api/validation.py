"""
Detection of application-level errors in Reddit responses.

`validate` is the single chokepoint every controller passes a
response through before acting on it. It recognises the error
envelopes Reddit uses:

- `{"json": {"errors": [[code, message, field], ...]}}` from
  `api_type=json` write endpoints
- `{"error": 403, "message": "Forbidden"}` style bodies
- `{"reason": ..., "explanation": ..., "fields": [...]}` from modmail
- a bare non-empty `{"errors": [...]}` list
"""

from typing import Any, Iterable, Mapping, Optional, TypeVar

from pydantic import BaseModel

from redditkit.api.exceptions import (
    ApplicationError,
    ErrorItem,
    NotFoundError,
    PermissionError,
    RateLimitError,
)
from redditkit.utils.logger import get_logger

logger = get_logger(__name__)

ResponseT = TypeVar("ResponseT")

RATE_LIMIT_CODES = frozenset({"RATELIMIT"})

PERMISSION_CODES = frozenset({
    "USER_REQUIRED",
    "NOT_AUTHOR",
    "MOD_REQUIRED",
    "SUBREDDIT_NOTALLOWED",
    "SUBREDDIT_NOTALLOWED_BANNED",
    "THREAD_LOCKED",
    "TOO_OLD",
    "INVALID_PERMISSIONS",
    "Forbidden",
})

NOT_FOUND_CODES = frozenset({
    "SUBREDDIT_NOEXIST",
    "DELETED_LINK",
    "DELETED_COMMENT",
    "NOT_FOUND",
    "CONVERSATION_NOT_FOUND",
    "Not Found",
})


def _as_payload(response: Any) -> Optional[Mapping[str, Any]]:
    """Return a mapping view of `response`, or None if it cannot carry an envelope."""
    if isinstance(response, BaseModel):
        return response.model_dump(by_alias=True)
    if isinstance(response, Mapping):
        return response
    return None


def _item_from_triple(triple: Any) -> ErrorItem:
    """Convert a `[code, message, field]` entry (possibly short) to an ErrorItem."""
    if isinstance(triple, (list, tuple)):
        parts = list(triple) + [None, None, None]
        code, message, field = parts[:3]
        return ErrorItem(str(code), message or "", field or None)
    if isinstance(triple, Mapping):
        return ErrorItem(
            str(triple.get("code") or triple.get("reason") or "UNKNOWN"),
            triple.get("message") or triple.get("explanation") or "",
            triple.get("field"),
        )
    return ErrorItem(str(triple))


def find_errors(response: Any) -> tuple[list[ErrorItem], Optional[int]]:
    """
    Extract the error envelope of a response.

    Args:
        response: Parsed response (pydantic structure, dict, list or None)

    Returns:
        Tuple of (error items, HTTP-style status code if the body names one).
        The item list is empty when the response carries no envelope.
    """
    payload = _as_payload(response)
    if payload is None:
        return [], None

    json_block = payload.get("json")
    if isinstance(json_block, Mapping) and json_block.get("errors"):
        return [_item_from_triple(triple) for triple in json_block["errors"]], None

    error = payload.get("error")
    if error not in (None, "", False):
        status_code = error if isinstance(error, int) else None
        code = payload.get("reason") or (str(error) if status_code is None else payload.get("message"))
        message = payload.get("explanation") or payload.get("message") or ""
        return [ErrorItem(str(code or status_code), message)], status_code

    reason = payload.get("reason")
    if reason and (payload.get("explanation") or payload.get("message")):
        fields = payload.get("fields") or []
        field = ",".join(str(name) for name in fields) or None
        message = payload.get("explanation") or payload.get("message")
        return [ErrorItem(str(reason), message, field)], None

    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        return [_item_from_triple(entry) for entry in errors], None

    return [], None


def error_from_items(
    items: Iterable[ErrorItem],
    status_code: Optional[int] = None,
) -> ApplicationError:
    """
    Build the most specific ApplicationError for a set of error items.

    Args:
        items: Error items reported by Reddit
        status_code: Status code named by the body, if any

    Returns:
        RateLimitError, PermissionError, NotFoundError or ApplicationError
    """
    items = list(items)
    codes = {item.code for item in items}

    if status_code == 429 or codes & RATE_LIMIT_CODES:
        return RateLimitError(items, status_code=status_code)
    if status_code == 403 or codes & PERMISSION_CODES:
        return PermissionError(items, status_code=status_code)
    if status_code == 404 or codes & NOT_FOUND_CODES:
        return NotFoundError(items, status_code=status_code)
    return ApplicationError(items, status_code=status_code)


def has_error_envelope(response: Any) -> bool:
    """Whether `response` carries an application error envelope."""
    items, _ = find_errors(response)
    return bool(items)


def validate(response: ResponseT) -> ResponseT:
    """
    Fail on an application error envelope, otherwise pass the response through.

    Args:
        response: Parsed response of any endpoint

    Returns:
        The very same `response` object

    Raises:
        ApplicationError: (or a subclass) if the body encodes a rejection

    Example:
        >>> result = validate(dispatch.links_and_comments.info(["t3_abc123"]))
    """
    items, status_code = find_errors(response)
    if not items:
        return response

    error = error_from_items(items, status_code)
    logger.warning(
        "reddit_application_error",
        error_type=type(error).__name__,
        codes=error.codes,
        status_code=error.status_code,
    )
    raise error
