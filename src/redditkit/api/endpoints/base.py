"""
Request building and execution shared by all endpoint models.

An endpoint model turns one method call into one REST request:
path, verb and a fixed set of named parameters, executed through
the authenticated praw transport and parsed into a pydantic
structure. Endpoint models keep no state besides the transport.
"""

import functools
import time
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar, Union

import praw
from praw.exceptions import RedditAPIException
from prawcore.exceptions import PrawcoreException, ResponseException
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from redditkit.api.exceptions import ApplicationError, ErrorItem, ResponseParseError
from redditkit.api.validation import error_from_items, find_errors
from redditkit.utils.logger import get_logger, log_api_call

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# qualified method name -> reason the endpoint's response is untrusted
UNSTABLE_ENDPOINTS: dict[str, str] = {}


def unstable_endpoint(reason: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Mark an endpoint whose live responses are known to be unreliable.

    Such endpoints return the loosely typed JSON body instead of a
    structure. The marker is kept on the function
    (`unstable_reason`) and in `UNSTABLE_ENDPOINTS`, and each call
    logs a warning.

    Args:
        reason: What is known to go wrong with the endpoint

    Example:
        >>> @unstable_endpoint("returns 404 for every entity tried")
        ... def bulk_read(self, entity, state): ...
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        UNSTABLE_ENDPOINTS[func.__qualname__] = reason

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.warning(
                "unstable_endpoint_called",
                endpoint=func.__qualname__,
                reason=reason,
            )
            return func(*args, **kwargs)

        wrapper.unstable_reason = reason  # type: ignore[attr-defined]
        return wrapper

    return decorator


class BaseEndpoint:
    """
    Base class for per-resource-family endpoint models.

    Attributes:
        _transport: Authenticated praw.Reddit instance shared via Dispatch
    """

    def __init__(self, transport: praw.Reddit) -> None:
        self._transport = transport

    @staticmethod
    def _prepare(parameters: Optional[Mapping[str, Any]]) -> Optional[dict[str, Any]]:
        """
        Drop unset parameters and encode values the way Reddit expects.

        Booleans become "true"/"false"; everything else is passed
        through verbatim (fullnames and enum strings are never checked).
        """
        if parameters is None:
            return None

        prepared = {}
        for key, value in parameters.items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            prepared[key] = value
        return prepared

    @staticmethod
    def _join(values: Union[str, Iterable[str]]) -> str:
        """Comma-join ids or fullnames; a single string is passed through."""
        if isinstance(values, str):
            return values
        return ",".join(values)

    @staticmethod
    def _error_body(error: ResponseException) -> Optional[ApplicationError]:
        """
        Read a Reddit error envelope out of a non-2xx response.

        Returns:
            The matching ApplicationError, or None when the body is not
            JSON or carries no envelope
        """
        response = error.response
        try:
            body = response.json()
        except ValueError:
            return None

        items, body_status = find_errors(body)
        if not items:
            return None
        return error_from_items(items, status_code=body_status or response.status_code)

    def _execute(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Execute one request and return the decoded JSON body.

        Args:
            method: HTTP verb
            path: Path relative to the OAuth API root
            params: Query string parameters
            data: Form-encoded body parameters

        Returns:
            Decoded JSON body (dict, list) or None for empty bodies

        Raises:
            ApplicationError: If praw reports an API error in a 400 body, or
                a non-2xx response carries a Reddit error envelope
            prawcore.exceptions.PrawcoreException: Transport failures without
                an error envelope, unmodified
        """
        start_time = time.time()
        logger.debug("reddit_request", method=method, path=path)

        try:
            response = self._transport.request(
                method=method,
                path=path,
                params=self._prepare(params),
                data=self._prepare(data),
            )
        except RedditAPIException as e:
            log_api_call(
                method=method,
                path=path,
                duration_ms=(time.time() - start_time) * 1000,
                error=type(e).__name__,
            )
            items = [
                ErrorItem(item.error_type, item.message or "", item.field or None)
                for item in e.items
            ]
            raise error_from_items(items, status_code=400) from e
        except PrawcoreException as e:
            log_api_call(
                method=method,
                path=path,
                duration_ms=(time.time() - start_time) * 1000,
                error=type(e).__name__,
            )
            if isinstance(e, ResponseException):
                application_error = self._error_body(e)
                if application_error is not None:
                    logger.warning(
                        "reddit_application_error",
                        error_type=type(application_error).__name__,
                        codes=application_error.codes,
                        status_code=application_error.status_code,
                    )
                    raise application_error from e
            raise

        log_api_call(
            method=method,
            path=path,
            duration_ms=(time.time() - start_time) * 1000,
        )
        return response

    def _execute_as(
        self,
        response_type: type[ModelT],
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> ModelT:
        """Execute a request and parse its body into `response_type`."""
        raw = self._execute(method, path, params=params, data=data)
        return self._deserialize(response_type, raw)

    @staticmethod
    def _deserialize(response_type: type[ModelT], raw: Any) -> ModelT:
        """
        Parse a decoded body into a structure.

        Raises:
            ResponseParseError: If the body does not fit the structure
        """
        try:
            return response_type.model_validate(raw if raw is not None else {})
        except PydanticValidationError as e:
            logger.error(
                "response_parse_failed",
                response_type=response_type.__name__,
                error_count=e.error_count(),
            )
            raise ResponseParseError(response_type.__name__, str(e)) from e
