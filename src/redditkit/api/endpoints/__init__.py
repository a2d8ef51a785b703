"""
Endpoint models, one per Reddit resource family.

Each public method maps to exactly one REST endpoint.
"""

from redditkit.api.endpoints.base import (
    UNSTABLE_ENDPOINTS,
    BaseEndpoint,
    unstable_endpoint,
)
from redditkit.api.endpoints.links_and_comments import (
    DOWNVOTE,
    NO_VOTE,
    UPVOTE,
    LinksAndComments,
)
from redditkit.api.endpoints.modmail import (
    CONVERSATION_SORTS,
    CONVERSATION_STATES,
    Modmail,
)

__all__ = [
    "UNSTABLE_ENDPOINTS",
    "BaseEndpoint",
    "unstable_endpoint",
    "DOWNVOTE",
    "NO_VOTE",
    "UPVOTE",
    "LinksAndComments",
    "CONVERSATION_SORTS",
    "CONVERSATION_STATES",
    "Modmail",
]
