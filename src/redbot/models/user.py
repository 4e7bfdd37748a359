"""
User wrapper.

Get a user with:

    >>> user = api.get_user("spez")
    >>> me = api.me()
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict

from redbot.exceptions import ApiError

if TYPE_CHECKING:
    from redbot.client import RedditClient

# Shown by the API in place of removed accounts
DELETED_USER = "[deleted]"


@dataclass
class User:
    """A single Reddit account."""

    api: "RedditClient" = field(repr=False, compare=False)
    name: str

    @property
    def is_deleted(self) -> bool:
        return self.name == DELETED_USER

    def about(self) -> Dict[str, Any]:
        """
        Fetch the public profile from ``user/<name>/about``.

        Returns:
            The ``data`` object of the response (name, karma, created_utc, ...)

        Raises:
            ApiError: On request failure, or when the response has no
                ``data`` object
        """
        body = self.api.query_json("GET", f"user/{self.name}/about")
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise ApiError(f"User '{self.name}' response has no 'data' object")
        return data
