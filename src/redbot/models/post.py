"""
Post wrapper.

Posts are built from listing items, e.g. from Subreddit.get_top_posts.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from redbot.exceptions import ApiError
from redbot.models.user import DELETED_USER, User

if TYPE_CHECKING:
    from redbot.client import RedditClient


def listing_item_data(item: Any, kind: str) -> dict:
    """Return the ``data`` object of a listing child, checking its kind and shape."""
    if not isinstance(item, dict):
        raise ApiError(f"Listing item is not an object (expected {kind})")
    if item.get("kind") != kind:
        raise ApiError(f"Listing item has kind {item.get('kind')!r}, expected {kind!r}")
    data = item.get("data")
    if not isinstance(data, dict):
        raise ApiError(f"Listing item has no 'data' object (expected {kind})")
    return data


@dataclass
class Post:
    """A single post, either link or text."""

    api: "RedditClient" = field(repr=False, compare=False)
    user: User
    title: str
    # Set for link posts
    link: Optional[str] = None
    # Set for text (self) posts
    text: Optional[str] = None
    fullname: Optional[str] = None

    @property
    def is_self(self) -> bool:
        return self.link is None

    @classmethod
    def from_listing_item(cls, api: "RedditClient", item: Any) -> "Post":
        """
        Build a Post from a ``t3`` listing child.

        Args:
            api: Client the post belongs to
            item: Listing child of the form ``{"kind": "t3", "data": {...}}``

        Raises:
            ApiError: If the item is not a ``t3`` child with a ``data`` object
        """
        data = listing_item_data(item, "t3")
        is_self = bool(data.get("is_self", False))
        return cls(
            api=api,
            user=User(api=api, name=data.get("author") or DELETED_USER),
            title=data.get("title") or "",
            link=None if is_self else data.get("url"),
            text=(data.get("selftext") or "") if is_self else None,
            fullname=data.get("name"),
        )
