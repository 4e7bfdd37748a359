"""
Comment wrapper.

Comments are built from listing items such as those of
``user/<name>/comments``.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from redbot.models.post import listing_item_data
from redbot.models.user import DELETED_USER, User

if TYPE_CHECKING:
    from redbot.client import RedditClient


@dataclass
class Comment:
    """A single comment."""

    api: "RedditClient" = field(repr=False, compare=False)
    user: User
    # Permalink of the post the comment belongs to
    link: Optional[str] = None
    text: Optional[str] = None
    fullname: Optional[str] = None

    @classmethod
    def from_listing_item(cls, api: "RedditClient", item: Any) -> "Comment":
        """Build a Comment from a ``t1`` listing child."""
        data = listing_item_data(item, "t1")
        return cls(
            api=api,
            user=User(api=api, name=data.get("author") or DELETED_USER),
            link=data.get("link_url") or data.get("link_permalink"),
            text=data.get("body"),
            fullname=data.get("name"),
        )
