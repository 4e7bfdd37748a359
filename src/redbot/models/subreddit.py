"""
Subreddit wrapper.

Get a subreddit with:

    >>> subreddit = api.get_subreddit("python")
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List

from redbot.exceptions import ApiError
from redbot.listing import ListingRequest
from redbot.models.post import Post

if TYPE_CHECKING:
    from redbot.client import RedditClient

# Largest page the listing endpoints will serve
MAX_PAGE_SIZE = 100


@dataclass
class Subreddit:
    """A single subreddit."""

    api: "RedditClient" = field(repr=False, compare=False)
    name: str

    def get_top(self, count: int) -> List[Any]:
        """
        Get the top ``count`` posts from the subreddit as raw listing items.

        Up to 100 posts are fetched in one page. Above that, pages of 100
        are fetched ``count // 100`` times, so a count that is not a
        multiple of 100 is rounded down: ``get_top(250)`` returns at most
        200 items.

        Args:
            count: Number of posts to retrieve

        Returns:
            At most ``count`` listing items

        Example:
            >>> posts = subreddit.get_top(25)
        """
        if count < 0:
            raise ApiError("count must not be negative")

        if count > MAX_PAGE_SIZE:
            limit, requests = MAX_PAGE_SIZE, count // MAX_PAGE_SIZE
        else:
            limit, requests = count, 1

        listing = ListingRequest(
            path=f"r/{self.name}/top",
            limit=limit,
            requests=requests,
        )
        posts = self.api.query_listing(listing)
        return posts[:count]

    def get_top_posts(self, count: int) -> List[Post]:
        """Same as ``get_top``, with each item wrapped as a Post."""
        return [Post.from_listing_item(self.api, item) for item in self.get_top(count)]
