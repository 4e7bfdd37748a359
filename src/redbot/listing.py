"""
Descriptors for requests to listing endpoints.

Listing endpoints (https://www.reddit.com/dev/api#listings) return pages of
items under ``data.children`` plus an opaque ``data.after`` cursor naming the
position to resume from.

Simple:

    >>> listing = ListingRequest(path="r/python/hot", limit=1, requests=1)

More complex:

    >>> listing = ListingRequest(
    ...     path="r/python/hot",
    ...     limit=25,
    ...     requests=2,
    ...     after="t3_aaaaa",
    ...     count=12,
    ...     show_all=False,
    ... )
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ListingRequest(BaseModel):
    """
    Immutable description of a paginated fetch.

    Use ``model_copy(update={...})`` to derive a variant with some fields
    overridden. The fetch loop keeps its own copies of the cursor and the
    running count, so one descriptor can be reused for several fetches.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Relative URL path of the listing")
    limit: int = Field(..., ge=0, description="Number of items to get per request")
    requests: int = Field(..., ge=0, description="Number of requests to make")
    params: Tuple[Tuple[str, str], ...] = Field(
        (),
        description="Extra query parameters, sent in order before the listing ones",
    )
    after: Optional[str] = Field(None, description="Fullname to start after")
    count: int = Field(0, ge=0, description="Number of items received so far")
    show_all: bool = Field(
        True,
        description="Show all items (True) or follow hidden item settings (False)",
    )

    def page_params(self, after: str, count: int) -> List[Tuple[str, str]]:
        """
        Query parameters for one page request.

        Args:
            after: Current cursor, empty for "from the start"
            count: Items received before this page

        Returns:
            Ordered (key, value) pairs: extra params, limit, then after,
            count and show when they apply
        """
        query = list(self.params)
        query.append(("limit", str(self.limit)))
        if after:
            query.append(("after", after))
        if count > 0:
            query.append(("count", str(count)))
        if self.show_all:
            query.append(("show", "all"))
        return query
