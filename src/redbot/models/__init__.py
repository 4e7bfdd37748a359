"""
Object-oriented access to the Reddit API.

These wrappers save callers from looking up endpoints: each one holds a
shared reference to the RedditClient that created it and turns the
client's generic queries into methods on the object.

Example:
    >>> subreddit = api.get_subreddit("python")
    >>> posts = subreddit.get_top_posts(25)
"""

from redbot.models.user import User
from redbot.models.post import Post
from redbot.models.comment import Comment
from redbot.models.subreddit import Subreddit

__all__ = [
    "User",
    "Post",
    "Comment",
    "Subreddit",
]
