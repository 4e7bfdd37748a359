"""
Client library for the Reddit API.

First create a Config, then use it to create a RedditClient, which exposes
methods for querying the API:

    >>> from redbot import Config, RedditClient
    >>> config = Config.load_config("config.json")
    >>> api = RedditClient(config)
    >>> api.login()
    >>> karma = api.query_json("GET", "api/v1/me/karma")
"""

import logging

from redbot.client import AccessTokenResponse, LoginState, RedditClient
from redbot.config import Config
from redbot.exceptions import ApiError
from redbot.listing import ListingRequest
from redbot.models import Comment, Post, Subreddit, User
from redbot.rate_limit import RateLimitStatus

__version__ = "0.1.0"

# Silent unless the host application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Client
    "RedditClient",
    "AccessTokenResponse",
    "LoginState",
    "Config",
    "ListingRequest",
    "RateLimitStatus",
    # Errors
    "ApiError",
    # Models
    "Subreddit",
    "User",
    "Post",
    "Comment",
]
