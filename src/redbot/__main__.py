"""
Command line entry point.

Logs in with credentials from a config file (or REDDIT_* environment
variables) and prints the result of one query as JSON.

    python -m redbot --config config.json me
    python -m redbot top python --count 25
    python -m redbot search pyth
"""
import argparse
import json
import os
import sys
from typing import Any, Callable, Dict, List, Optional

from redbot.client import RedditClient
from redbot.config import Config
from redbot.exceptions import ApiError
from redbot.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="redbot",
        description="Query the Reddit API with a script application's credentials",
    )
    parser.add_argument(
        "--config",
        help="Path to a JSON config file (default: REDDIT_* environment variables)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("me", help="Show the logged-in account")

    top = subparsers.add_parser("top", help="Top posts of a subreddit")
    top.add_argument("subreddit", help="Subreddit name, e.g. python")
    top.add_argument("--count", type=int, default=25, help="Number of posts")

    search = subparsers.add_parser("search", help="Search subreddit names")
    search.add_argument("name", help="Full or partial subreddit name")

    return parser.parse_args(argv)


def _me(api: RedditClient, args: argparse.Namespace) -> Any:
    return api.whoami


def _top(api: RedditClient, args: argparse.Namespace) -> Any:
    subreddit = api.get_subreddit(args.subreddit)
    return [
        {"fullname": post.fullname, "title": post.title, "author": post.user.name}
        for post in subreddit.get_top_posts(args.count)
    ]


def _search(api: RedditClient, args: argparse.Namespace) -> Any:
    return [subreddit.name for subreddit in api.search_for_subreddit(args.name)]


COMMANDS: Dict[str, Callable[[RedditClient, argparse.Namespace], Any]] = {
    "me": _me,
    "top": _top,
    "search": _search,
}


def run(api: RedditClient, args: argparse.Namespace) -> Any:
    """Execute the selected command and return a JSON-serialisable result."""
    return COMMANDS[args.command](api, args)


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging(level=os.getenv("LOG_LEVEL", "WARNING"))
    args = parse_args(argv)

    try:
        config = Config.load_config(args.config) if args.config else Config.from_env()
        with RedditClient(config) as api:
            api.login()
            result = run(api, args)
    except ApiError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(str(e), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
