"""
Shared fixtures for redbot tests.

HTTP is never performed: the client gets a MagicMock session whose
``request`` returns real requests.Response objects built here.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import pytest
import requests
from unittest.mock import MagicMock

from redbot.client import RedditClient
from redbot.config import Config

API_URL = "https://oauth.test"
AUTH_URL = "https://www.test"

SAMPLE_TOKEN = {
    "access_token": "aaaaa",
    "token_type": "bbbbb",
    "expires_in": 10000,
    "scope": "ccccc",
}
SAMPLE_WHOAMI = {"name": "test-name", "total_karma": 42}


def build_response(
    status_code: int = 200,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
    text: Optional[str] = None,
) -> requests.Response:
    """Build a requests.Response with a JSON (or raw text) body."""
    response = requests.Response()
    response.status_code = status_code
    if text is None:
        text = json.dumps(body) if body is not None else ""
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    return response


def build_listing_page(ids: List[str], after: Optional[str], kind: str = "t3") -> Dict[str, Any]:
    """Body of one listing page holding one child per id."""
    return {
        "kind": "Listing",
        "data": {
            "after": after,
            "children": [
                {"kind": kind, "data": {"id": item_id, "name": f"{kind}_{item_id}"}}
                for item_id in ids
            ],
        },
    }


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return build_response


@pytest.fixture
def make_listing_page() -> Callable[..., Dict[str, Any]]:
    return build_listing_page


@pytest.fixture
def config() -> Config:
    return Config(
        username="bot-account",
        password="hunter2",
        user_agent="linux:redbot-tests:v0.1.0 (by /u/tester)",
        client_id="client-id",
        client_secret="client-secret",
    )


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(config: Config, session: MagicMock) -> RedditClient:
    """A logged-out client with a mocked session."""
    return RedditClient(config, session=session, api_url=API_URL, auth_url=AUTH_URL)


@pytest.fixture
def logged_in_api(api: RedditClient, session: MagicMock) -> RedditClient:
    """A client that has completed login; the session mock is reset afterwards."""
    session.request.side_effect = [
        build_response(body=SAMPLE_TOKEN),
        build_response(body=SAMPLE_WHOAMI),
    ]
    api.login()
    session.request.reset_mock(side_effect=True)
    return api
