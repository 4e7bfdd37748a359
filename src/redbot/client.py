"""
Authenticated Reddit API client.

RedditClient owns the credentials, a requests.Session and, after a
successful login, the access token and "who am I" identity of the account.
It exposes a generic ``query`` for single requests and ``query_listing`` for
cursor-paginated listing endpoints.

Example:
    >>> config = Config.load_config("config.json")
    >>> api = RedditClient(config)
    >>> api.login()
    >>> karma = api.query_json("GET", "api/v1/me/karma")
"""

import re
import threading
import time
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import requests
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from requests.auth import HTTPBasicAuth

from redbot.config import Config
from redbot.exceptions import ApiError
from redbot.listing import ListingRequest
from redbot.models import Subreddit, User
from redbot.rate_limit import RateLimitStatus
from redbot.utils.logger import get_logger, log_request, mask_secret

logger = get_logger(__name__)

DEFAULT_AUTH_URL = "https://www.reddit.com"
DEFAULT_API_URL = "https://oauth.reddit.com"
DEFAULT_TIMEOUT = 30.0

USERNAME_PLACEHOLDER = "{username}"

# RFC 7230 token, which is what an HTTP method must be
METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

QueryParams = Sequence[Tuple[str, str]]


class AccessTokenResponse(BaseModel):
    """
    Access token returned by the OAuth token endpoint.

    The endpoint names the token ``access_token``; both that and ``token``
    are accepted on input.
    """

    model_config = ConfigDict(frozen=True)

    token: str = Field(..., validation_alias=AliasChoices("access_token", "token"))
    token_type: str
    expires_in: int = Field(..., ge=0)
    scope: str


class LoginState(BaseModel):
    """
    Token and identity of a logged-in client.

    The client swaps a whole LoginState in at once, so a reader always sees
    a token together with the identity fetched using it.
    """

    model_config = ConfigDict(frozen=True)

    token: AccessTokenResponse
    whoami: Dict[str, Any]

    @property
    def username(self) -> str:
        return self.whoami["name"]


def _parse_listing_page(body: Any) -> Tuple[Optional[str], List[Any]]:
    """Pull ``data.after`` and ``data.children`` out of a listing page."""
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, dict):
        raise ApiError("Listing response has no 'data' object")

    if "after" not in data:
        raise ApiError("Listing response has no 'data.after' field")
    after = data["after"]
    if after is not None and not isinstance(after, str):
        raise ApiError("Listing response 'data.after' is not a string")

    children = data.get("children")
    if not isinstance(children, list):
        raise ApiError("Listing response has no 'data.children' list")

    return after, children


class RedditClient:
    """
    Reddit API access over OAuth.

    The client starts logged out. ``login`` is the only way to become logged
    in; until then requests carry no Authorization header and paths using
    the ``{username}`` placeholder are rejected.

    Attributes:
        config: Credentials the client was built with
        session: Transport used for every request
        api_url: Base URL for authenticated API calls
        auth_url: Base URL of the OAuth token endpoint
        timeout: Per-request timeout in seconds
        rate_limit: Rate limit headers of the most recent response
    """

    def __init__(
        self,
        config: Config,
        session: Optional[requests.Session] = None,
        api_url: str = DEFAULT_API_URL,
        auth_url: str = DEFAULT_AUTH_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Create a new API client.

        Args:
            config: The credentials to log in with
            session: Optional requests session (a new one is created if omitted)
            api_url: Base URL for API calls
            auth_url: Base URL for the token endpoint
            timeout: Request timeout in seconds
        """
        self.config = config
        self.session = session or requests.Session()
        self.api_url = api_url.rstrip("/")
        self.auth_url = auth_url.rstrip("/")
        self.timeout = timeout
        self.rate_limit: Optional[RateLimitStatus] = None

        self._state: Optional[LoginState] = None
        self._login_lock = threading.Lock()

        logger.debug(
            "client_created",
            username=config.username,
            api_url=self.api_url,
            timeout=timeout,
        )

    # ------------------------------------------------------------------
    # Login state
    # ------------------------------------------------------------------

    @property
    def state(self) -> Optional[LoginState]:
        """Current login state, None while logged out."""
        return self._state

    @property
    def is_logged_in(self) -> bool:
        return self._state is not None

    @property
    def access_token(self) -> Optional[AccessTokenResponse]:
        state = self._state
        return state.token if state else None

    @property
    def whoami(self) -> Optional[Dict[str, Any]]:
        """The account's ``api/v1/me`` data."""
        state = self._state
        return state.whoami if state else None

    @property
    def username(self) -> Optional[str]:
        state = self._state
        return state.username if state else None

    def login(self) -> None:
        """
        Obtain an access token and the account identity.

        Performs a password-grant request against the token endpoint, then
        fetches ``api/v1/me`` with the new token. Both results are stored
        together only when both requests succeed; on failure the previous
        login state (if any) is left untouched.

        Raises:
            ApiError: If either request fails or returns unusable data

        Example:
            >>> try:
            ...     api.login()
            ... except ApiError as e:
            ...     print(f"Could not get an access token: {e}")
        """
        with self._login_lock:
            logger.info("login_started", username=self.config.username)

            token = self._request_token()
            whoami = self._fetch_whoami(token)
            self._state = LoginState(token=token, whoami=whoami)

            logger.info(
                "login_succeeded",
                username=whoami["name"],
                token=mask_secret(token.token),
                scope=token.scope,
                expires_in=token.expires_in,
            )

    def _request_token(self) -> AccessTokenResponse:
        form = {
            "grant_type": "password",
            "username": self.config.username,
            "password": self.config.password,
        }
        response = self._send(
            "POST",
            f"{self.auth_url}/api/v1/access_token",
            headers={"User-Agent": self.config.user_agent},
            data=form,
            auth=HTTPBasicAuth(self.config.client_id, self.config.client_secret),
        )

        if response.status_code >= 400:
            logger.error("login_failed", status_code=response.status_code)
            raise ApiError.from_status(response.status_code, prefix="Login failed")

        payload = self._decode_json(response)

        # Bad credentials come back as 200 with an error body
        if isinstance(payload, dict) and "error" in payload:
            logger.error("login_rejected", error=payload["error"])
            raise ApiError(f"Login rejected: {payload['error']}")

        try:
            return AccessTokenResponse.model_validate(payload)
        except ValidationError as e:
            raise ApiError.from_decode(e) from None

    def _fetch_whoami(self, token: AccessTokenResponse) -> Dict[str, Any]:
        response = self._send(
            "GET",
            self._url("api/v1/me"),
            headers=self._build_headers(token),
        )
        if response.status_code >= 400:
            logger.error("whoami_failed", status_code=response.status_code)
            raise ApiError.from_status(response.status_code, prefix="Identity request failed")

        whoami = self._decode_json(response)
        if not isinstance(whoami, dict) or not isinstance(whoami.get("name"), str):
            raise ApiError("Identity response has no 'name' field")

        logger.debug("whoami_fetched", name=whoami["name"])
        return whoami

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.api_url}/{path.lstrip('/')}"

    def _reformat_path(self, path: str, state: Optional[LoginState]) -> str:
        """Substitute the ``{username}`` placeholder and prefix the API URL."""
        if USERNAME_PLACEHOLDER in path:
            if state is None:
                raise ApiError(
                    f"Cannot substitute {USERNAME_PLACEHOLDER} in '{path}': not logged in"
                )
            logger.debug("path_username_substituted", path=path)
            path = path.replace(USERNAME_PLACEHOLDER, state.username)
        return self._url(path)

    def _build_headers(self, token: Optional[AccessTokenResponse]) -> Dict[str, str]:
        """User-Agent always; the bearer token when one is available."""
        headers = {"User-Agent": self.config.user_agent}
        if token is not None:
            headers["Authorization"] = f"bearer {token.token}"
        return headers

    def _send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        params: Optional[QueryParams] = None,
        data: Optional[Mapping[str, str]] = None,
        auth: Optional[HTTPBasicAuth] = None,
    ) -> requests.Response:
        start = time.monotonic()
        try:
            response = self.session.request(
                method,
                url,
                headers=dict(headers),
                params=list(params) if params is not None else None,
                data=dict(data) if data is not None else None,
                auth=auth,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("http_transport_failed", method=method, url=url, error=str(e))
            raise ApiError.from_transport(e) from None

        log_request(
            method,
            url,
            response.status_code,
            (time.monotonic() - start) * 1000,
        )
        self._process_response_headers(response.headers)
        return response

    def _process_response_headers(self, headers: Mapping[str, str]) -> None:
        status = RateLimitStatus.from_headers(headers)
        if status is None:
            return
        self.rate_limit = status
        logger.debug("rate_limit_status", **status.get_stats())
        if status.exhausted:
            logger.warning(
                "rate_limit_exhausted",
                reset_seconds=status.reset_seconds,
            )

    @staticmethod
    def _decode_json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ApiError.from_decode(e) from None

    @staticmethod
    def _check_status(response: requests.Response) -> None:
        if response.status_code >= 400:
            raise ApiError.from_status(response.status_code)

    # ------------------------------------------------------------------
    # Public queries
    # ------------------------------------------------------------------

    def query(
        self,
        method: str,
        path: str,
        query: Optional[QueryParams] = None,
        form_data: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        """
        Query the Reddit API.

        The response is returned as-is; error statuses are not turned into
        exceptions here (see ``query_json``).

        Args:
            method: HTTP method token, e.g. "GET" or "POST"
            path: Relative URL path (everything after the API host). The
                placeholder ``{username}`` is replaced with the logged-in
                account's name.
            query: Optional ordered query parameters
            form_data: Optional form fields, sent URL-form-encoded

        Returns:
            requests.Response: The raw response

        Raises:
            ApiError: tagged ``method`` for an invalid method, ``requests``
                for transport failures, or an application error when
                ``{username}`` is used while logged out

        Example:
            >>> resp = api.query("POST", "api/save", form_data={"id": "t3_aaaaaa"})
            >>> resp.status_code
            200
        """
        if not METHOD_TOKEN.fullmatch(method):
            raise ApiError.from_method(method)

        state = self._state
        url = self._reformat_path(path, state)
        headers = self._build_headers(state.token if state else None)
        return self._send(method, url, headers=headers, params=query, data=form_data)

    def query_json(
        self,
        method: str,
        path: str,
        query: Optional[QueryParams] = None,
        form_data: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Query the Reddit API and decode the JSON body.

        Raises:
            ApiError: as ``query``, plus an application error carrying the
                status code for 4xx/5xx responses and a ``decode`` error for
                a body that is not JSON
        """
        response = self.query(method, path, query=query, form_data=form_data)
        self._check_status(response)
        return self._decode_json(response)

    def iter_listing(self, listing: ListingRequest) -> Iterator[Any]:
        """
        Iterate over the items of a listing endpoint, page by page.

        Makes exactly ``listing.requests`` sequential GET requests, threading
        each page's ``data.after`` cursor into the next request. A null
        cursor is only accepted on the last page.

        Args:
            listing: Description of the listing fetch

        Yields:
            Each item of ``data.children``, in order

        Raises:
            ApiError: On transport failure, an error status (message carries
                the code), a non-JSON body, a page missing ``data.after``
                or ``data.children``, or a null cursor before the last page
        """
        logger.debug(
            "listing_request",
            path=listing.path,
            limit=listing.limit,
            requests=listing.requests,
            after=listing.after,
            count=listing.count,
        )
        state = self._state
        url = self._reformat_path(listing.path, state)
        headers = self._build_headers(state.token if state else None)

        after = listing.after or ""
        count = listing.count

        for page in range(1, listing.requests + 1):
            response = self._send(
                "GET",
                url,
                headers=headers,
                params=listing.page_params(after, count),
            )
            if response.status_code >= 400:
                logger.warning(
                    "listing_page_failed",
                    path=listing.path,
                    page=page,
                    status_code=response.status_code,
                )
                raise ApiError.from_status(response.status_code)

            next_after, children = _parse_listing_page(self._decode_json(response))

            for item in children:
                count += 1
                yield item

            logger.debug(
                "listing_page_fetched",
                path=listing.path,
                page=page,
                items=len(children),
                after=next_after,
                count=count,
            )

            if next_after is None and page < listing.requests:
                logger.warning(
                    "listing_cursor_missing",
                    path=listing.path,
                    page=page,
                    requests=listing.requests,
                )
                raise ApiError("Listing response 'data.after' is null before the last request")
            after = next_after or ""

    def query_listing(self, listing: ListingRequest) -> List[Any]:
        """
        Query the Reddit API via a listing endpoint.

        All pages are fetched before returning; if any page fails the whole
        call fails and no items are returned.

        Args:
            listing: Description of the listing fetch

        Returns:
            All items collected from ``data.children`` across pages

        Example:
            >>> listing = ListingRequest(path="r/python/hot", limit=1, requests=1)
            >>> items = api.query_listing(listing)
        """
        return list(self.iter_listing(listing))

    # ------------------------------------------------------------------
    # Convenience lookups
    # ------------------------------------------------------------------

    def search_for_subreddit(self, name: str) -> List[Subreddit]:
        """
        Search for subreddits matching a (partial) name.

        Args:
            name: Subreddit name or prefix

        Returns:
            One Subreddit per name in the response, in response order

        Example:
            >>> [sr.name for sr in api.search_for_subreddit("python")]
            ['Python', 'pythontips', 'pythonhelp']
        """
        response = self.query(
            "GET",
            "api/search_reddit_names",
            query=[("query", name), ("exact", "false")],
        )
        self._check_status(response)
        data = self._decode_json(response)

        names = data.get("names") if isinstance(data, dict) else None
        if not isinstance(names, list):
            raise ApiError("Subreddit search response has no 'names' list")

        return [
            Subreddit(api=self, name=entry)
            for entry in names
            if isinstance(entry, str)
        ]

    def get_subreddit(self, name: str) -> Subreddit:
        """
        Get a subreddit by its exact name.

        Raises:
            ApiError: "Subreddit not found" when no search result matches
                ``name`` exactly
        """
        for subreddit in self.search_for_subreddit(name):
            if subreddit.name == name:
                return subreddit
        logger.info("subreddit_not_found", name=name)
        raise ApiError("Subreddit not found")

    def get_user(self, name: str) -> User:
        """Wrap a user name; no request is made."""
        return User(api=self, name=name)

    def me(self) -> User:
        """The logged-in account as a User."""
        state = self._state
        if state is None:
            raise ApiError("Not logged in")
        return User(api=self, name=state.username)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> "RedditClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
