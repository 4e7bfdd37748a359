"""
Error type for Reddit API access.

Every failure raised by this package is an ApiError. Failures coming from
a collaborator (HTTP transport, filesystem, JSON decoding, method parsing)
are tagged with their origin in ``source``; failures synthesized by the
client itself (error statuses, missing fields, "not found") carry an empty
tag and a human-readable message.
"""

from typing import Optional


# Origin tags
SOURCE_APPLICATION = ""
SOURCE_TRANSPORT = "requests"
SOURCE_IO = "io"
SOURCE_DECODE = "decode"
SOURCE_METHOD = "method"


class ApiError(Exception):
    """
    Unified error for all Reddit API related failures.

    The rendered message is ``API error: <message>`` for application errors
    and ``API error from '<source>': <message>`` for wrapped failures. The
    error never chains to an underlying cause; callers get one flat
    diagnostic.

    Attributes:
        message: Diagnostic text
        source: Origin tag, empty for application errors
        status_code: HTTP status when built from a response

    Example:
        >>> str(ApiError("Subreddit not found"))
        'API error: Subreddit not found'
        >>> str(ApiError("timed out", source="requests"))
        "API error from 'requests': timed out"
    """

    def __init__(
        self,
        message: str,
        source: str = SOURCE_APPLICATION,
        status_code: Optional[int] = None,
    ) -> None:
        """
        Initialize ApiError.

        Args:
            message: Error description
            source: Origin tag (see module constants)
            status_code: Optional HTTP status code from the Reddit API
        """
        self.message = message
        self.source = source
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        if not self.source:
            return f"API error: {self.message}"
        return f"API error from '{self.source}': {self.message}"

    def __repr__(self) -> str:
        return (
            f"ApiError(message={self.message!r}, source={self.source!r}, "
            f"status_code={self.status_code!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return (
            self.message == other.message
            and self.source == other.source
            and self.status_code == other.status_code
        )

    def __hash__(self) -> int:
        return hash((self.message, self.source, self.status_code))

    @property
    def is_application_error(self) -> bool:
        """True when the error was synthesized by the client itself."""
        return self.source == SOURCE_APPLICATION

    @classmethod
    def from_transport(cls, error: Exception) -> "ApiError":
        """Wrap a connection, TLS or timeout failure from requests."""
        return cls(repr(error), source=SOURCE_TRANSPORT)

    @classmethod
    def from_io(cls, error: OSError) -> "ApiError":
        """Wrap a local filesystem failure."""
        return cls(repr(error), source=SOURCE_IO)

    @classmethod
    def from_decode(cls, error: Exception) -> "ApiError":
        """Wrap a JSON syntax or schema failure."""
        return cls(repr(error), source=SOURCE_DECODE)

    @classmethod
    def from_method(cls, method: str) -> "ApiError":
        """Build the error for an HTTP method string that is not a valid token."""
        return cls(f"Invalid HTTP method {method!r}", source=SOURCE_METHOD)

    @classmethod
    def from_status(cls, status_code: int, prefix: str = "Server error") -> "ApiError":
        """
        Build the application error for a client or server error status.

        Example:
            >>> str(ApiError.from_status(503))
            'API error: Server error, code 503'
        """
        return cls(f"{prefix}, code {status_code}", status_code=status_code)
