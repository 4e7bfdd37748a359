"""
Rate limit inspection for Reddit API responses.

Reddit reports its quota (600 requests per 10 minute window for OAuth
clients) through three response headers. This module only reads them for
diagnostics; nothing here waits or rejects requests.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from redbot.utils.logger import get_logger

logger = get_logger(__name__)

RATE_LIMIT_HEADER_NAMES = (
    "X-Ratelimit-Used",
    "X-Ratelimit-Remaining",
    "X-Ratelimit-Reset",
)


def _parse_number(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        logger.debug("rate_limit_header_unparsable", value=value)
        return None


class RateLimitStatus(BaseModel):
    """
    Snapshot of the rate limit headers from one response.

    Fields are None when the server did not send the matching header
    (or sent something that is not a number).

    Example:
        >>> status = RateLimitStatus.from_headers({
        ...     "X-Ratelimit-Used": "12",
        ...     "X-Ratelimit-Remaining": "588.0",
        ...     "X-Ratelimit-Reset": "340",
        ... })
        >>> status.remaining
        588.0
    """

    model_config = ConfigDict(frozen=True)

    used: Optional[int] = Field(None, ge=0, description="Requests used in window")
    remaining: Optional[float] = Field(
        None,
        ge=0,
        description="Requests left in window (Reddit sends a float)",
    )
    reset_seconds: Optional[int] = Field(
        None,
        ge=0,
        description="Seconds until the window resets",
    )
    observed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the headers were read",
    )

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> Optional["RateLimitStatus"]:
        """
        Build a snapshot from response headers.

        Header lookup goes through ``headers.get`` so a requests
        CaseInsensitiveDict matches regardless of case.

        Returns:
            RateLimitStatus, or None if none of the headers are present
        """
        raw = {name: headers.get(name) for name in RATE_LIMIT_HEADER_NAMES}
        for name, value in raw.items():
            if value is not None:
                logger.debug("rate_limit_header", header=name, value=value)

        if all(value is None for value in raw.values()):
            return None

        used = _parse_number(raw["X-Ratelimit-Used"])
        remaining = _parse_number(raw["X-Ratelimit-Remaining"])
        reset = _parse_number(raw["X-Ratelimit-Reset"])

        return cls(
            used=int(used) if used is not None and used >= 0 else None,
            remaining=remaining if remaining is not None and remaining >= 0 else None,
            reset_seconds=int(reset) if reset is not None and reset >= 0 else None,
        )

    @property
    def exhausted(self) -> bool:
        """True when the server reported no remaining requests."""
        return self.remaining is not None and self.remaining < 1

    def get_stats(self) -> Dict[str, Any]:
        """
        Get the snapshot as a plain dictionary for logging or display.

        Example:
            >>> status.get_stats()
            {
                'used': 12,
                'remaining': 588.0,
                'reset_seconds': 340,
                'utilization_percent': 2.0,
                'observed_at': '2025-11-05T12:34:56.789012+00:00'
            }
        """
        utilization: Optional[float] = None
        if self.used is not None and self.remaining is not None:
            total = self.used + self.remaining
            utilization = round(self.used / total * 100, 2) if total > 0 else 0.0

        return {
            "used": self.used,
            "remaining": self.remaining,
            "reset_seconds": self.reset_seconds,
            "utilization_percent": utilization,
            "observed_at": self.observed_at.isoformat(),
        }
