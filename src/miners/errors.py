"""
Miner Error Types.

Only NotFound and RemoteAPIError leave the stats pipeline; per-repository
failures are absorbed by the miner and the aggregator.
"""

from http import HTTPStatus
from typing import Optional


class MinerError(Exception):
    """Base class for remote mining failures."""


class NotFound(MinerError):
    """The requested account does not exist on GitHub."""

    def __init__(self, resource: str = "user"):
        self.resource = resource
        super().__init__(f"GitHub {resource} not found")


class RemoteAPIError(MinerError):
    """GitHub answered with a non-2xx status other than 404 or 409."""

    def __init__(self, status_text: str, status: Optional[int] = None):
        self.status_text = status_text
        self.status = status
        super().__init__(f"GitHub API error: {status_text}")

    @classmethod
    def from_status(cls, status: Optional[int]) -> "RemoteAPIError":
        """Build an error carrying the reason phrase of an HTTP status.

        Args:
            status (Optional[int]): HTTP status code, if known

        Returns:
            RemoteAPIError: Error with the standard reason phrase as status text
        """
        try:
            text = HTTPStatus(status).phrase
        except (TypeError, ValueError):
            text = str(status) if status is not None else "unknown error"
        return cls(text, status)
