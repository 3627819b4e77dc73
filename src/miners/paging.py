"""
Repository Paging Strategies.

GitHub does not filter repository listings by push date, so the miner filters
each page itself. The strategy decides which repositories of a page qualify
and whether another page should be requested.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from miners.models import RemoteRepository


class RepoPagingStrategy(ABC):
    """Filters a listing page against a push-date cutoff."""

    @abstractmethod
    def filter_page(
        self, page: List[RemoteRepository], since: Optional[datetime]
    ) -> Tuple[List[RemoteRepository], bool]:
        """
        Select the qualifying repositories of one page.

        Args:
            page (List[RemoteRepository]): Repositories of the page
            since (Optional[datetime]): Push-date cutoff, None for no filtering

        Returns:
            Tuple[List[RemoteRepository], bool]: Kept repositories and whether
                the next page should be requested
        """
        pass

    @staticmethod
    def _pushed_since(
        page: List[RemoteRepository], since: datetime
    ) -> List[RemoteRepository]:
        return [
            repo
            for repo in page
            if repo.pushed_at is not None and repo.pushed_at >= since
        ]


class EarlyStopPaging(RepoPagingStrategy):
    """
    Stop once a page contains a repository older than the cutoff.

    Listings are sorted by update time, so a partially filtered page signals
    that older repositories have started. Qualifying repositories sorted after
    that point are not fetched.
    """

    def filter_page(self, page, since):
        if since is None:
            return list(page), True
        kept = self._pushed_since(page, since)
        return kept, len(kept) == len(page)


class ExhaustivePaging(RepoPagingStrategy):
    """Filter every page; stop only on an empty page or the page cap."""

    def filter_page(self, page, since):
        if since is None:
            return list(page), True
        return self._pushed_since(page, since), True
