"""
Abstract Base Class for Activity Miners.

Defines the interface for reading one account's activity from a hosting
platform. The stats pipeline only depends on this contract.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from miners.models import RemoteCommit, RemoteRepository, RemoteUser


class ActivityMiner(ABC):
    """
    Abstract base class for activity miners.

    Implementations should handle:
    - Authentication with the hosting service
    - Pagination and its caps
    - Transformation of raw responses to the common models
    - Isolation of per-repository failures
    """

    username: str

    @abstractmethod
    async def get_user(self) -> RemoteUser:
        """
        Fetch the analysed account.

        Returns:
            RemoteUser: Account profile

        Raises:
            NotFound: If the account does not exist
            RemoteAPIError: On any other remote failure
        """
        pass

    @abstractmethod
    async def get_repos(
        self, since: Optional[datetime] = None
    ) -> List[RemoteRepository]:
        """
        List repositories pushed since the cutoff.

        Args:
            since (Optional[datetime]): Push-date cutoff

        Returns:
            List[RemoteRepository]: Qualifying repositories
        """
        pass

    @abstractmethod
    async def get_commits_for_repo(
        self, repo: RemoteRepository, since: datetime
    ) -> List[RemoteCommit]:
        """
        List the account's commits in one repository since the cutoff.

        Failures are absorbed into an empty list.

        Args:
            repo (RemoteRepository): Repository to read
            since (datetime): Commit-date cutoff

        Returns:
            List[RemoteCommit]: Commits stamped with the repository full name
        """
        pass

    @abstractmethod
    async def get_languages(self, repos: Sequence[RemoteRepository]) -> Dict[str, int]:
        """
        Sum language byte counts over a sample of repositories.

        Args:
            repos (Sequence[RemoteRepository]): Repositories to sample

        Returns:
            Dict[str, int]: Language name to cumulative bytes
        """
        pass
