"""
GitHub Activity Mining Module.

This module reads one account's yearly activity from the GitHub REST API:
the profile, the repositories pushed during the year, the commits the account
authored in them and the languages they use. Raw PyGithub objects are
transformed into Pydantic models.

Listings are fetched page by page with fixed caps. Failures reading a single
repository never abort the whole run.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from github import (
    Auth,
    Github,
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)
from github.Commit import Commit
from github.NamedUser import NamedUser
from github.PaginatedList import PaginatedList
from github.Repository import Repository
from requests.exceptions import RequestException, Timeout
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from config import settings, logger
from miners.base import ActivityMiner
from miners.errors import MinerError, NotFound, RemoteAPIError
from miners.models import RemoteCommit, RemoteRepository, RemoteUser
from miners.paging import EarlyStopPaging, RepoPagingStrategy
from miners.pool import run_bounded

OWN_AFFILIATION = "owner,collaborator,organization_member"


def _is_transient(error: BaseException) -> bool:
    """5xx and 429 responses are worth retrying."""
    if isinstance(error, RateLimitExceededException):
        return False
    if isinstance(error, GithubException):
        return error.status == 429 or (error.status or 0) >= 500
    return False


class GitHubMiner(ActivityMiner):
    """
    GitHubMiner reads an account's activity from GitHub.

    Repository listing depends on whose profile is analysed: the signed-in
    user's own profile lists owned, collaborator and organization repositories;
    any other profile lists only repositories the account owns.
    """

    def __init__(
        self,
        username: str,
        token: Optional[str] = None,
        is_own_profile: bool = False,
        paging: Optional[RepoPagingStrategy] = None,
        github: Optional[Github] = None,
        retry_wait: Optional[Any] = None,
    ):
        """Initialize GitHub miner with authentication and configuration.

        Args:
            username (str): Login of the analysed account.
            token (Optional[str]): Bearer token; anonymous access when None.
            is_own_profile (bool): Whether the token belongs to ``username``.
            paging (Optional[RepoPagingStrategy]): Repository page filter,
                early-stop by default.
            github (Optional[Github]): Preconfigured client, mostly for tests.
            retry_wait (Optional[Any]): tenacity wait strategy for retries.
        """
        self.username = username
        self.is_own_profile = is_own_profile
        self.authenticated = bool(token)
        self.paging = paging or EarlyStopPaging()
        self.github = github or Github(
            auth=Auth.Token(token) if token else None,
            base_url=settings.github_api_url,
            timeout=settings.request_timeout,
            per_page=settings.page_size,
            retry=None,
        )
        self._lazy_github = self.github.withLazy(True)
        self.repo_page_cap = settings.repo_page_cap
        self.commit_page_cap = settings.commit_page_cap
        self.language_repo_cap = settings.language_repo_cap
        self.max_concurrency = settings.max_concurrency
        self._retrying = Retrying(
            retry=retry_if_exception(_is_transient),
            stop=stop_after_attempt(settings.max_retries),
            wait=retry_wait or wait_exponential(multiplier=1, min=1, max=10),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        self._named_user: Optional[NamedUser] = None

    def _fetch(self, fn: Callable, *args, **kwargs):
        """Run one blocking GitHub call with retries on transient failures."""
        return self._retrying(fn, *args, **kwargs)

    def _fetch_page(self, listing: PaginatedList, page: int) -> List[Any]:
        """
        Fetch one page of a listing.

        Args:
            listing (PaginatedList): PyGithub listing
            page (int): Zero-based page index

        Returns:
            List[Any]: Page items; empty for repositories without history (409)
        """
        try:
            return self._fetch(listing.get_page, page)
        except GithubException as e:
            if e.status == 409:
                return []
            raise

    def _remote_error(self, error: Exception) -> MinerError:
        """Translate a PyGithub or transport error into a miner error."""
        if isinstance(error, MinerError):
            return error
        if isinstance(error, Timeout):
            return RemoteAPIError("timeout")
        if isinstance(error, RateLimitExceededException):
            return RemoteAPIError("rate limit exceeded", error.status)
        if isinstance(error, GithubException):
            return RemoteAPIError.from_status(error.status)
        return RemoteAPIError(str(error) or type(error).__name__)

    def _check_rate_limit(self, check_name: str) -> None:
        """
        Check and log the GitHub API rate limit status.

        Args:
            check_name (str): Identifier for the rate limit check point.

        Raises:
            RemoteAPIError: When the rate limit is exhausted.
        """
        remaining, limit = self.github.rate_limiting
        reset_time = datetime.fromtimestamp(
            self.github.rate_limiting_resettime, tz=timezone.utc
        )
        now = datetime.now(timezone.utc)

        logger.info(
            {
                "message": f"{check_name} API rate limit status",
                "remaining_points": remaining,
                "total_points": limit,
                "reset_time": reset_time.isoformat(),
                "minutes_to_reset": (reset_time - now).total_seconds() / 60,
            }
        )

        # If less than 10% of rate limit remains, log a warning
        if 0 < remaining < limit * 0.1:
            logger.warning(
                {
                    "message": "GitHub API rate limit running low",
                    "remaining_points": remaining,
                    "reset_time": reset_time.isoformat(),
                }
            )

        if remaining == 0:
            logger.critical(
                {
                    "message": "GitHub API rate limit exhausted",
                    "reset_time": reset_time.isoformat(),
                    "wait_time_seconds": (reset_time - now).total_seconds(),
                }
            )
            raise RemoteAPIError("rate limit exceeded", 403)

    def _get_user_data(self, user: NamedUser) -> RemoteUser:
        return RemoteUser(
            login=user.login,
            name=user.name,
            avatar_url=user.avatar_url,
            public_repos=user.public_repos or 0,
            followers=user.followers or 0,
            following=user.following or 0,
            created_at=user.created_at,
        )

    def _get_repo_data(self, repo: Repository) -> RemoteRepository:
        """Convert a GitHub Repository object to a Pydantic model.

        Args:
            repo (Repository): The GitHub Repository object.

        Returns:
            RemoteRepository: A Pydantic model representing the repository.
        """
        can_push = None
        if self.authenticated and repo.permissions is not None:
            can_push = repo.permissions.push
        return RemoteRepository(
            name=repo.name,
            full_name=repo.full_name,
            description=repo.description,
            stargazers_count=repo.stargazers_count or 0,
            language=repo.language,
            created_at=repo.created_at,
            updated_at=repo.updated_at,
            pushed_at=repo.pushed_at,
            owner_login=repo.owner.login if repo.owner else None,
            can_push=can_push,
        )

    def _get_commit_data(self, commit: Commit, full_name: str) -> RemoteCommit:
        """Convert a GitHub Commit object to a Pydantic model.

        Args:
            commit (Commit): The GitHub Commit object.
            full_name (str): Repository the commit was listed from.

        Returns:
            RemoteCommit: A Pydantic model stamped with its repository.
        """
        git_commit = commit.commit
        author = git_commit.author
        return RemoteCommit(
            sha=commit.sha,
            author_name=author.name,
            author_email=author.email,
            author_date=author.date,
            message=git_commit.message or "",
            repository=full_name,
        )

    def _load_user(self) -> RemoteUser:
        user = self._fetch(self.github.get_user, self.username)
        self._named_user = user
        return self._get_user_data(user)

    def _repo_listing(self) -> PaginatedList:
        if self.is_own_profile:
            return self.github.get_user().get_repos(
                affiliation=OWN_AFFILIATION, sort="updated"
            )
        if self._named_user is None:
            self._named_user = self._fetch(self.github.get_user, self.username)
        return self._named_user.get_repos(type="owner", sort="updated")

    def _load_repo_page(self, listing: PaginatedList, page: int) -> List[RemoteRepository]:
        return [self._get_repo_data(repo) for repo in self._fetch_page(listing, page)]

    def _load_commits(self, full_name: str, since: datetime) -> List[RemoteCommit]:
        repo = self._lazy_github.get_repo(full_name)
        listing = repo.get_commits(since=since, author=self.username)
        commits = []
        for page in range(self.commit_page_cap):
            items = self._fetch_page(listing, page)
            if not items:
                break
            commits.extend(self._get_commit_data(item, full_name) for item in items)
        return commits

    def _load_languages(self, full_name: str) -> Dict[str, int]:
        repo = self._lazy_github.get_repo(full_name)
        try:
            data = self._fetch(repo.get_languages)
        except GithubException as e:
            if e.status == 409:
                return {}
            raise
        # PyGithub stamps a "url" entry onto dict responses
        return {
            language: size
            for language, size in data.items()
            if isinstance(size, int) and not isinstance(size, bool)
        }

    async def get_user(self) -> RemoteUser:
        """
        Fetch the analysed account profile.

        Returns:
            RemoteUser: Account profile

        Raises:
            NotFound: If GitHub answers 404.
            RemoteAPIError: On any other non-2xx answer or a timeout.
        """
        try:
            return await asyncio.to_thread(self._load_user)
        except UnknownObjectException as e:
            raise NotFound("user") from e
        except (GithubException, RequestException) as e:
            logger.error(
                {
                    "message": "User lookup failed",
                    "username": self.username,
                    "error": str(e),
                }
            )
            raise self._remote_error(e) from e

    async def get_repos(
        self, since: Optional[datetime] = None
    ) -> List[RemoteRepository]:
        """
        List repositories pushed since the cutoff, at most ``repo_page_cap`` pages.

        Args:
            since (Optional[datetime]): Push-date cutoff, filtered client side.

        Returns:
            List[RemoteRepository]: Qualifying repositories in listing order

        Raises:
            NotFound: If the analysed account does not exist.
            RemoteAPIError: On any other remote failure.
        """
        repos: List[RemoteRepository] = []
        try:
            listing = await asyncio.to_thread(self._repo_listing)
            for page in range(self.repo_page_cap):
                items = await asyncio.to_thread(self._load_repo_page, listing, page)
                if not items:
                    break
                kept, more = self.paging.filter_page(items, since)
                repos.extend(kept)
                logger.debug(
                    {
                        "message": "Repository page filtered",
                        "username": self.username,
                        "page": page + 1,
                        "matched": len(kept),
                        "total": len(items),
                    }
                )
                if not more:
                    break
            await asyncio.to_thread(self._check_rate_limit, "Repository listing")
        except UnknownObjectException as e:
            raise NotFound("user") from e
        except (GithubException, RequestException) as e:
            raise self._remote_error(e) from e

        logger.info(
            {
                "message": "Repositories found",
                "username": self.username,
                "count": len(repos),
                "access": "all" if self.is_own_profile else "public",
            }
        )
        return repos

    async def get_commits_for_repo(
        self, repo: RemoteRepository, since: datetime
    ) -> List[RemoteCommit]:
        """
        List commits authored by the account in one repository.

        Args:
            repo (RemoteRepository): Repository to read.
            since (datetime): Commit-date cutoff.

        Returns:
            List[RemoteCommit]: Commits stamped with ``repo.full_name``; empty
                when the repository cannot be read.
        """
        try:
            return await asyncio.to_thread(self._load_commits, repo.full_name, since)
        except (GithubException, RequestException) as e:
            logger.error(
                {
                    "message": "Failed to fetch commits",
                    "repository": repo.full_name,
                    "error": str(self._remote_error(e)),
                }
            )
            return []

    async def get_languages(self, repos: Sequence[RemoteRepository]) -> Dict[str, int]:
        """
        Sum language byte counts over the first ``language_repo_cap`` repositories.

        Args:
            repos (Sequence[RemoteRepository]): Repositories to sample.

        Returns:
            Dict[str, int]: Language name to cumulative bytes.
        """

        async def load(repo: RemoteRepository) -> Dict[str, int]:
            try:
                return await asyncio.to_thread(self._load_languages, repo.full_name)
            except (GithubException, RequestException) as e:
                logger.error(
                    {
                        "message": "Failed to fetch languages",
                        "repository": repo.full_name,
                        "error": str(self._remote_error(e)),
                    }
                )
                return {}

        sampled = list(repos)[: self.language_repo_cap]
        per_repo = await run_bounded(
            sampled,
            load,
            self.max_concurrency,
            fallback=dict,
            label=lambda r: r.full_name,
        )

        languages: Dict[str, int] = {}
        for repo_languages in per_repo:
            for language, size in repo_languages.items():
                languages[language] = languages.get(language, 0) + size
        return languages
