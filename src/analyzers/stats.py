"""
Wrapped Statistics Assembly Module.

Orchestrates the miner, the commit aggregator and the metrics functions into
one immutable GitHubStats object per account for the current calendar year.

Only NotFound and RemoteAPIError reach the caller; per-repository failures
are absorbed further down.
"""

import asyncio
import random
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from config import settings, logger
from analyzers.aggregator import CommitAggregator
from analyzers.catalog import ActivitySummary
from analyzers.metrics import (
    active_dates,
    classify_coding_pattern,
    classify_developer_profile,
    commit_histograms,
    compute_streaks,
    count_commits_by_repo,
    estimate_lines,
    evaluate_achievements,
    pick_favorite_repo,
    rank_top_repos,
)
from analyzers.models import GitHubStats
from miners.base import ActivityMiner
from miners.errors import RemoteAPIError
from miners.github_miner import GitHubMiner


def year_window(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    The analysed window: Jan 1 00:00:00Z of the current year up to now.

    Returns:
        Tuple[datetime, datetime]: (since, now), both UTC
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    since = datetime(now.year, 1, 1, tzinfo=timezone.utc)
    return since, now


class StatsAssembler:
    """
    Builds the wrapped statistics for the miner's account.

    Attributes:
        miner (ActivityMiner): Source of account data
        aggregator (CommitAggregator): Commit collection across repositories
        favorite_sentinel (str): Favorite repository name when none is attributed
    """

    def __init__(
        self,
        miner: ActivityMiner,
        aggregator: Optional[CommitAggregator] = None,
        favorite_sentinel: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.miner = miner
        self.aggregator = aggregator or CommitAggregator(miner)
        self.favorite_sentinel = favorite_sentinel or settings.favorite_repo_sentinel
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.rng = rng

    async def build(self) -> GitHubStats:
        """
        Fetch the account activity and derive its statistics.

        Returns:
            GitHubStats: Statistics for the current year

        Raises:
            NotFound: If the account does not exist
            RemoteAPIError: On remote failures outside a single repository
        """
        username = self.miner.username
        logger.info({"message": "Building wrapped statistics", "username": username})

        await self.miner.get_user()
        since, now = year_window(self.clock())

        repos = await self.miner.get_repos(since)
        commits, languages = await asyncio.gather(
            self.aggregator.collect_commits(username, since, repos),
            self.miner.get_languages(repos),
        )

        commits_by_hour, commits_by_day = commit_histograms(commits)
        dates = active_dates(commits)
        longest_streak, current_streak = compute_streaks(dates, today=now.date())

        top_repos = rank_top_repos(count_commits_by_repo(commits))
        lines_added, lines_deleted = estimate_lines(len(commits))

        summary = ActivitySummary(
            commits=len(commits),
            longest_streak=longest_streak,
            languages=len(languages),
            repos=len(repos),
        )

        stats = GitHubStats(
            total_commits=len(commits),
            total_repos=len(repos),
            top_languages=languages,
            commits_by_hour=commits_by_hour,
            commits_by_day=commits_by_day,
            longest_streak=longest_streak,
            current_streak=current_streak,
            total_days_active=len(dates),
            lines_added=lines_added,
            lines_deleted=lines_deleted,
            favorite_repo=pick_favorite_repo(
                top_repos, len(commits), self.favorite_sentinel
            ),
            top_repos=top_repos,
            coding_pattern=classify_coding_pattern(commits_by_hour),
            achievements=evaluate_achievements(summary),
            developer_profile=classify_developer_profile(
                len(commits), len(languages), commits_by_day, rng=self.rng
            ),
        )

        logger.info(
            {
                "message": "Wrapped statistics built",
                "username": username,
                "total_commits": stats.total_commits,
                "total_repos": stats.total_repos,
                "longest_streak": stats.longest_streak,
            }
        )
        return stats

    async def build_within(self, deadline: Optional[float] = None) -> GitHubStats:
        """
        Build the statistics under an overall deadline.

        Args:
            deadline (Optional[float]): Seconds allowed, ``request_deadline``
                by default

        Raises:
            RemoteAPIError: With status text "timeout" when the deadline expires
        """
        deadline = deadline or settings.request_deadline
        try:
            return await asyncio.wait_for(self.build(), timeout=deadline)
        except asyncio.TimeoutError as e:
            logger.error(
                {
                    "message": "Statistics deadline expired",
                    "username": self.miner.username,
                    "deadline_seconds": deadline,
                }
            )
            raise RemoteAPIError("timeout") from e


async def compute_stats(
    username: str, token: Optional[str] = None, is_own_profile: bool = False
) -> GitHubStats:
    """
    Compute wrapped statistics with a fresh miner and aggregator.

    Args:
        username (str): Account login
        token (Optional[str]): Bearer token
        is_own_profile (bool): Whether the token belongs to ``username``

    Returns:
        GitHubStats: Statistics for the current year
    """
    miner = GitHubMiner(username, token=token, is_own_profile=is_own_profile)
    return await StatsAssembler(miner).build_within()
