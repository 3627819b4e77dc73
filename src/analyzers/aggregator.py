"""
Commit Aggregation Module.

Collects the commits an account authored during the year across its most
recently pushed repositories. Per-repository fetches run in a bounded worker
pool; a repository that fails or has no commits contributes nothing.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from config import settings, logger
from miners.base import ActivityMiner
from miners.models import RemoteCommit, RemoteRepository
from miners.pool import run_bounded


class CommitAggregator:
    """
    Merges per-repository commit listings into one commit set.

    Attributes:
        miner (ActivityMiner): Source of repositories and commits
        max_concurrency (int): Per-repository fetches allowed in flight
        fanout_cap (int): Most recently pushed repositories scanned
    """

    def __init__(
        self,
        miner: ActivityMiner,
        max_concurrency: Optional[int] = None,
        fanout_cap: Optional[int] = None,
    ):
        self.miner = miner
        self.max_concurrency = max_concurrency or settings.max_concurrency
        self.fanout_cap = fanout_cap or settings.repo_fanout_cap

    def select_repositories(
        self, repos: Sequence[RemoteRepository]
    ) -> List[RemoteRepository]:
        """
        Keep the ``fanout_cap`` most recently pushed repositories.

        Repositories without a push date sort last.
        """
        ordered = sorted(
            repos,
            key=lambda r: r.pushed_at.timestamp() if r.pushed_at else float("-inf"),
            reverse=True,
        )
        return ordered[: self.fanout_cap]

    async def collect_commits(
        self,
        username: str,
        since: datetime,
        repos: Optional[Sequence[RemoteRepository]] = None,
    ) -> List[RemoteCommit]:
        """
        Collect commits authored by ``username`` since the cutoff.

        Args:
            username (str): Author login; must be the miner's account.
            since (datetime): Cutoff for repositories and commits.
            repos (Optional[Sequence[RemoteRepository]]): Already listed
                repositories; listed through the miner when None.

        Returns:
            List[RemoteCommit]: Commits concatenated in repository order,
                without duplicate (repository, sha) pairs.

        Raises:
            ValueError: If ``username`` is not the miner's account.
        """
        if username.lower() != self.miner.username.lower():
            raise ValueError(
                f"aggregator bound to {self.miner.username}, asked for {username}"
            )

        if repos is None:
            repos = await self.miner.get_repos(since)

        selected = self.select_repositories(repos)
        logger.info(
            {
                "message": "Analyzing repositories for commits",
                "username": username,
                "repositories": len(selected),
                "available": len(repos),
            }
        )

        per_repo = await run_bounded(
            selected,
            lambda repo: self.miner.get_commits_for_repo(repo, since),
            self.max_concurrency,
            fallback=list,
            label=lambda repo: repo.full_name,
        )

        commits: List[RemoteCommit] = []
        seen = set()
        for repo, repo_commits in zip(selected, per_repo):
            if not repo_commits:
                continue
            logger.debug(
                {
                    "message": "Repository commits collected",
                    "repository": repo.full_name,
                    "commits": len(repo_commits),
                }
            )
            for commit in repo_commits:
                if commit.identity in seen:
                    continue
                seen.add(commit.identity)
                commits.append(commit)

        logger.info(
            {
                "message": "Total commits collected",
                "username": username,
                "commits": len(commits),
            }
        )
        return commits
