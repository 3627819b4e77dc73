"""Shared fixtures."""

from datetime import datetime, timezone

import pytest

from analyzers.catalog import ActivitySummary
from analyzers.metrics import evaluate_achievements
from analyzers.models import CodingPattern, DeveloperProfile, GitHubStats, RepoCommitCount
from miners.models import RemoteCommit, RemoteRepository


def make_commit(sha, when, repository="octocat/hello-world"):
    return RemoteCommit(
        sha=sha,
        author_name="The Octocat",
        author_email="octocat@github.com",
        author_date=when,
        message=f"commit {sha}",
        repository=repository,
    )


def make_repo(full_name, pushed_at):
    return RemoteRepository(
        name=full_name.split("/")[-1],
        full_name=full_name,
        pushed_at=pushed_at,
        owner_login=full_name.split("/")[0],
    )


@pytest.fixture
def commit_factory():
    """Build RemoteCommit objects."""
    return make_commit


@pytest.fixture
def repo_factory():
    """Build RemoteRepository objects."""
    return make_repo


@pytest.fixture
def fixed_now():
    """A fixed wall-clock time inside 2024."""
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def empty_stats():
    """Statistics of a year without commits."""
    return GitHubStats(
        total_commits=0,
        total_repos=0,
        top_languages={},
        commits_by_hour=[0] * 24,
        commits_by_day=[0] * 7,
        longest_streak=0,
        current_streak=0,
        total_days_active=0,
        lines_added=0,
        lines_deleted=0,
        favorite_repo=RepoCommitCount(name="Various Projects", commits=0),
        top_repos=[],
        coding_pattern=CodingPattern.ALL_DAY_CODER,
        achievements=evaluate_achievements(ActivitySummary(0, 0, 0, 0)),
        developer_profile=DeveloperProfile.CODE_POET,
    )
