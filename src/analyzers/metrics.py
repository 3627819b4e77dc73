"""
Activity Metrics Module.

Pure functions deriving the wrapped statistics from collected commits:
- Hour-of-day and day-of-week histograms
- Activity streaks over distinct commit dates
- Coding pattern and developer profile classification
- Repository ranking, line estimates and achievements

Every function is deterministic except the random fallback of
``classify_developer_profile``.
"""

import math
import random
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from analyzers.catalog import (
    ACHIEVEMENT_CATALOG,
    CODING_WINDOWS,
    DEFAULT_CODING_PATTERN,
    FALLBACK_PROFILES,
    PROFILE_RULES,
    AchievementRule,
    ActivitySummary,
    ProfileSignals,
)
from analyzers.models import (
    Achievement,
    CodingPattern,
    DeveloperProfile,
    RepoCommitCount,
)
from miners.models import RemoteCommit

UNKNOWN_REPOSITORY = "Unknown"
LINES_PER_COMMIT = 15
ADDED_SHARE = 0.6
DELETED_SHARE = 0.4

FRAME_COLUMNS = ["hour", "weekday", "date", "repository"]


def commit_frame(commits: Sequence[RemoteCommit]) -> pd.DataFrame:
    """
    Tabulate commits by their own author timestamp.

    Weekday is 0 for Sunday through 6 for Saturday. No timezone conversion is
    applied; the hour and date are those the timestamp carries.

    Args:
        commits (Sequence[RemoteCommit]): Collected commits

    Returns:
        pd.DataFrame: One row per commit with hour, weekday, date, repository
    """
    rows = [
        (
            c.author_date.hour,
            c.author_date.isoweekday() % 7,
            c.author_date.date(),
            c.repository,
        )
        for c in commits
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def _bucket_counts(series: pd.Series, size: int) -> List[int]:
    counts = series.value_counts().reindex(range(size), fill_value=0)
    return [int(v) for v in counts.tolist()]


def commit_histograms(commits: Sequence[RemoteCommit]) -> Tuple[List[int], List[int]]:
    """
    Count commits per hour of day and per day of week.

    Returns:
        Tuple[List[int], List[int]]: 24 hourly buckets and 7 daily buckets
            (index 0 is Sunday), each summing to the number of commits
    """
    frame = commit_frame(commits)
    return _bucket_counts(frame["hour"], 24), _bucket_counts(frame["weekday"], 7)


def active_dates(commits: Sequence[RemoteCommit]) -> List[date]:
    """Distinct calendar dates with at least one commit, ascending."""
    frame = commit_frame(commits)
    return sorted(set(frame["date"].tolist()))


def compute_streaks(
    dates: Sequence[date], today: Optional[date] = None
) -> Tuple[int, int]:
    """
    Compute the longest and current runs of consecutive active days.

    The current streak is the trailing run, counted only when the latest
    active date is today or yesterday.

    Args:
        dates (Sequence[date]): Active dates, any order, duplicates allowed
        today (Optional[date]): Reference date, current UTC date by default

    Returns:
        Tuple[int, int]: (longest_streak, current_streak)
    """
    ordered = sorted(set(dates))
    if not ordered:
        return 0, 0

    longest = 0
    run = 1
    for previous, current in zip(ordered, ordered[1:]):
        if (current - previous).days == 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    longest = max(longest, run)

    today = today or datetime.now(timezone.utc).date()
    current_streak = run if ordered[-1] in (today, today - timedelta(days=1)) else 0
    return longest, current_streak


def window_totals(
    commits_by_hour: Sequence[int], windows=CODING_WINDOWS
) -> Dict[str, int]:
    """Sum hourly buckets per named coding window."""
    return {name: sum(commits_by_hour[h] for h in hours) for name, hours, _ in windows}


def classify_coding_pattern(
    commits_by_hour: Sequence[int],
    windows=CODING_WINDOWS,
    default: CodingPattern = DEFAULT_CODING_PATTERN,
) -> CodingPattern:
    """
    Label the time of day the account codes most.

    A window's label applies only when its total strictly exceeds every other
    window; ties and an evening maximum fall through to the default.

    Args:
        commits_by_hour (Sequence[int]): 24 hourly buckets
        windows: Ordered (name, hours, label) table
        default (CodingPattern): Label when no window strictly dominates

    Returns:
        CodingPattern: The coding pattern label
    """
    totals = window_totals(commits_by_hour, windows)
    for name, _, label in windows:
        others = [total for other, total in totals.items() if other != name]
        if all(totals[name] > total for total in others):
            return label
    return default


def count_commits_by_repo(commits: Sequence[RemoteCommit]) -> Dict[str, int]:
    """
    Count commits per repository full name.

    Unattributed commits are left out.
    """
    frame = commit_frame(commits)
    names = frame["repository"].dropna()
    names = names[names != UNKNOWN_REPOSITORY]
    counts = names.value_counts(sort=False)
    return {str(name): int(count) for name, count in counts.items()}


def rank_top_repos(repo_counts: Dict[str, int], limit: int = 3) -> List[RepoCommitCount]:
    """Repositories with the most commits, descending, at most ``limit``."""
    if not repo_counts:
        return []
    ranked = pd.Series(repo_counts).sort_values(ascending=False, kind="stable")
    return [
        RepoCommitCount(name=str(name), commits=int(count))
        for name, count in ranked.head(limit).items()
    ]


def pick_favorite_repo(
    top_repos: Sequence[RepoCommitCount], total_commits: int, sentinel: str
) -> RepoCommitCount:
    """The top repository, or the sentinel carrying the total commit count."""
    if top_repos:
        return top_repos[0]
    return RepoCommitCount(name=sentinel, commits=total_commits)


def estimate_lines(commit_count: int) -> Tuple[int, int]:
    """
    Estimate lines added and deleted from the commit count.

    This is a fixed proportional model, not a diff measurement.

    Returns:
        Tuple[int, int]: (lines_added, lines_deleted)
    """
    estimated = commit_count * LINES_PER_COMMIT
    return math.floor(estimated * ADDED_SHARE), math.floor(estimated * DELETED_SHARE)


def evaluate_achievements(
    summary: ActivitySummary,
    catalog: Sequence[AchievementRule] = ACHIEVEMENT_CATALOG,
) -> List[Achievement]:
    """Evaluate every catalog badge, locked ones included, in catalog order."""
    return [rule.evaluate(summary) for rule in catalog]


def classify_developer_profile(
    total_commits: int,
    language_count: int,
    commits_by_day: Sequence[int],
    rules=PROFILE_RULES,
    fallback: Sequence[DeveloperProfile] = FALLBACK_PROFILES,
    rng: Optional[random.Random] = None,
) -> DeveloperProfile:
    """
    Pick the developer profile label.

    Rules are tried in order and the first match wins. Without a match one of
    the fallback labels is chosen uniformly at random.

    Args:
        total_commits (int): Commits in the year
        language_count (int): Distinct languages sampled
        commits_by_day (Sequence[int]): 7 daily buckets, index 0 is Sunday
        rules: Ordered (label, predicate) table
        fallback (Sequence[DeveloperProfile]): Labels for the random pick
        rng (Optional[random.Random]): Random source, module random by default

    Returns:
        DeveloperProfile: The profile label
    """
    signals = ProfileSignals(
        total_commits=total_commits,
        language_count=language_count,
        weekend_commits=commits_by_day[0] + commits_by_day[6],
        weekday_commits=sum(commits_by_day[1:6]),
    )
    for label, predicate in rules:
        if predicate(signals):
            return label
    return (rng or random).choice(list(fallback))
