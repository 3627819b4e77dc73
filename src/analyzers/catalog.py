"""
Static classification tables.

Achievement badges, developer-profile rules and coding windows are plain data
passed into the metrics functions, so alternative tables can be supplied.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from analyzers.models import Achievement, CodingPattern, DeveloperProfile


@dataclass(frozen=True)
class ActivitySummary:
    """Inputs the achievement predicates look at."""

    commits: int
    longest_streak: int
    languages: int
    repos: int


@dataclass(frozen=True)
class AchievementRule:
    """One catalog badge: copy plus an unlock predicate."""

    id: str
    title: str
    description: str  # may reference {commits}
    icon: str
    predicate: Callable[[ActivitySummary], bool]

    def evaluate(self, summary: ActivitySummary) -> Achievement:
        return Achievement(
            id=self.id,
            title=self.title,
            description=self.description.format(commits=summary.commits),
            icon=self.icon,
            unlocked=bool(self.predicate(summary)),
        )


ACHIEVEMENT_CATALOG: Tuple[AchievementRule, ...] = (
    AchievementRule(
        "active-year",
        "Active Year",
        "Made {commits} commits this year",
        "⭐",
        lambda s: s.commits >= 10,
    ),
    AchievementRule(
        "century",
        "Century Club",
        "Reached 100 commits this year",
        "💯",
        lambda s: s.commits >= 100,
    ),
    AchievementRule(
        "commit-machine",
        "Commit Machine",
        "Made 500+ commits this year",
        "🤖",
        lambda s: s.commits >= 500,
    ),
    AchievementRule(
        "streak-master",
        "Streak Master",
        "Maintained a 30-day streak",
        "🔥",
        lambda s: s.longest_streak >= 30,
    ),
    AchievementRule(
        "consistency",
        "Consistent Coder",
        "Maintained a 7-day streak",
        "📅",
        lambda s: s.longest_streak >= 7,
    ),
    AchievementRule(
        "polyglot",
        "Polyglot",
        "Coded in 5+ languages",
        "🌐",
        lambda s: s.languages >= 5,
    ),
    AchievementRule(
        "repo-collector",
        "Repo Collector",
        "Created 10+ repositories",
        "📚",
        lambda s: s.repos >= 10,
    ),
)


@dataclass(frozen=True)
class ProfileSignals:
    """Inputs the developer-profile rules look at."""

    total_commits: int
    language_count: int
    weekend_commits: int
    weekday_commits: int


# First match wins.
PROFILE_RULES: Tuple[Tuple[DeveloperProfile, Callable[[ProfileSignals], bool]], ...] = (
    (
        DeveloperProfile.WEEKEND_WARRIOR,
        lambda s: s.weekend_commits > s.weekday_commits * 0.4,
    ),
    (DeveloperProfile.COMMIT_MACHINE, lambda s: s.total_commits > 1000),
    (DeveloperProfile.LANGUAGE_EXPLORER, lambda s: s.language_count > 10),
    (DeveloperProfile.FEATURE_FACTORY, lambda s: s.total_commits > 500),
)

# Picked uniformly at random when no rule matches.
FALLBACK_PROFILES: Tuple[DeveloperProfile, ...] = (
    DeveloperProfile.REFACTOR_ADDICT,
    DeveloperProfile.BUG_SQUASHER,
    DeveloperProfile.CODE_POET,
    DeveloperProfile.OPEN_SOURCE_HERO,
)

# Hour windows in tie-break priority order. Evening has no label of its own.
CODING_WINDOWS: Tuple[Tuple[str, Tuple[int, ...], CodingPattern], ...] = (
    ("night", (22, 23, 0, 1, 2, 3, 4, 5), CodingPattern.NIGHT_OWL),
    ("morning", tuple(range(6, 12)), CodingPattern.EARLY_BIRD),
    ("afternoon", tuple(range(12, 18)), CodingPattern.AFTERNOON_CODER),
    ("evening", tuple(range(18, 22)), CodingPattern.ALL_DAY_CODER),
)

DEFAULT_CODING_PATTERN = CodingPattern.ALL_DAY_CODER
