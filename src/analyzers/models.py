"""
Wrapped Statistics Models.

Defines the statistics object produced for one account and one calendar year,
and the closed label sets it uses. Serialized with camelCase field names for
the slide and preview consumers.
Uses Pydantic for validation and serialization.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CodingPattern(str, Enum):
    """
    Time-of-day classification of commit activity.

    Attributes:
        NIGHT_OWL: Most commits between 22:00 and 06:00
        EARLY_BIRD: Most commits between 06:00 and 12:00
        AFTERNOON_CODER: Most commits between 12:00 and 18:00
        ALL_DAY_CODER: No single window dominates
    """

    NIGHT_OWL = "Night Owl"
    EARLY_BIRD = "Early Bird"
    AFTERNOON_CODER = "Afternoon Coder"
    ALL_DAY_CODER = "All Day Coder"


class DeveloperProfile(str, Enum):
    """Developer profile labels."""

    REFACTOR_ADDICT = "Refactor Addict"
    COMMIT_MACHINE = "Commit Machine"
    LANGUAGE_EXPLORER = "Language Explorer"
    OPEN_SOURCE_HERO = "Open Source Hero"
    BUG_SQUASHER = "Bug Squasher"
    FEATURE_FACTORY = "Feature Factory"
    CODE_POET = "Code Poet"
    WEEKEND_WARRIOR = "Weekend Warrior"


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class Achievement(_Frozen):
    """Badge from the achievement catalog."""

    id: str
    title: str
    description: str
    icon: str
    unlocked: bool


class RepoCommitCount(_Frozen):
    """Commit count attributed to one repository."""

    name: str
    commits: int = Field(ge=0)


class GitHubStats(_Frozen):
    """Statistics for one account over the current calendar year."""

    total_commits: int = Field(ge=0)
    total_repos: int = Field(ge=0)
    top_languages: Dict[str, int]
    commits_by_hour: List[int]
    commits_by_day: List[int]
    longest_streak: int = Field(ge=0)
    current_streak: int = Field(ge=0)
    total_days_active: int = Field(ge=0)
    lines_added: int = Field(ge=0)
    lines_deleted: int = Field(ge=0)
    favorite_repo: RepoCommitCount
    top_repos: List[RepoCommitCount] = Field(max_length=3)
    coding_pattern: CodingPattern
    achievements: List[Achievement]
    developer_profile: DeveloperProfile

    @model_validator(mode="after")
    def check_consistency(self) -> "GitHubStats":
        """
        Validate the histogram shapes and totals.

        Raises:
            ValueError: If a histogram has the wrong length or total, or the
                current streak exceeds the longest one
        """
        if len(self.commits_by_hour) != 24:
            raise ValueError("commits_by_hour must have 24 buckets")
        if len(self.commits_by_day) != 7:
            raise ValueError("commits_by_day must have 7 buckets")
        if any(v < 0 for v in self.commits_by_hour + self.commits_by_day):
            raise ValueError("histogram buckets must be non-negative")
        if sum(self.commits_by_hour) != self.total_commits:
            raise ValueError("commits_by_hour must sum to total_commits")
        if sum(self.commits_by_day) != self.total_commits:
            raise ValueError("commits_by_day must sum to total_commits")
        if self.current_streak > self.longest_streak:
            raise ValueError("current_streak cannot exceed longest_streak")
        return self

    @property
    def total_lines(self) -> int:
        """Estimated lines touched, added plus deleted."""
        return self.lines_added + self.lines_deleted
