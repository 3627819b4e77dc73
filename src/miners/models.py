"""
Repository Mining Data Models.

Defines the models for the GitHub data the miner reads: the account, its
repositories and the commits authored in them.
Uses Pydantic for validation and serialization.
"""

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel


class RemoteUser(BaseModel):
    """GitHub account profile."""

    login: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: Optional[datetime] = None


class RemoteRepository(BaseModel):
    """Repository as returned by a repository listing."""

    name: str
    full_name: str  # owner/name, unique within a request
    description: Optional[str] = None
    stargazers_count: int = 0
    language: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    pushed_at: Optional[datetime] = None
    owner_login: Optional[str] = None
    can_push: Optional[bool] = None


class RemoteCommit(BaseModel):
    """Commit authored by the analysed user, stamped with its repository."""

    sha: str
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    author_date: datetime
    message: str = ""
    repository: Optional[str] = None

    @property
    def identity(self) -> Tuple[Optional[str], str]:
        """(repository, sha) pair; a sha alone is not unique across repositories."""
        return (self.repository, self.sha)
