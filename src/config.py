"""
Application Configuration Module.

Manages application settings and environment variables using Pydantic for validation.
Provides centralized configuration management with type safety and validation.

Features:
- Environment variable loading and validation
- Secure credential management
- Remote API limits (page caps, fan-out caps, timeouts)
- Logger initialization
"""

from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logger import LogManager


class Settings(BaseSettings):
    """
    Application configuration settings with validation.

    Manages and validates all application settings including:
    - Application identification
    - GitHub authentication and API limits
    - Logging settings
    - HTTP server binding

    Attributes:
        app_name (str): Name of the application
        dev (bool): Debug mode flag
        log_dir (str): Directory for log files
        log_level (int): Logging level (default: info)
        github_token (Optional[SecretStr]): Fallback GitHub token used when
            no session credential is available
        github_api_url (str): GitHub REST API base URL
        request_timeout (int): Per-call timeout in seconds
        request_deadline (int): Overall deadline for one stats computation
        max_concurrency (int): Per-repository fetches allowed in flight
    """

    # Application settings
    app_name: str = Field(default="GitWrapped", description="Application name")
    dev: bool = Field(default=False, description="Debug mode")
    log_dir: str = Field(default="logs", description="Logging directory")
    log_level: int = Field(default=20, description="Logging level, default info")

    # GitHub configuration
    github_token: Optional[SecretStr] = Field(
        default=None, description="Service-level fallback GitHub token"
    )
    github_api_url: str = Field(
        default="https://api.github.com", description="GitHub REST API base URL"
    )
    request_timeout: int = Field(default=10, description="Per-call timeout, seconds")
    request_deadline: int = Field(
        default=120, description="Deadline for one stats computation, seconds"
    )
    max_concurrency: int = Field(
        default=5, description="Per-repository fetches allowed in flight"
    )
    max_retries: int = Field(
        default=3, description="Attempts for transient GitHub failures"
    )

    # Pagination and fan-out limits
    page_size: int = Field(default=100, description="Listing page size")
    repo_page_cap: int = Field(default=5, description="Repository listing page cap")
    commit_page_cap: int = Field(default=2, description="Commit listing page cap")
    repo_fanout_cap: int = Field(
        default=50, description="Repositories scanned for commits"
    )
    language_repo_cap: int = Field(
        default=30, description="Repositories sampled for languages"
    )

    favorite_repo_sentinel: str = Field(
        default="Various Projects",
        description="Favorite repository name when no repository can be attributed",
    )

    # HTTP server
    host: str = Field(default="127.0.0.1", description="Bind host")
    port: int = Field(default=8000, description="Bind port")

    @property
    def fallback_token(self) -> Optional[str]:
        """
        Get the service-level token as a plain string.

        Returns:
            Optional[str]: The token, or None when not configured
        """
        if self.github_token is None:
            return None
        return self.github_token.get_secret_value() or None

    @field_validator("max_concurrency")
    def ensure_bounded_concurrency(cls, v: int) -> int:
        """
        Ensure the worker pool size stays within 1..10.

        Args:
            v (int): Requested pool size

        Returns:
            int: Validated pool size

        Raises:
            ValueError: If the value is outside 1..10
        """
        if not 1 <= v <= 10:
            raise ValueError("max_concurrency must be between 1 and 10")
        return v

    # Configure env file loading
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )


# Create global settings instance
settings = Settings()

# Initialize logging configuration
logger = LogManager(
    app_name=settings.app_name.lower(),
    log_dir=settings.log_dir,
    development=settings.dev,
    level=settings.log_level,
).logger
