"""Configuration for the GitHub sync engine."""

import os

from pydantic import BaseModel, Field, ValidationError

from .github_client.fetcher import DEFAULT_TIMEOUT
from .github_client.repo_url import DEFAULT_HOST
from .github_client.request_builder import DEFAULT_API_URL, DEFAULT_PER_PAGE


class Settings(BaseModel):
    """Connection settings, usually read from environment variables."""

    token: str | None = Field(None, description="GitHub token (GITHUB_TOKEN)")
    api_url: str = Field(DEFAULT_API_URL, description="REST API base URL")
    host: str = Field(DEFAULT_HOST, description="Host of repository URLs")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="HTTP timeout (s)")
    per_page: int = Field(DEFAULT_PER_PAGE, ge=1, le=100, description="Page size")
    max_retries: int = Field(3, ge=1, description="Attempts per step when retrying")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``GITHUB_*`` environment variables.

        Raises:
            ValueError: If a numeric variable is not a valid value
        """
        values: dict[str, str] = {}
        for field, variable in (
            ("token", "GITHUB_TOKEN"),
            ("api_url", "GITHUB_API_URL"),
            ("host", "GITHUB_HOST"),
            ("timeout", "GITHUB_TIMEOUT"),
            ("per_page", "GITHUB_PER_PAGE"),
            ("max_retries", "GITHUB_SYNC_MAX_RETRIES"),
        ):
            value = os.getenv(variable)
            if value:
                values[field] = value
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ValueError(f"Invalid GitHub sync configuration: {e}") from e

    def require_token(self) -> str:
        """Return the token, raising if none is configured."""
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )
        return self.token
