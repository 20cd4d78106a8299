"""Flattened row shapes handed to the host's sync tables."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Row(BaseModel):
    """Base class for table rows. Rows are never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    def to_record(self) -> dict[str, Any]:
        """Plain JSON-compatible record for the host's schema layer."""
        return self.model_dump(mode="json")


class RepoRow(Row):
    """One row of the Repos table."""

    id: int = Field(..., description="Repository id")
    name: str = Field(..., description="Repository name, used for search")
    full_name: str = Field(..., description="owner/name")
    url: str = Field(..., description="Repository web URL")
    owner: str | None = Field(None, description="Owner login")
    description: str | None = None
    private: bool = False
    fork: bool = False
    archived: bool = False
    default_branch: str | None = None
    language: str | None = None
    stars: int | None = None
    open_issues: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None


class PullRequestRow(Row):
    """One row of the PullRequests table."""

    id: int = Field(..., description="Pull request id")
    number: int = Field(..., description="Pull request number within the repo")
    url: str = Field(..., description="Pull request web URL")
    title: str = ""
    body: str | None = None
    state: str | None = None
    draft: bool = False
    author: str | None = Field(None, description="Login of the opener")
    author_url: str | None = None
    assignees: list[str] = Field(default_factory=list)
    reviewers: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    milestone: str | None = None
    base_branch: str | None = None
    head_branch: str | None = None
    head_sha: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    merged_at: datetime | None = None


class IssueRow(Row):
    """One row of the Issues table."""

    id: int = Field(..., description="Issue id")
    number: int = Field(..., description="Issue number within the repo")
    url: str = Field(..., description="Issue web URL")
    title: str = ""
    body: str | None = None
    state: str | None = None
    state_reason: str | None = None
    author: str | None = None
    author_url: str | None = None
    assignees: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    milestone: str | None = None
    comments: int | None = None
    is_pull_request: bool = Field(
        False, description="The issues endpoint also lists pull requests"
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None
