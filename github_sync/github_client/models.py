"""Pydantic models for GitHub data structures.

The ``Remote*`` models describe the subset of GitHub's REST API v3
responses that the sync tables read. Unknown fields are ignored, optional
nested objects may be missing or null.
API Reference: https://docs.github.com/en/rest
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidContinuationError, InvalidFilterError


class ResourceKind(str, Enum):
    """Resources that can be synced as tables."""

    REPOS = "repos"
    PULL_REQUESTS = "pull_requests"
    ISSUES = "issues"


class StateFilter(str, Enum):
    """State filter accepted by the pulls and issues list endpoints."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class RepositoryReference(BaseModel):
    """Owner/name pair identifying a repository."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1, description="Repository owner login")
    name: str = Field(..., min_length=1, description="Repository name")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class FilterSet(BaseModel):
    """Filters applied to the first page of a list request."""

    model_config = ConfigDict(frozen=True)

    base: str | None = Field(None, description="Base branch (pull requests only)")
    state: StateFilter | None = Field(
        None, description="open, closed or all; the service defaults to open"
    )
    labels: tuple[str, ...] | None = Field(
        None, description="Label names (issues only), sent comma separated"
    )

    @field_validator("state", mode="before")
    @classmethod
    def _normalize_state(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower() or None
        return value

    @classmethod
    def build(
        cls,
        base: str | None = None,
        state: str | None = None,
        labels: list[str] | tuple[str, ...] | None = None,
    ) -> "FilterSet":
        """Build a filter set, reporting bad values as ``InvalidFilterError``."""
        try:
            return cls(
                base=base or None,
                state=state,
                labels=tuple(labels) if labels else None,
            )
        except ValidationError as e:
            allowed = ", ".join(s.value for s in StateFilter)
            raise InvalidFilterError(
                f"Invalid state filter {state!r}; expected one of: {allowed}"
            ) from e


class Continuation(BaseModel):
    """Where the next sync step resumes.

    Holds only the next-page URL the service gave us, which already
    encodes every filter of the original request. The host stores it
    between invocations and passes it back unchanged.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    next_url: str = Field(..., alias="nextUrl", description="Next page URL")

    @field_validator("next_url")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError("nextUrl must be an http(s) URL")
        return value

    def to_wire(self) -> str:
        """Serialize to the JSON string handed to the host."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_wire(cls, value: "str | dict[str, Any] | Continuation") -> "Continuation":
        """Parse a continuation as stored by the host.

        Accepts the JSON object produced by ``to_wire``, the equivalent
        dict, or a bare next-page URL.
        """
        if isinstance(value, Continuation):
            return value
        try:
            if isinstance(value, str):
                text = value.strip()
                if text.startswith("{"):
                    value = json.loads(text)
                else:
                    value = {"nextUrl": text}
            return cls.model_validate(value)
        except (ValueError, ValidationError) as e:
            raise InvalidContinuationError(f"Invalid continuation: {e}") from e


class RemoteUser(BaseModel):
    """GitHub user as embedded in issues, pull requests and repos.

    API Reference: https://docs.github.com/en/rest/users/users
    """

    model_config = ConfigDict(extra="ignore")

    login: str = Field(..., description="GitHub username/login")
    id: int | None = Field(None, description="Unique user identifier")
    html_url: str | None = Field(None, description="Profile URL")


class RemoteLabel(BaseModel):
    """GitHub label.

    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Name of the label")
    color: str | None = Field(None, description="Hex color without leading #")


class RemoteMilestone(BaseModel):
    """GitHub milestone.

    API Reference: https://docs.github.com/en/rest/issues/milestones
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., description="Milestone title")
    number: int | None = Field(None, description="Milestone number")


class RemoteBranchRef(BaseModel):
    """Base or head branch of a pull request."""

    model_config = ConfigDict(extra="ignore")

    ref: str = Field(..., description="Branch name")
    sha: str | None = Field(None, description="Commit SHA the ref points at")
    label: str | None = Field(None, description="owner:branch label")


class RemoteRepo(BaseModel):
    """GitHub repository as returned by ``GET /user/repos``.

    API Reference: https://docs.github.com/en/rest/repos/repos
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    full_name: str
    html_url: str
    owner: RemoteUser | None = None
    description: str | None = None
    private: bool = False
    fork: bool = False
    archived: bool = False
    default_branch: str | None = None
    language: str | None = None
    stargazers_count: int | None = None
    open_issues_count: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None


class RemoteIssue(BaseModel):
    """GitHub issue as returned by ``GET /repos/{owner}/{repo}/issues``.

    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    number: int
    html_url: str
    title: str = ""
    body: str | None = None
    state: str | None = None
    state_reason: str | None = None
    locked: bool = False
    user: RemoteUser | None = None
    assignee: RemoteUser | None = None
    assignees: list[RemoteUser] | None = None
    labels: list[RemoteLabel] | None = None
    milestone: RemoteMilestone | None = None
    comments: int | None = None
    pull_request: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None


class RemotePullRequest(BaseModel):
    """GitHub pull request as returned by ``GET /repos/{owner}/{repo}/pulls``.

    API Reference: https://docs.github.com/en/rest/pulls/pulls
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    number: int
    html_url: str
    title: str = ""
    body: str | None = None
    state: str | None = None
    draft: bool = False
    locked: bool = False
    user: RemoteUser | None = None
    assignee: RemoteUser | None = None
    assignees: list[RemoteUser] | None = None
    requested_reviewers: list[RemoteUser] | None = None
    labels: list[RemoteLabel] | None = None
    milestone: RemoteMilestone | None = None
    base: RemoteBranchRef | None = None
    head: RemoteBranchRef | None = None
    merge_commit_sha: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    merged_at: datetime | None = None


class IssueDraft(BaseModel):
    """Parameters of the create issue action."""

    title: str = Field(..., min_length=1, description="Issue title")
    body: str | None = Field(None, description="Issue body in markdown")
    labels: list[str] = Field(default_factory=list, description="Label names")
    assignees: list[str] = Field(default_factory=list, description="User logins")


class IssueUpdate(BaseModel):
    """Parameters of the update issue action. Unset fields are left unchanged."""

    issue_number: int = Field(..., gt=0, description="Number of the issue to update")
    title: str | None = Field(None, min_length=1)
    body: str | None = None
    state: StateFilter | None = Field(None, description="open or closed")
    labels: list[str] | None = Field(None, description="Replaces all labels")
    assignees: list[str] | None = Field(None, description="Replaces all assignees")

    @field_validator("state")
    @classmethod
    def _reject_all(cls, value: StateFilter | None) -> StateFilter | None:
        if value is StateFilter.ALL:
            raise ValueError("an issue can only be set to open or closed")
        return value

    def changes(self) -> dict[str, Any]:
        """Fields to send, skipping the ones that were not provided."""
        changes = self.model_dump(exclude={"issue_number"}, exclude_none=True)
        if self.state is not None:
            changes["state"] = self.state.value
        return changes
