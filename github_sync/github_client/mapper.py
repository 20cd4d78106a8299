"""Projection of raw GitHub records into table rows."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ValidationError

from .errors import MalformedResponseError, UnsupportedResourceError
from .models import (
    RemoteIssue,
    RemoteLabel,
    RemotePullRequest,
    RemoteRepo,
    RemoteUser,
    ResourceKind,
)
from .rows import IssueRow, PullRequestRow, RepoRow, Row


def _parse(model: type[BaseModel], record: Any) -> Any:
    """Validate a raw record, surfacing the first offending field."""
    if not isinstance(record, dict):
        raise MalformedResponseError(
            f"Expected a {model.__name__} object, got {type(record).__name__}"
        )
    try:
        return model.model_validate(record)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise MalformedResponseError(
            f"Invalid {model.__name__} record: {error['msg']}", field=field
        ) from e


def _login(user: RemoteUser | None) -> str | None:
    return user.login if user else None


def _logins(
    users: list[RemoteUser] | None, fallback: RemoteUser | None = None
) -> list[str]:
    if users:
        return [user.login for user in users]
    return [fallback.login] if fallback else []


def _label_names(labels: list[RemoteLabel] | None) -> list[str]:
    return [label.name for label in labels or []]


def _convert_repo(repo: RemoteRepo) -> RepoRow:
    return RepoRow(
        id=repo.id,
        name=repo.name,
        full_name=repo.full_name,
        url=repo.html_url,
        owner=_login(repo.owner),
        description=repo.description,
        private=repo.private,
        fork=repo.fork,
        archived=repo.archived,
        default_branch=repo.default_branch,
        language=repo.language,
        stars=repo.stargazers_count,
        open_issues=repo.open_issues_count,
        created_at=repo.created_at,
        updated_at=repo.updated_at,
        pushed_at=repo.pushed_at,
    )


def _convert_pull_request(pr: RemotePullRequest) -> PullRequestRow:
    return PullRequestRow(
        id=pr.id,
        number=pr.number,
        url=pr.html_url,
        title=pr.title,
        body=pr.body,
        state=pr.state,
        draft=pr.draft,
        author=_login(pr.user),
        author_url=pr.user.html_url if pr.user else None,
        assignees=_logins(pr.assignees, pr.assignee),
        reviewers=_logins(pr.requested_reviewers),
        labels=_label_names(pr.labels),
        milestone=pr.milestone.title if pr.milestone else None,
        base_branch=pr.base.ref if pr.base else None,
        head_branch=pr.head.ref if pr.head else None,
        head_sha=pr.head.sha if pr.head else None,
        created_at=pr.created_at,
        updated_at=pr.updated_at,
        closed_at=pr.closed_at,
        merged_at=pr.merged_at,
    )


def _convert_issue(issue: RemoteIssue) -> IssueRow:
    return IssueRow(
        id=issue.id,
        number=issue.number,
        url=issue.html_url,
        title=issue.title,
        body=issue.body,
        state=issue.state,
        state_reason=issue.state_reason,
        author=_login(issue.user),
        author_url=issue.user.html_url if issue.user else None,
        assignees=_logins(issue.assignees, issue.assignee),
        labels=_label_names(issue.labels),
        milestone=issue.milestone.title if issue.milestone else None,
        comments=issue.comments,
        is_pull_request=issue.pull_request is not None,
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        closed_at=issue.closed_at,
    )


_CONVERTERS = {
    ResourceKind.REPOS: (RemoteRepo, _convert_repo),
    ResourceKind.PULL_REQUESTS: (RemotePullRequest, _convert_pull_request),
    ResourceKind.ISSUES: (RemoteIssue, _convert_issue),
}


def map_record(kind: ResourceKind, record: dict[str, Any]) -> Row:
    """Map one raw record to a row of the table for ``kind``.

    Missing optional nested objects (assignee, labels, milestone, base/head)
    become empty row fields. Identifying fields are copied verbatim.

    Raises:
        MalformedResponseError: If an identifying field is missing or invalid
        UnsupportedResourceError: If ``kind`` is not a known resource
    """
    try:
        model, convert = _CONVERTERS[ResourceKind(kind)]
    except ValueError:
        raise UnsupportedResourceError(kind) from None
    return convert(_parse(model, record))


def map_records(kind: ResourceKind, records: Iterable[dict[str, Any]]) -> list[Row]:
    """Map a page of records, keeping the service's order."""
    return [map_record(kind, record) for record in records]
