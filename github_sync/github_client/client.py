"""Issue create/update actions using PyGitHub."""

import logging
from typing import Any, cast

from github import Auth, Github
from github.GithubException import (
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)
from github.Repository import Repository
from requests.exceptions import RequestException

from .errors import RemoteRejectedError, TransientFetchError
from .mapper import map_record
from .models import IssueDraft, IssueUpdate, ResourceKind
from .repo_url import DEFAULT_HOST, resolve_repo_url
from .request_builder import DEFAULT_API_URL
from .rows import IssueRow

logger = logging.getLogger(__name__)


def _rejection(e: GithubException, target: str) -> RemoteRejectedError:
    """Translate a PyGitHub exception into the engine's error type."""
    retry_after = None
    headers = e.headers or {}
    if "retry-after" in headers:
        try:
            retry_after = float(headers["retry-after"])
        except ValueError:
            retry_after = None
    return RemoteRejectedError(
        status=e.status,
        body=str(e.data) if e.data is not None else "",
        url=target,
        retry_after=retry_after,
        rate_limited=isinstance(e, RateLimitExceededException) or e.status == 429,
    )


class GitHubClient:
    """Runs the create/update issue actions against GitHub."""

    def __init__(
        self,
        token: str | None,
        api_url: str = DEFAULT_API_URL,
        host: str = DEFAULT_HOST,
        timeout: int = 30,
    ):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token
            api_url: REST API base URL
            host: Host that repository URLs must point at
            timeout: Request timeout in seconds
        """
        if not token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )
        self.host = host
        self.github = Github(auth=Auth.Token(token), base_url=api_url, timeout=timeout)

    def get_repository(self, repo_url: str) -> tuple[Repository, str]:
        """Get a lazy repository object and its full name for a repository URL."""
        reference = resolve_repo_url(repo_url, host=self.host)
        repository = self.github.get_repo(reference.full_name, lazy=True)
        return repository, reference.full_name

    def create_issue(self, repo_url: str, draft: IssueDraft) -> IssueRow:
        """Create an issue.

        Args:
            repo_url: URL of the repository to create the issue in
            draft: Title, body, labels and assignees of the new issue

        Returns:
            IssueRow for the created issue

        Raises:
            InvalidReferenceError: If the repository URL is invalid
            RemoteRejectedError: If GitHub refuses the request
            TransientFetchError: On network failures
        """
        repository, full_name = self.get_repository(repo_url)
        kwargs: dict[str, Any] = {"title": draft.title}
        if draft.body is not None:
            kwargs["body"] = draft.body
        if draft.labels:
            kwargs["labels"] = draft.labels
        if draft.assignees:
            kwargs["assignees"] = draft.assignees

        target = f"{full_name} issues"
        try:
            issue = repository.create_issue(**kwargs)
        except GithubException as e:
            raise _rejection(e, target) from e
        except RequestException as e:
            raise TransientFetchError(target, str(e)) from e

        logger.info("Created issue #%s in %s", issue.number, full_name)
        return self._to_row(issue.raw_data)

    def update_issue(self, repo_url: str, update: IssueUpdate) -> IssueRow:
        """Update fields of an existing issue.

        Only the fields set on ``update`` are sent. Labels and assignees
        replace the current ones.

        Returns:
            IssueRow reflecting the issue after the update

        Raises:
            InvalidReferenceError: If the repository URL is invalid
            RemoteRejectedError: If the issue does not exist or GitHub
                refuses the request
            TransientFetchError: On network failures
        """
        repository, full_name = self.get_repository(repo_url)
        target = f"{full_name}#{update.issue_number}"
        try:
            issue = repository.get_issue(update.issue_number)
            changes = update.changes()
            if changes:
                issue.edit(**changes)
                # edit() does not refresh raw_data
                issue = repository.get_issue(update.issue_number)
        except UnknownObjectException as e:
            raise RemoteRejectedError(
                status=404, body=f"Issue {target} not found", url=target
            ) from e
        except GithubException as e:
            raise _rejection(e, target) from e
        except RequestException as e:
            raise TransientFetchError(target, str(e)) from e

        logger.info("Updated issue %s: %s", target, sorted(changes))
        return self._to_row(issue.raw_data)

    @staticmethod
    def _to_row(raw: dict[str, Any]) -> IssueRow:
        return cast(IssueRow, map_record(ResourceKind.ISSUES, raw))
