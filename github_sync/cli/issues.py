"""CLI commands for the create/update issue actions."""

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..github_client.client import GitHubClient
from ..github_client.errors import GitHubSyncError
from ..github_client.models import IssueDraft, IssueUpdate
from ..github_client.rows import IssueRow
from ..utils.log_setup import configure_logging
from .options import (
    ASSIGNEES_OPTION,
    ISSUE_NUMBER_OPTION,
    LABELS_OPTION,
    REPO_URL_REQUIRED_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
)
from .sync import fail, load_settings

console = Console()


def _show_issue(row: IssueRow, title: str) -> None:
    table = Table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Number", str(row.number))
    table.add_row("Title", row.title)
    table.add_row("State", row.state or "")
    table.add_row("Labels", ", ".join(row.labels))
    table.add_row("Assignees", ", ".join(row.assignees))
    table.add_row("URL", row.url)
    console.print(table)


def _client(token: str | None) -> GitHubClient:
    settings = load_settings(token)
    return GitHubClient(
        settings.require_token(),
        api_url=settings.api_url,
        host=settings.host,
        timeout=int(settings.timeout),
    )


def create_issue(
    repo_url: str = REPO_URL_REQUIRED_OPTION,
    title: str = typer.Option(..., "--title", "-t", help="Issue title"),
    body: str | None = typer.Option(None, "--body", help="Issue body (markdown)"),
    labels: list[str] | None = LABELS_OPTION,
    assignees: list[str] | None = ASSIGNEES_OPTION,
    token: str | None = TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Create an issue in a repository.

    Examples:
        gh-sync create-issue -r https://github.com/acme/widgets -t "Crash on start"
    """
    configure_logging(verbose)
    try:
        draft = IssueDraft(
            title=title, body=body, labels=labels or [], assignees=assignees or []
        )
        row = _client(token).create_issue(repo_url, draft)
    except ValidationError as e:
        fail(ValueError(f"Invalid issue: {e.errors()[0]['msg']}"))
    except (GitHubSyncError, ValueError) as e:
        fail(e)

    console.print(f"✅ Created issue #{row.number}")
    _show_issue(row, "Created issue")


def update_issue(
    repo_url: str = REPO_URL_REQUIRED_OPTION,
    issue_number: int = ISSUE_NUMBER_OPTION,
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    body: str | None = typer.Option(None, "--body", help="New body (markdown)"),
    state: str | None = typer.Option(None, "--state", "-s", help="open or closed"),
    labels: list[str] | None = LABELS_OPTION,
    assignees: list[str] | None = ASSIGNEES_OPTION,
    token: str | None = TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Update an existing issue. Only the given fields are changed.

    Labels and assignees, when given, replace the current ones.
    """
    configure_logging(verbose)
    try:
        update = IssueUpdate(
            issue_number=issue_number,
            title=title,
            body=body,
            state=state,
            labels=labels or None,
            assignees=assignees or None,
        )
        row = _client(token).update_issue(repo_url, update)
    except ValidationError as e:
        fail(ValueError(f"Invalid issue update: {e.errors()[0]['msg']}"))
    except (GitHubSyncError, ValueError) as e:
        fail(e)

    console.print(f"✅ Updated issue #{row.number}")
    _show_issue(row, "Updated issue")
