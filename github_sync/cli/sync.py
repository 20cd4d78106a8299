"""CLI commands for running sync tables and repository search."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from ..config import Settings
from ..github_client.errors import GitHubSyncError
from ..github_client.fetcher import PageFetcher
from ..github_client.models import ResourceKind
from ..github_client.rows import Row
from ..sync.autocomplete import search_repos
from ..sync.retry import RetryPolicy
from ..sync.step import SyncParams, SyncResult, build_sync_step, iterate_sync
from ..utils.log_setup import configure_logging
from .options import (
    ALL_PAGES_OPTION,
    BASE_OPTION,
    CONTINUATION_OPTION,
    JSON_OPTION,
    LABELS_FILTER_OPTION,
    LOG_FILE_OPTION,
    REPO_URL_OPTION,
    STATE_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
)

console = Console()


class TableName(str, Enum):
    """Sync tables available from the command line."""

    PULL_REQUESTS = "pull-requests"
    ISSUES = "issues"
    REPOS = "repos"

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind(self.value.replace("-", "_"))


# Columns shown in the rich table for each resource
COLUMNS: dict[ResourceKind, list[str]] = {
    ResourceKind.PULL_REQUESTS: [
        "number",
        "title",
        "author",
        "state",
        "base_branch",
        "head_branch",
        "labels",
    ],
    ResourceKind.ISSUES: ["number", "title", "author", "state", "labels", "assignees"],
    ResourceKind.REPOS: ["full_name", "description", "private", "default_branch"],
}


def load_settings(token: str | None = None) -> Settings:
    """Settings from the environment, with an optional token override."""
    settings = Settings.from_env()
    if token:
        settings = settings.model_copy(update={"token": token})
    return settings


def fail(error: Exception) -> NoReturn:
    """Print an error the way the other commands do and exit."""
    console.print(f"❌ Error: {error}", markup=False, soft_wrap=True)
    raise typer.Exit(1)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def render_rows(kind: ResourceKind, rows: list[Row], title: str) -> None:
    table = Table(title=title)
    columns = COLUMNS[kind]
    for column in columns:
        table.add_column(column, style="cyan" if column == columns[0] else None)
    for row in rows:
        record = row.to_record()
        table.add_row(*(_cell(record.get(column)) for column in columns))
    console.print(table)


def sync(
    table: TableName = typer.Argument(..., help="Table to sync"),
    repo_url: str | None = REPO_URL_OPTION,
    base: str | None = BASE_OPTION,
    state: str | None = STATE_OPTION,
    labels: list[str] | None = LABELS_FILTER_OPTION,
    continuation: str | None = CONTINUATION_OPTION,
    all_pages: bool = ALL_PAGES_OPTION,
    as_json: bool = JSON_OPTION,
    token: str | None = TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
    log_file: Path | None = LOG_FILE_OPTION,
) -> None:
    """Fetch one page of a sync table, or every page with --all.

    Without --all the continuation for the next page is printed; pass it
    back with --continuation to resume, exactly as the host would.

    Examples:
        gh-sync sync pull-requests --repo-url https://github.com/acme/widgets
        gh-sync sync issues -r https://github.com/acme/widgets --state all --all
        gh-sync sync issues --continuation '{"nextUrl": "..."}'
    """
    configure_logging(verbose, log_file)
    kind = table.kind
    params = SyncParams(repo_url=repo_url, base=base, state=state, labels=labels)

    try:
        settings = load_settings(token)
        with PageFetcher(timeout=settings.timeout) as fetcher:
            step = build_sync_step(kind, settings, fetcher)
            if all_pages:
                retry = RetryPolicy(max_attempts=settings.max_retries)
                results = list(iterate_sync(step, params, continuation, retry))
            else:
                results = [step.step(params, continuation)]
    except (GitHubSyncError, ValueError) as e:
        fail(e)

    rows = [row for result in results for row in result.rows]
    last: SyncResult = results[-1]

    if as_json:
        if all_pages:
            output: Any = [row.to_record() for row in rows]
        else:
            output = last.to_host()
        typer.echo(json.dumps(output, indent=2))
        return

    render_rows(kind, rows, f"{table.value} ({len(rows)} rows)")
    if last.continuation is not None:
        console.print("More pages available. Resume with:")
        console.print(
            f"  --continuation '{last.continuation.to_wire()}'",
            markup=False,
            soft_wrap=True,
        )
    else:
        console.print("✅ Last page reached")


def repos(
    search: str | None = typer.Argument(None, help="Text to look for in repo names"),
    token: str | None = TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Search the repositories you have access to by name."""
    configure_logging(verbose)
    try:
        settings = load_settings(token)
        entries = search_repos(search, settings)
    except (GitHubSyncError, ValueError) as e:
        fail(e)

    if not entries:
        console.print("No matching repositories")
        return

    results = Table(title=f"Repositories matching {search!r}" if search else None)
    results.add_column("Name", style="cyan")
    results.add_column("URL", style="green")
    for entry in entries:
        results.add_row(entry.display, entry.value)
    console.print(results)
