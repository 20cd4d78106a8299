"""Shared CLI option definitions so shorthands stay consistent across commands."""

import typer

REPO_URL_OPTION = typer.Option(
    None,
    "--repo-url",
    "-r",
    help='Repository URL, for example "https://github.com/[org]/[repo]"',
)
REPO_URL_REQUIRED_OPTION = typer.Option(
    ...,
    "--repo-url",
    "-r",
    help='Repository URL, for example "https://github.com/[org]/[repo]"',
)

ISSUE_NUMBER_OPTION = typer.Option(
    ..., "--issue-number", "-i", help="Number of the issue to update"
)

BASE_OPTION = typer.Option(
    None, "--base", "-b", help='Base branch of pull requests, for example "main"'
)

STATE_OPTION = typer.Option(
    None, "--state", "-s", help='open, closed or all. Defaults to "open"'
)

LABELS_FILTER_OPTION = typer.Option(
    None, "--label", "-l", help="Only issues with this label (can be repeated)"
)

LABELS_OPTION = typer.Option(
    None, "--label", "-l", help="Label to set (can be repeated)"
)

ASSIGNEES_OPTION = typer.Option(
    None, "--assignee", "-a", help="Login to assign (can be repeated)"
)

CONTINUATION_OPTION = typer.Option(
    None,
    "--continuation",
    "-c",
    help="Continuation printed by the previous step; resumes from there",
)

ALL_PAGES_OPTION = typer.Option(
    False, "--all", help="Keep fetching until the last page, retrying rate limits"
)

JSON_OPTION = typer.Option(False, "--json", help="Print rows as JSON")

TOKEN_OPTION = typer.Option(
    None, "--token", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log every request")

LOG_FILE_OPTION = typer.Option(
    None, "--log-file", help="Append debug logs to this file"
)
