"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .issues import create_issue, update_issue
from .sync import repos, sync

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="gh-sync",
    help="Sync GitHub repositories, pull requests and issues as tables",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="sync", context_settings={"help_option_names": ["-h", "--help"]})(
    sync
)
app.command(name="repos", context_settings={"help_option_names": ["-h", "--help"]})(
    repos
)
app.command(
    name="create-issue", context_settings={"help_option_names": ["-h", "--help"]}
)(create_issue)
app.command(
    name="update-issue", context_settings={"help_option_names": ["-h", "--help"]}
)(update_issue)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from github_sync import __version__

    console.print(f"GitHub Sync Tables v{__version__}")


if __name__ == "__main__":
    app()
