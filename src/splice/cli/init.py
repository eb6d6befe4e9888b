"""splice init command - create an empty project."""

import sys
from pathlib import Path

import click

from splice.client.ops import initialize_project
from splice.config.constants import PROJECT_DIR
from splice.core.progress import status


@click.command()
@click.argument(
    "path",
    default=None,
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing .splice directory")
def init_command(path: Path | None, force: bool) -> None:
    """Initialize a project for splice.

    Creates .splice/ with a default config and an empty state. PATH is the
    project root and defaults to the current directory.
    """
    root = (path or Path.cwd()).resolve()

    if not initialize_project(root, force=force):
        status(f"Already initialized: {root / PROJECT_DIR}", style="info")
        status("Use --force to reinitialize", style="info")
        sys.exit(1)

    status(f"Initialized splice project in {root}", style="success")
