"""splice update command - refresh every tracked file."""

import click

from splice.cli.utils import run_ops


@click.command()
@click.pass_context
def update_command(ctx: click.Context) -> None:
    """Re-expand every tracked file with current server content."""
    run_ops(
        lambda ops: ops.update(),
        verb="Updated",
        verbose=ctx.obj["verbose"],
        busy="Updating tracked files",
    )
