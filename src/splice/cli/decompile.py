"""splice decompile command - collapse expanded blocks back to directives."""

from pathlib import Path

import click

from splice.cli.utils import run_ops


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.pass_context
def decompile_command(ctx: click.Context, files: tuple[Path, ...]) -> None:
    """Restore the directives in FILES and stop tracking them.

    Manual edits inside expanded blocks are discarded.
    """
    run_ops(lambda ops: ops.decompile(files), verb="Decompiled", verbose=ctx.obj["verbose"])
