"""splice compile command - expand directives in files."""

from pathlib import Path

import click

from splice.cli.utils import run_ops


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.pass_context
def compile_command(ctx: click.Context, files: tuple[Path, ...]) -> None:
    """Expand every directive in FILES and start tracking them."""
    run_ops(lambda ops: ops.compile(files), verb="Compiled", verbose=ctx.obj["verbose"])
