"""splice CLI - splice command."""

import click

from splice import __version__
from splice.cli.compile import compile_command
from splice.cli.decompile import decompile_command
from splice.cli.init import init_command
from splice.cli.update import update_command
from splice.core.logging import clear_run_id, configure_logging, set_run_id


@click.group()
@click.version_option(version=__version__, prog_name="splice")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """splice - expand shared fragments into files and keep them in sync."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    set_run_id()
    ctx.call_on_close(clear_run_id)
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(init_command, name="init")
cli.add_command(compile_command, name="compile")
cli.add_command(decompile_command, name="decompile")
cli.add_command(update_command, name="update")


if __name__ == "__main__":
    cli()
