"""CLI utilities."""

import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from splice.client.ops import OpsResult, ProjectOps, find_project_root
from splice.config.loader import load_config
from splice.core.errors import SpliceError
from splice.core.logging import configure_logging, get_log_file_path, get_logger
from splice.core.progress import pluralize, spinner, status


def open_project(start_path: Path | None = None, *, verbose: bool = False) -> ProjectOps:
    """Find the project around start_path and load its config and state.

    Raises:
        SpliceError: Project not initialized, malformed config or state.
    """
    root = find_project_root(start_path)
    config = load_config(root)
    # -v wins over the configured level
    if verbose:
        configure_logging(level="DEBUG")
    else:
        configure_logging(config=config.logging)
    return ProjectOps(root, config, on_save=_notice)


def _notice(path: str) -> None:
    status(path, style="success")


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn SpliceError into a red status line and exit code 1."""
    try:
        yield
    except SpliceError as e:
        get_logger("cli").debug("command_failed", **e.to_dict())
        status(e.message, style="error")
        if (log_file := get_log_file_path()) is not None:
            status(f"See {log_file} for details", style="info")
        sys.exit(1)


def report(result: OpsResult, *, verb: str) -> None:
    """Summarize an operation on stderr."""
    if not result.written:
        status("Nothing changed", style="info")
        return
    status(
        f"{verb} {pluralize(result.series, 'directive')}, "
        f"{pluralize(result.written, 'file')} written",
        style="none",
    )


def run_ops(
    action: Callable[[ProjectOps], OpsResult],
    *,
    verb: str,
    verbose: bool,
    busy: str | None = None,
) -> None:
    """Open the project around the working directory and run action on it.

    With busy set, the action runs under a spinner showing that message.
    """
    with handle_errors():
        ops = open_project(verbose=verbose)
        if busy is None:
            result = action(ops)
        else:
            with spinner(busy):
                result = action(ops)
        report(result, verb=verb)
