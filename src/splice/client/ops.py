"""Project operations behind the splice commands.

Each operation loads the state snapshot, works on the repository, saves the
files that changed and writes the snapshot back.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from splice.client.repository import Repository
from splice.client.state import State, load_state, write_state
from splice.config.constants import CONFIG_FILE, PROJECT_DIR, STATE_FILE
from splice.config.models import SpliceConfig
from splice.config.user_config import UserConfig, write_user_config
from splice.core.errors import ConfigError
from splice.core.logging import get_logger
from splice.server.catalog import ServerCatalog

log = get_logger("ops")


@dataclass
class OpsResult:
    """Outcome of a project operation."""

    files: list[str] = field(default_factory=list)
    written: int = 0
    series: int = 0


def find_project_root(start_path: Path | None = None) -> Path:
    """Nearest directory at or above start_path holding .splice/.

    Raises:
        ConfigError: PROJECT_NOT_INITIALIZED when none is found.
    """
    start = (start_path or Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if (candidate / PROJECT_DIR).is_dir():
            return candidate
    raise ConfigError.not_initialized(str(start))


def initialize_project(root: Path, *, force: bool = False) -> bool:
    """Create .splice/ with default config and empty state.

    Returns False when the project already exists and force is not set.
    """
    project_dir = root / PROJECT_DIR
    if project_dir.exists() and not force:
        return False
    if force and project_dir.exists():
        shutil.rmtree(project_dir)

    project_dir.mkdir(parents=True)
    write_user_config(project_dir / CONFIG_FILE, UserConfig())
    write_state(project_dir / STATE_FILE, State())
    log.info("project_initialized", root=str(root))
    return True


class ProjectOps:
    """compile/decompile/update over one project."""

    def __init__(
        self,
        root: Path,
        config: SpliceConfig,
        *,
        on_save: Callable[[str], None] | None = None,
    ) -> None:
        self.root = root
        self.config = config
        self.state_path = root / PROJECT_DIR / STATE_FILE
        self.catalog = ServerCatalog(
            config.servers.search_paths(root),
            project_root=root,
            declaration_file=config.servers.declaration,
        )
        self.repository = Repository(root, on_save=on_save)
        self.repository.load(load_state(self.state_path))

    def compile(self, paths: Iterable[str | Path]) -> OpsResult:
        """Track each file and expand its directives."""
        result = OpsResult()
        try:
            for path in paths:
                source = self.repository.register(path)
                result.series += source.compile(self.catalog)
                result.files.append(source.path)
        finally:
            result.written = self._persist(all=False)
        return result

    def decompile(self, paths: Iterable[str | Path]) -> OpsResult:
        """Collapse each file's blocks and stop tracking it."""
        result = OpsResult()
        try:
            for path in paths:
                source = self.repository.register(path)
                result.series += source.decompile()
                self.repository.unregister(path)
                result.files.append(source.path)
        finally:
            result.written = self._persist(all=True)
        return result

    def update(self) -> OpsResult:
        """Re-expand every tracked file with current fragment content."""
        result = OpsResult()
        try:
            for source in self.repository.sources():
                result.series += source.update(self.catalog)
                result.files.append(source.path)
        finally:
            result.written = self._persist(all=False)
        return result

    def _persist(self, *, all: bool) -> int:  # noqa: A002
        written = self.repository.save(all=all)
        write_state(self.state_path, self.repository.dump())
        log.debug("state_written", path=str(self.state_path), written=written)
        return written
