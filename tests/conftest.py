"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides server/project builders shared by the test modules.
"""

import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
import yaml

_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

for module_name in list(sys.modules.keys()):
    if module_name.startswith("splice"):
        del sys.modules[module_name]


ServerBuilder = Callable[..., Path]


@pytest.fixture
def make_server(tmp_path: Path) -> ServerBuilder:
    """Build a server directory: declaration plus fragment files.

    Usage::

        root = make_server(
            "srv",
            declaration={"depends": ["z"], "symbols": [{"symbol": "a", "depends": ["b"]}]},
            files={"a": "A\\n", "b": "B\\n", "z": "Z\\n"},
        )
    """

    def _make(
        name: str = "srv",
        *,
        declaration: dict | None = None,
        files: dict[str, str] | None = None,
        base: Path | None = None,
    ) -> Path:
        root = (base or tmp_path / "servers") / name
        root.mkdir(parents=True, exist_ok=True)
        if declaration is not None:
            (root / "splice.yaml").write_text(yaml.safe_dump(declaration))
        for rel, content in (files or {}).items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return _make


@pytest.fixture
def example_server(make_server: ServerBuilder) -> Path:
    """Global dependency z; a depends on b and c; every symbol has one line."""
    return make_server(
        "srv",
        declaration={
            "depends": ["z"],
            "symbols": [{"symbol": "a", "depends": ["b", "c"]}],
        },
        files={"a": "A\n", "b": "B\n", "c": "C\n", "z": "Z\n"},
    )


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Initialized project whose server search path is tmp_path/servers."""
    from splice.client.ops import initialize_project

    root = tmp_path / "project"
    root.mkdir()
    initialize_project(root)
    (root / ".splice" / "config.yaml").write_text(
        yaml.safe_dump({"paths": [str(tmp_path / "servers")]})
    )
    monkeypatch.chdir(root)
    monkeypatch.setattr("splice.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global.yaml")
    return root


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers bound to streams of finished CLI invocations."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    from splice.core.logging import _set_log_file_path

    _set_log_file_path(None)
