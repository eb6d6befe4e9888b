"""Client side: directives, sources, repository, project operations."""

from splice.client.directive import Directive
from splice.client.ops import OpsResult, ProjectOps, find_project_root, initialize_project
from splice.client.repository import Repository
from splice.client.source import Series, Source
from splice.client.state import State, load_state, write_state

__all__ = [
    "Directive",
    "OpsResult",
    "ProjectOps",
    "Repository",
    "Series",
    "Source",
    "State",
    "find_project_root",
    "initialize_project",
    "load_state",
    "write_state",
]
