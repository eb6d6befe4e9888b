"""Configuration constants.

Values here are protocol constraints of the file formats splice reads and
writes. They are NOT user-configurable. For configurable values, see models.py.
"""

# =============================================================================
# Project layout
# =============================================================================

PROJECT_DIR = ".splice"
"""Per-project directory holding config and state."""

CONFIG_FILE = "config.yaml"
"""User config file inside PROJECT_DIR."""

STATE_FILE = "state.yaml"
"""Persisted series snapshot inside PROJECT_DIR."""

STATE_VERSION = 1
"""Schema version written to STATE_FILE."""

# =============================================================================
# Server layout
# =============================================================================

DECLARATION_FILE = "splice.yaml"
"""Default name of the symbol declaration file at a server root."""

DEFAULT_SERVER_PATHS = ("~/.local/share/splice/src",)
"""Default search paths for server identifiers."""

# =============================================================================
# Directive syntax
# =============================================================================

DIRECTIVE_MARKER = "..."
"""Token that starts a directive line."""

SEPARATOR_LINE = ""
"""Line inserted between the payloads of consecutive symbols."""
