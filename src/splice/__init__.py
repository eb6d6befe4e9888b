"""splice - expand shared text fragments into client files and keep them in sync."""

__version__ = "0.1.0"
