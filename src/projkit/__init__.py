"""projkit: path and git utilities for project-scaffolding command-line tools."""

__version__ = "0.1.0"
