# ABOUTME: Main package initialization for the oneword feed core.
# ABOUTME: Exports version information from pyproject.toml.

from importlib.metadata import version

__version__ = version("oneword")
