"""Maze Builder: request mazes from an external generator and show them as text."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("mazebuilder")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
