"""Errors raised by the routines that drive the git command line.

These routines rely on a local git binary rather than a pure library
implementation.
"""

from __future__ import annotations


class TargetDirectoryNotExistsError(Exception):
    """Raised when the target directory of a git command is missing or is not a directory."""

    def __init__(self, dir_path: str) -> None:
        super().__init__(f"{dir_path} does not exist or is not a directory")
        self.dir_path = dir_path