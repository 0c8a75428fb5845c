"""Cloning repositories and checking out refs with the git command line."""

from __future__ import annotations

import os
from typing import Any

from ..shell.cmd import run_shell_command
from ..shell.options import ShellOptions
from .errors import TargetDirectoryNotExistsError


def _shell_options(logger: Any) -> ShellOptions:
    return ShellOptions(logger=logger) if logger is not None else ShellOptions()


def clone(logger: Any, repo: str, target_dir: str) -> None:
    """Clone the repository into the existing target directory."""
    if not os.path.isdir(target_dir):
        raise TargetDirectoryNotExistsError(target_dir)
    run_shell_command(_shell_options(logger), "git", "clone", repo, target_dir)


def checkout(logger: Any, ref: str, target_dir: str) -> None:
    """Check out the ref in the repository cloned into the target directory."""
    if not os.path.isdir(target_dir):
        raise TargetDirectoryNotExistsError(target_dir)
    opts = _shell_options(logger)
    opts.working_dir = target_dir
    run_shell_command(opts, "git", "checkout", ref)