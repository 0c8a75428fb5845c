"""Options shared by the helpers that start and interact with subprocesses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..logs import get_logger


def _default_logger() -> Any:
    return get_logger("", "")


@dataclass
class ShellOptions:
    """How a shell command is run and how it is logged."""

    non_interactive: bool = False
    logger: Any = field(default_factory=_default_logger)
    working_dir: str = "."
    # When true, command arguments are left out of the log.
    sensitive_args: bool = False
    # Additional environment variables to set for the command.
    env: dict[str, str] = field(default_factory=dict)