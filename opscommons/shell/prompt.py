"""Prompting the user for input on the command line."""

from __future__ import annotations

import getpass
import sys
from typing import TextIO

from termcolor import colored

from .options import ShellOptions


class NonInteractivePasswordPromptError(Exception):
    """Raised when a password is requested while running non-interactively."""

    def __init__(self) -> None:
        super().__init__("The non-interactive flag is set, so unable to prompt user for a password.")


def _print_prompt(out: TextIO, prompt: str) -> None:
    out.write(colored(prompt, "light_green", attrs=["bold"]))
    out.flush()


def prompt_user_for_input(
    prompt: str,
    options: ShellOptions,
    out: TextIO | None = None,
    stream: TextIO | None = None,
) -> str:
    """Show the prompt and return the line the user typed, stripped of surrounding whitespace.

    When the options are non-interactive, "yes" is returned without reading.
    EOFError is raised if the input ends before a full line is read.
    """
    out = sys.stdout if out is None else out
    stream = sys.stdin if stream is None else stream

    _print_prompt(out, prompt)

    if options.non_interactive:
        out.write("\n")
        options.logger.info("The non-interactive flag is set to true, so assuming 'yes' for all prompts")
        return "yes"

    line = stream.readline()
    if not line.endswith("\n"):
        raise EOFError("input ended before a full line was read")
    return line.strip()


def prompt_user_for_yes_no(
    prompt: str,
    options: ShellOptions,
    out: TextIO | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Ask a yes/no question and return True if the user answered yes."""
    response = prompt_user_for_input(f"{prompt} (y/n) ", options, out, stream)
    return response.lower() in ("y", "yes")


def prompt_user_for_password(prompt: str, options: ShellOptions) -> str:
    """Ask for sensitive input without echoing it back."""
    _print_prompt(sys.stdout, prompt)
    if options.non_interactive:
        raise NonInteractivePasswordPromptError()
    return getpass.getpass("")