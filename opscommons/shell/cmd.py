"""Running shell commands and collecting their output."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys

from .options import ShellOptions
from .output import Output, read_stdout_and_stderr


class ShellCommandError(Exception):
    """Raised when a command cannot be started or exits with a non-zero status."""

    def __init__(
        self,
        command: str,
        args: tuple[str, ...],
        returncode: int | None = None,
        output: Output | None = None,
        reason: BaseException | None = None,
    ) -> None:
        self.command = command
        self.args_list = list(args)
        self.returncode = returncode
        self.output = output
        self.reason = reason
        if reason is not None:
            message = f"failed to start command {command!r}: {reason}"
        else:
            message = f"command {command!r} exited with status {returncode}"
        super().__init__(message)


class CommandNotInstalledError(Exception):
    """Raised when a required command is not installed."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Command {command} is not installed")
        self.command = command


def _log_command(options: ShellOptions, command: str, args: tuple[str, ...]) -> None:
    if options.sensitive_args:
        options.logger.info("Running command: %s (args redacted)", command)
    else:
        options.logger.info("Running command: %s %s", command, " ".join(args))


def _environment(options: ShellOptions) -> dict[str, str]:
    return {**os.environ, **options.env}


def _run_attached(options: ShellOptions, command: str, args: tuple[str, ...], input_string: str | None) -> None:
    _log_command(options, command, args)
    try:
        completed = subprocess.run(
            [command, *args],
            input=input_string,
            text=input_string is not None,
            cwd=options.working_dir,
            env=_environment(options),
        )
    except OSError as err:
        raise ShellCommandError(command, args, reason=err) from err
    if completed.returncode != 0:
        raise ShellCommandError(command, args, returncode=completed.returncode)


def run_shell_command(options: ShellOptions, command: str, *args: str) -> None:
    """Run the command with stdin, stdout and stderr connected to this process."""
    _run_attached(options, command, args, None)


def run_shell_command_with_input(options: ShellOptions, input_string: str, command: str, *args: str) -> None:
    """Run the command feeding input_string to its stdin."""
    _run_attached(options, command, args, input_string)


def _run_captured(options: ShellOptions, stream_output: bool, command: str, args: tuple[str, ...]) -> Output:
    _log_command(options, command, args)
    try:
        process = subprocess.Popen(
            [command, *args],
            stdin=sys.stdin if _has_fileno(sys.stdin) else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=options.working_dir,
            env=_environment(options),
        )
    except OSError as err:
        raise ShellCommandError(command, args, reason=err) from err

    with process:
        output = read_stdout_and_stderr(options.logger, stream_output, process.stdout, process.stderr)
        returncode = process.wait()
    if returncode != 0:
        raise ShellCommandError(command, args, returncode=returncode, output=output)
    return output


def _has_fileno(stream) -> bool:
    try:
        stream.fileno()
    except (AttributeError, OSError, ValueError):
        return False
    return True


def run_shell_command_and_get_output_struct(options: ShellOptions, command: str, *args: str) -> Output:
    """Run the command and return its stdout, stderr and interleaved output."""
    return _run_captured(options, False, command, args)


def run_shell_command_and_get_output(options: ShellOptions, command: str, *args: str) -> str:
    """Run the command and return its interleaved stdout and stderr."""
    return _run_captured(options, False, command, args).combined


def run_shell_command_and_get_and_stream_output(options: ShellOptions, command: str, *args: str) -> str:
    """Run the command, logging its output as it arrives, and return the interleaved output."""
    return _run_captured(options, True, command, args).combined


def run_shell_command_and_get_stdout(options: ShellOptions, command: str, *args: str) -> str:
    """Run the command and return its stdout."""
    return _run_captured(options, False, command, args).stdout


def run_shell_command_and_get_stdout_and_stream_output(options: ShellOptions, command: str, *args: str) -> str:
    """Run the command, logging its output as it arrives, and return its stdout."""
    return _run_captured(options, True, command, args).stdout


def run_shell_command_and_get_output_struct_and_stream_output(
    options: ShellOptions, command: str, *args: str
) -> Output:
    """Run the command, logging its output as it arrives, and return all of it."""
    return _run_captured(options, True, command, args)


def command_installed(command: str) -> bool:
    """Return True if the command can be found on the PATH."""
    return shutil.which(command) is not None


def require_command_installed(command: str) -> None:
    """Raise CommandNotInstalledError if the command is not installed."""
    if not command_installed(command):
        raise CommandNotInstalledError(command)