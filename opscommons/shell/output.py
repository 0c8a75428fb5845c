"""Capturing of a command's stdout and stderr, kept exactly as the command wrote them."""

from __future__ import annotations

import threading
from typing import IO, Any


class Output:
    """The stdout, stderr and interleaved output of a command."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stdout: list[str] = []
        self._stderr: list[str] = []
        self._merged: list[str] = []

    def write_stdout(self, text: str) -> int:
        """Record text written to stdout."""
        with self._lock:
            self._stdout.append(text)
            self._merged.append(text)
        return len(text)

    def write_stderr(self, text: str) -> int:
        """Record text written to stderr."""
        with self._lock:
            self._stderr.append(text)
            self._merged.append(text)
        return len(text)

    @property
    def stdout(self) -> str:
        with self._lock:
            return "".join(self._stdout)

    @property
    def stderr(self) -> str:
        with self._lock:
            return "".join(self._stderr)

    @property
    def combined(self) -> str:
        with self._lock:
            return "".join(self._merged)


def _lines(stream: IO[Any]):
    while True:
        line = stream.readline()
        if not line:
            return
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        yield line


def _read_into(logger: Any, stream_output: bool, stream: IO[Any], write, errors: list[BaseException]) -> None:
    try:
        for line in _lines(stream):
            if stream_output:
                logger.info("%s", line.rstrip("\n"))
            write(line)
    except Exception as err:  # reported by the caller once both readers finish
        errors.append(err)


def read_stdout_and_stderr(logger: Any, stream_output: bool, stdout: IO[Any], stderr: IO[Any]) -> Output:
    """Read both streams to the end concurrently and return what they held.

    Lines are kept with their newlines. When stream_output is true each line is
    also logged as it arrives. A read error is raised after both streams stop.
    """
    out = Output()
    stdout_errors: list[BaseException] = []
    stderr_errors: list[BaseException] = []
    readers = [
        threading.Thread(target=_read_into, args=(logger, stream_output, stdout, out.write_stdout, stdout_errors)),
        threading.Thread(target=_read_into, args=(logger, stream_output, stderr, out.write_stderr, stderr_errors)),
    ]
    for reader in readers:
        reader.start()
    for reader in readers:
        reader.join()

    for errors in (stdout_errors, stderr_errors):
        if errors:
            raise errors[0]
    return out