"""Common helpers for operations tooling: logging, retries, random strings, URLs, shell, git, SSH and telemetry."""

__version__ = "0.1.0"