"""The version of the CLI, set when the package is built."""

VERSION = "latest"


def get_version() -> str:
    """Return the configured version string."""
    return VERSION