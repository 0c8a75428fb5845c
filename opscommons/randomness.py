"""Utilities for generating random data."""

from __future__ import annotations

import secrets

DIGITS = "0123456789"
UPPER_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWER_LETTERS = "abcdefghijklmnopqrstuvwxyz"
SPECIAL_CHARS = "<>[]{}()-_*%&/?\"'\\"
BASE62_CHARS = DIGITS + UPPER_LETTERS + LOWER_LETTERS


def random_string(length: int, allowed_chars: str) -> str:
    """Return a cryptographically random string of the given length drawn from allowed_chars."""
    if length <= 0:
        return ""
    if not allowed_chars:
        raise ValueError("allowed_chars must not be empty")
    return "".join(secrets.choice(allowed_chars) for _ in range(length))