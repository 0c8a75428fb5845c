"""Helpers that retry functions on error."""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Any, Callable, TypeVar

T = TypeVar("T")

_default_logger = logging.getLogger(__name__)


class MaxRetriesExceeded(Exception):
    """Raised when an action still fails after the maximum number of retries."""

    def __init__(self, description: str, max_retries: int) -> None:
        super().__init__(description, max_retries)
        self.description = description
        self.max_retries = max_retries

    def __str__(self) -> str:
        return f"'{self.description}' unsuccessful after {self.max_retries} retries"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MaxRetriesExceeded):
            return NotImplemented
        return (self.description, self.max_retries) == (other.description, other.max_retries)

    def __hash__(self) -> int:
        return hash((self.description, self.max_retries))


class FatalError(Exception):
    """Raised by an action to stop retrying immediately."""

    def __init__(self, underlying: Any) -> None:
        super().__init__(underlying)
        self.underlying = underlying

    def __str__(self) -> str:
        return f"FatalError{{Underlying: {self.underlying}}}"


def do_with_retry(
    logger: Any,
    description: str,
    max_retries: int,
    sleep_between_retries: float | timedelta,
    action: Callable[[], T],
) -> T:
    """Run action, retrying on error up to max_retries times, and return its result.

    A FatalError raised by the action is re-raised at once. When every attempt
    fails, MaxRetriesExceeded is raised.
    """
    log = logger if logger is not None else _default_logger
    seconds = (
        sleep_between_retries.total_seconds()
        if isinstance(sleep_between_retries, timedelta)
        else float(sleep_between_retries)
    )

    last_error: Exception | None = None
    for attempt in range(1, max_retries + 2):
        log.info(description)
        try:
            return action()
        except FatalError as err:
            log.info("Returning due to fatal error: %s", err)
            raise
        except Exception as err:
            last_error = err
            log.info(
                "%s returned an error: %s. Attempt %d of %d. Sleeping for %ss and will retry.",
                description,
                err,
                attempt,
                max_retries,
                seconds,
            )
            time.sleep(seconds)

    raise MaxRetriesExceeded(description, max_retries) from last_error