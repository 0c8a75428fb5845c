from datetime import timedelta

import pytest

from opscommons.logs import get_logger
from opscommons.retry import FatalError, MaxRetriesExceeded, do_with_retry

EXPECTED_OUTPUT = "expected"


class ExpectedError(Exception):
    pass


def always_returns_expected():
    return EXPECTED_OUTPUT


def always_raises():
    raise ExpectedError("expected error")


def returns_expected_after_five_failures():
    count = 0

    def action():
        nonlocal count
        count += 1
        if count > 5:
            return EXPECTED_OUTPUT
        raise ExpectedError("expected error")

    return action


@pytest.mark.parametrize(
    "description, max_retries, action",
    [
        ("Return value on first try", 10, always_returns_expected),
        ("Return value after 5 retries", 10, returns_expected_after_five_failures()),
    ],
)
def test_do_with_retry_success(description, max_retries, action):
    result = do_with_retry(get_logger("test", ""), description, max_retries, 0.001, action)
    assert result == EXPECTED_OUTPUT


@pytest.mark.parametrize(
    "description, max_retries, action",
    [
        ("Return error on all retries", 10, always_raises),
        (
            "Return value after 5 retries, but only do 4 retries",
            4,
            returns_expected_after_five_failures(),
        ),
    ],
)
def test_do_with_retry_exceeds(description, max_retries, action):
    with pytest.raises(MaxRetriesExceeded) as info:
        do_with_retry(get_logger("test", ""), description, max_retries, 0.001, action)
    assert info.value == MaxRetriesExceeded(description, max_retries)
    assert isinstance(info.value.__cause__, ExpectedError)


def test_fatal_error_stops_immediately():
    calls = []

    def action():
        calls.append(1)
        raise FatalError(ExpectedError("boom"))

    with pytest.raises(FatalError) as info:
        do_with_retry(get_logger("test", ""), "fatal", 10, timedelta(milliseconds=1), action)
    assert len(calls) == 1
    assert isinstance(info.value.underlying, ExpectedError)


def test_attempt_count_is_max_retries_plus_one():
    calls = []

    def action():
        calls.append(1)
        raise ExpectedError("fail")

    with pytest.raises(MaxRetriesExceeded):
        do_with_retry(None, "count", 3, 0, action)
    assert len(calls) == 4


def test_max_retries_exceeded_message():
    err = MaxRetriesExceeded("Return error on all retries", 10)
    assert str(err) == "'Return error on all retries' unsuccessful after 10 retries"


def test_fatal_error_message():
    assert str(FatalError("inner")) == "FatalError{Underlying: inner}"