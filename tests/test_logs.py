import io
import json
import logging

import pytest

from opscommons import logs


@pytest.fixture(autouse=True)
def reset_globals():
    logs.set_global_log_level(logging.INFO)
    logs.set_global_log_formatter("text")
    yield
    logs.set_global_log_level(logging.INFO)
    logs.set_global_log_formatter("text")


def capture(entry):
    buffer = io.StringIO()
    entry.logger.handlers[0].setStream(buffer)
    return buffer


def test_json_formatter_includes_fields():
    logs.set_global_log_formatter("json")
    entry = logs.get_logger("app", "1.2")
    buffer = capture(entry)
    entry.info("hello")
    record = json.loads(buffer.getvalue().strip())
    assert record["binary"] == "app"
    assert record["version"] == "1.2"
    assert record["msg"] == "hello"
    assert record["level"] == "info"


def test_text_formatter_is_not_json():
    entry = logs.get_logger("app", "1.2")
    buffer = capture(entry)
    entry.info("hello")
    output = buffer.getvalue()
    assert "hello" in output
    assert "app" in output
    with pytest.raises(json.JSONDecodeError):
        json.loads(output)


def test_level_filters_messages():
    logs.set_global_log_level(logging.WARNING)
    entry = logs.get_logger("app", "")
    buffer = capture(entry)
    entry.info("quiet message")
    entry.warning("loud message")
    output = buffer.getvalue()
    assert "quiet message" not in output
    assert "loud message" in output


def test_level_by_name():
    logs.set_global_log_level("error")
    entry = logs.get_logger("app", "")
    assert not entry.isEnabledFor(logging.WARNING)
    assert entry.isEnabledFor(logging.ERROR)


def test_level_only_affects_new_loggers():
    before = logs.get_logger("before", "")
    logs.set_global_log_level(logging.ERROR)
    after = logs.get_logger("after", "")
    assert before.isEnabledFor(logging.INFO)
    assert not after.isEnabledFor(logging.INFO)


def test_unknown_level_raises():
    with pytest.raises(ValueError):
        logs.set_global_log_level("loudest")


def test_project_logger_has_name_field():
    logs.set_global_log_formatter("json")
    entry = logs.get_project_logger()
    buffer = capture(entry)
    entry.info("project")
    record = json.loads(buffer.getvalue().strip())
    assert record["name"] == "opscommons"
    assert record["msg"] == "project"


def test_loggers_are_independent():
    first = logs.get_logger("first", "")
    second = logs.get_logger("second", "")
    first_buffer = capture(first)
    second_buffer = capture(second)
    first.info("only first")
    assert "only first" in first_buffer.getvalue()
    assert second_buffer.getvalue() == ""