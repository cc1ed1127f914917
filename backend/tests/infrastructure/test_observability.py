"""JSON log formatter tests."""

import json
import logging
from datetime import datetime, timezone

from jsonspark.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "jsonspark.request", logging.INFO, __file__, 1, "GET /api 200", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_base_fields_present():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "jsonspark.request"
    assert log["message"] == "GET /api 200"
    assert "timestamp" in log


def test_known_extra_fields_surfaced():
    log = json.loads(JSONFormatter().format(
        _record(slug="widgets", status_code=200, duration_ms=1.5, unrelated="x"),
    ))
    assert log["slug"] == "widgets"
    assert log["status_code"] == 200
    assert log["duration_ms"] == 1.5
    assert "unrelated" not in log


def test_non_serializable_extras_are_stringified():
    when = datetime(2024, 1, 1, tzinfo=timezone.utc)
    log = json.loads(JSONFormatter().format(_record(slug=when)))
    assert log["slug"] == str(when)


def test_setup_logging_installs_single_handler():
    setup_logging("INFO", "json")
    setup_logging("DEBUG", "text")
    named = [h for h in logging.root.handlers if h.get_name() == "jsonspark"]
    assert len(named) == 1
    assert logging.root.level == logging.DEBUG
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
