import json
import logging
import sys

from student_records.logging_config import (
    StructuredJsonFormatter, get_logger, request_id_var
)


def _record(logger_name="app.students", **extra):
    record = logging.LogRecord(logger_name, logging.INFO, __file__, 1, "Student created: %s", ("abc",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_entry_as_json():
    token = request_id_var.set("req-123")
    try:
        line = StructuredJsonFormatter().format(_record(
            channel="students",
            context={"student_id": "abc"},
            extra_data={"duration_ms": 1.5},
        ))
    finally:
        request_id_var.reset(token)

    entry = json.loads(line)
    assert entry["level"] == "INFO"
    assert entry["message"] == "Student created: abc"
    assert entry["channel"] == "students"
    assert entry["context"] == {"request_id": "req-123", "student_id": "abc"}
    assert entry["extra"] == {"duration_ms": 1.5}
    assert entry["timestamp"].endswith("Z")


def test_channel_defaults_to_logger_suffix():
    entry = json.loads(StructuredJsonFormatter().format(_record("app.db")))
    assert entry["channel"] == "db"
    assert entry["context"] == {"request_id": ""}
    assert entry["extra"] == {}


def test_get_logger_uses_app_prefix():
    assert get_logger("http").name == "app.http"


def test_attached_exception_is_rendered():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record(exc_info=sys.exc_info())

    entry = json.loads(StructuredJsonFormatter().format(record))
    assert "RuntimeError: boom" in entry["exception"]
