import json
import logging
import sys

from user_service.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(exc_info=None):
    return logging.LogRecord("user_service", logging.INFO, __file__, 10, "hello %s", ("tester",), exc_info)


def test_json_formatter_basic_fields():
    rec = make_record()
    rec.user_name = "LimbMissing"
    rec.request_id = "req-1"

    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["logger"] == "user_service"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert data["request_id"] == "req-1"
    assert data["user_name"] == "LimbMissing"
    assert "timestamp" in data
    assert "version" in data


def test_json_formatter_leaves_out_builtin_record_attributes():
    data = json.loads(JsonFormatter(env="testing").format(make_record()))

    for attr in ("args", "msg", "levelno", "thread", "processName"):
        assert attr not in data


def test_json_formatter_stringifies_non_serializable_extra():
    rec = make_record()

    class Opaque:
        def __repr__(self):
            return "<Opaque>"

    rec.obj = Opaque()

    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))

    assert data["obj"] == "<Opaque>"


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        rec = make_record(exc_info=sys.exc_info())

    data = json.loads(JsonFormatter(env="dev").format(rec))

    assert "ValueError: boom" in data["exc_info"]


def test_color_formatter_line_layout():
    rec = make_record()
    rec.request_id = "req-2"

    line = ColorFormatter().format(rec)

    assert "INFO" in line
    assert "req-2" in line
    assert line.endswith("hello tester")
