import json
import logging
import sys

from agent_lab.logging import JsonFormatter


def test_json_formatter_renders_one_object():
    record = logging.LogRecord(
        name="agent_lab.services.resources",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="resource_list name=%s total=%s",
        args=("agents", 3),
        exc_info=None,
    )
    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "agent_lab.services.resources"
    assert payload["message"] == "resource_list name=agents total=3"
    assert "exc_info" not in payload


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        exc_info = sys.exc_info()
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), exc_info)
    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc_info"]
