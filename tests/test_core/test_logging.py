import json
import logging

from concept_server.core.logging import JsonFormatter, get_log_config, log_error


def test_json_formatter():
    record = logging.LogRecord("concept_server.test", logging.ERROR, __file__, 1, "failed %s", ("op",), None)
    record.context = {"collection": "users"}

    entry = json.loads(JsonFormatter(environment="production").format(record))

    assert entry["message"] == "failed op"
    assert entry["level"] == "ERROR"
    assert entry["environment"] == "production"
    assert entry["context"] == {"collection": "users"}


def test_console_formatter_by_environment():
    assert get_log_config("production", "INFO")["handlers"]["console"]["formatter"] == "json"
    assert get_log_config("development", "INFO")["handlers"]["console"]["formatter"] == "standard"


def test_log_error_attaches_context(caplog):
    logger = logging.getLogger("concept_server.test")

    with caplog.at_level(logging.ERROR, logger="concept_server.test"):
        log_error(logger, ValueError("bad"), "Operation failed", {"collection": "users"})

    record = caplog.records[-1]
    assert record.getMessage() == "Operation failed"
    assert record.context == {
        "error_type": "ValueError",
        "error_message": "bad",
        "collection": "users",
    }
