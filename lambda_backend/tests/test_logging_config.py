import json
import logging

from lambda_backend.core import logging_config
from lambda_backend.core.request_context import clear_request_id, set_request_id


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="lambda_backend.backend",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Invoking %s",
        args=("hello",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_request_id_and_extra():
    formatter = logging_config.CustomJsonFormatter()
    set_request_id("req-123")
    try:
        output = json.loads(formatter.format(_record(function_name="hello")))
    finally:
        clear_request_id()

    assert output["level"] == "INFO"
    assert output["logger"] == "lambda_backend.backend"
    assert output["message"] == "Invoking hello"
    assert output["aws_request_id"] == "req-123"
    assert output["function_name"] == "hello"
    assert output["_time"].endswith("+00:00")


def test_json_formatter_without_request_context():
    output = json.loads(logging_config.CustomJsonFormatter().format(_record()))

    assert "aws_request_id" not in output


def test_setup_logging_substitutes_environment(tmp_path, monkeypatch):
    captured = {}
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setattr(logging_config.logging.config, "dictConfig", captured.update)
    path = tmp_path / "logging.yml"
    path.write_text("version: 1\nroot:\n  level: ${LOG_LEVEL}\n", encoding="utf-8")

    logging_config.setup_logging(str(path))

    assert captured == {"version": 1, "root": {"level": "DEBUG"}}


def test_setup_logging_missing_file_falls_back(tmp_path, monkeypatch):
    captured = {}
    monkeypatch.setattr(logging_config.logging, "basicConfig", lambda **kw: captured.update(kw))

    logging_config.setup_logging(str(tmp_path / "missing.yml"), log_level="WARNING")

    assert captured == {"level": "WARNING"}
