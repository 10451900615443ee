import json
import logging

from week_planner.logging_setup import LOG_LEVEL_ENV, JsonFormatter, level_from_env


def test_json_formatter_includes_extras():
    record = logging.LogRecord("week_planner.test", logging.INFO, __file__, 1, "added %s", ("x",), None)
    record._json_count = 3
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "added x"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "week_planner.test"
    assert payload["count"] == 3


def test_level_from_env(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert level_from_env() == logging.DEBUG
    monkeypatch.setenv(LOG_LEVEL_ENV, "bogus")
    assert level_from_env() == logging.INFO
    monkeypatch.delenv(LOG_LEVEL_ENV)
    assert level_from_env(logging.WARNING) == logging.WARNING
