import json
import logging

import pytest

from castgraph.core.logging import JsonFormatter, log_calls


def test_json_formatter_includes_extras():
    record = logging.LogRecord("castgraph.test", logging.INFO, __file__, 1, "saved %d", (3,), None)
    record.project_id = "p1"
    data = json.loads(JsonFormatter().format(record))
    assert data["message"] == "saved 3"
    assert data["project_id"] == "p1"
    assert data["level"] == "INFO"


def test_log_calls_logs_and_reraises(caplog):
    @log_calls
    def explode():
        raise KeyError("x")

    with caplog.at_level(logging.DEBUG):
        with pytest.raises(KeyError):
            explode()
    assert any("Error in" in r.getMessage() for r in caplog.records)


async def test_log_calls_wraps_coroutines():
    @log_calls
    async def double(x):
        return x * 2

    assert await double(4) == 8
