import json
import logging

import pytest

from config.logging_config import SERVICE_NAME, AssessmentJsonFormatter, setup_logging

@pytest.fixture
def restore_root_level():
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    root_logger.setLevel(level)

def test_formatter_emits_one_json_object():
    record = logging.LogRecord(
        name="services.readiness_engine.engine",
        level=logging.INFO,
        pathname="services/readiness_engine/engine.py",
        lineno=42,
        msg="Loaded %s",
        args=("content",),
        exc_info=None,
    )
    payload = json.loads(AssessmentJsonFormatter('%(message)s').format(record))

    assert payload["message"] == "Loaded content"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "services.readiness_engine.engine"
    assert payload["source"] == "engine:42"
    assert payload["service"] == SERVICE_NAME
    assert payload["timestamp"].endswith("+00:00")

def test_setup_logging_installs_a_single_handler(restore_root_level):
    first = setup_logging("DEBUG")
    second = setup_logging("WARNING")

    assert first is second
    json_handlers = [
        h for h in logging.getLogger().handlers if isinstance(h.formatter, AssessmentJsonFormatter)
    ]
    assert json_handlers == [first]
    assert logging.getLogger().level == logging.WARNING

def test_server_logs_are_routed_through_root(restore_root_level):
    access_logger = logging.getLogger("uvicorn.access")
    access_logger.addHandler(logging.NullHandler())
    access_logger.propagate = False

    setup_logging("INFO")

    assert access_logger.handlers == []
    assert access_logger.propagate is True
