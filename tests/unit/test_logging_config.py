"""Unit tests for structured logging setup."""

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

import aiqa.utils.logging_config as logging_module
from aiqa.errors import ValidationError
from aiqa.utils.logging_config import configure_logging, get_logger, is_configured


@pytest.fixture(autouse=True)
def reset_structlog():
    root_level = logging.getLogger().level
    yield
    structlog.reset_defaults()
    logging_module._configured = False
    logging.getLogger().setLevel(root_level)


def test_configure_logging_marks_configured():
    assert not is_configured()

    configure_logging(level="DEBUG", json_output=True)

    assert is_configured()


def test_get_logger_binds_initial_context():
    with capture_logs() as logs:
        get_logger("aiqa.test", component="review_service").info("review_item_assigned", item_id="r-1")

    assert logs == [{
        "component": "review_service",
        "item_id": "r-1",
        "event": "review_item_assigned",
        "log_level": "info",
    }]


def test_feedback_rejection_is_logged(feedback_service):
    with capture_logs() as logs:
        with pytest.raises(ValidationError):
            feedback_service.submit_feedback("q-1", "p-1", 0.0, 4.0, 4.0, 4.0)

    assert any(entry["event"] == "feedback_rejected" for entry in logs)


def service_events(caplog):
    return [
        json.loads(record.getMessage())
        for record in caplog.records
        if record.name == "aiqa.ops.feedback_service"
    ]


def test_service_events_render_as_json_after_configuration(feedback_service, caplog):
    configure_logging(level="INFO", json_output=True)
    caplog.set_level(logging.INFO)

    entry = feedback_service.submit_feedback("q-1", "p-1", 4.0, 4.0, 4.0, 4.0)

    events = service_events(caplog)
    assert [e["event"] for e in events] == ["feedback_submitted"]
    assert events[0]["component"] == "feedback"
    assert events[0]["level"] == "info"
    assert events[0]["feedback_id"] == entry.id


def test_configuration_defaults_come_from_environment(monkeypatch, feedback_service, caplog):
    monkeypatch.setenv("AIQA_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("AIQA_LOG_JSON", "true")
    configure_logging()
    caplog.set_level(logging.DEBUG)

    feedback_service.submit_feedback("q-1", "p-1", 2.0, 2.0, 2.0, 2.0)

    assert [e["event"] for e in service_events(caplog)] == ["feedback_flagged_for_review"]
