"""
Tests for logging configuration.
"""

import json
import logging
import sys

import pytest

from src.analytics import FixedClock, LaunchAnalyticsEngine
from src.orchestrator.logging_config import JSONFormatter, setup_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:

    def test_record_fields(self):
        record = logging.LogRecord("src.analytics.engine", logging.INFO, __file__, 1, "Analyzed %d", (4,), None)
        record.category = "AI"
        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "src.analytics.engine"
        assert data["msg"] == "Analyzed 4"
        assert data["category"] == "AI"
        assert "slug" not in data

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestSetupLogging:

    def test_console_only(self, restore_root):
        setup_logging(level="DEBUG")
        assert restore_root.level == logging.DEBUG
        assert len(restore_root.handlers) == 1

    def test_json_and_file(self, restore_root, tmp_path):
        log_file = tmp_path / "logs" / "launchpulse.log"
        setup_logging(level="INFO", json_output=True, log_file=str(log_file))

        assert len(restore_root.handlers) == 2
        assert all(isinstance(h.formatter, JSONFormatter) for h in restore_root.handlers)
        assert log_file.parent.exists()
        for handler in restore_root.handlers:
            handler.close()


class TestEngineRecords:
    """The engine's summary line carries its analysis fields into JSON."""

    def test_analysis_fields_reach_json(self, caplog, ranked_products, now):
        caplog.set_level(logging.INFO, logger="src.analytics.engine")
        LaunchAnalyticsEngine(clock=FixedClock(now)).analyze(
            ranked_products, category="AI", tracked_slug="bravo",
        )

        record = next(r for r in caplog.records if r.name == "src.analytics.engine")
        data = json.loads(JSONFormatter().format(record))

        assert data["products"] == 4
        assert data["score"] == 95
        assert data["momentum"] == "STABLE"
        assert data["category"] == "AI"
        assert data["slug"] == "bravo"

    def test_unset_fields_are_omitted(self, caplog, ranked_products, now):
        caplog.set_level(logging.INFO, logger="src.analytics.engine")
        LaunchAnalyticsEngine(clock=FixedClock(now)).analyze(ranked_products[:2])

        record = next(r for r in caplog.records if r.name == "src.analytics.engine")
        data = json.loads(JSONFormatter().format(record))

        assert data["products"] == 2
        assert "momentum" not in data
        assert "category" not in data
        assert "slug" not in data
