"""Tests for structured logging setup."""

import json

import pytest
import structlog

from sprintsim.logging_config import configure_logging, get_logger


@pytest.fixture
def restore_logging():
    saved = structlog.get_config()
    yield
    structlog.configure(**saved)


class TestConfigureLogging:
    """Tests for console and JSON output."""

    def test_json_output(self, restore_logging, capsys):
        configure_logging(log_level="INFO", log_format="json")
        get_logger("sprintsim.simulation.race").info("race_started", lanes=6)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "race_started"
        assert record["component"] == "race"
        assert record["lanes"] == 6
        assert record["level"] == "info"

    def test_level_filtering(self, restore_logging, capsys):
        configure_logging(log_level="WARNING", log_format="json")
        logger = get_logger("sprintsim.simulation.state")
        logger.info("hidden")
        logger.warning("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_console_output(self, restore_logging, capsys):
        configure_logging(log_level="DEBUG", log_format="console", enable_colors=False)
        get_logger("sprintsim.host.headless", run=3).debug("quiz_shown")

        err = capsys.readouterr().err
        assert "quiz_shown" in err
        assert "run=3" in err
