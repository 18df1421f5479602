"""
Tests for structured logging setup.
"""

import json
import logging

import pytest
import structlog

from userapi.core.logging import get_logger, setup_logging


@pytest.fixture
def root_logger():
    """Root logger, with structlog handlers removed and the level restored afterwards."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_repeated_setup_replaces_own_handlers(self, root_logger):
        foreign = logging.NullHandler()
        root_logger.addHandler(foreign)

        setup_logging("INFO", "console")
        setup_logging("DEBUG", "json")

        structured = [
            h for h in root_logger.handlers
            if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
        ]
        assert len(structured) == 1
        assert foreign in root_logger.handlers
        assert root_logger.level == logging.DEBUG
        root_logger.removeHandler(foreign)

    def test_file_handler_writes_json(self, root_logger, tmp_path):
        log_file = tmp_path / "userapi.log"
        setup_logging("INFO", "console", str(log_file))

        get_logger("userapi.tests").info("Created user", user_id=1)

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "Created user"
        assert record["user_id"] == 1
        assert record["level"] == "info"

    def test_file_handler_dropped_on_reconfigure(self, root_logger, tmp_path):
        setup_logging("INFO", "json", str(tmp_path / "first.log"))
        setup_logging("INFO", "json")

        file_handlers = [h for h in root_logger.handlers if isinstance(h, logging.FileHandler)]
        assert file_handlers == []
