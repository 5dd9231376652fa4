"""Tests for logging service configuration."""

import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

from lotdues.services.logging import get_log_level, setup_server_logging


class TestServerLogging:
    """Test server logging configuration."""

    def setup_method(self):
        """Save original handlers before each test."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level

    def teardown_method(self):
        """Restore original handlers after each test."""
        self.root_logger = logging.getLogger()
        for handler in self.root_logger.handlers[:]:
            handler.close()
            self.root_logger.removeHandler(handler)
        for handler in self.original_handlers:
            self.root_logger.addHandler(handler)
        self.root_logger.setLevel(self.original_level)

    def test_setup_server_logging_creates_log_directory(self) -> None:
        """Verify setup_server_logging creates logs directory if missing."""
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "test_logs" / "server.log"

            assert not log_file.parent.exists()

            setup_server_logging(str(log_file))

            assert log_file.parent.exists()

    def test_setup_server_logging_creates_handlers(self) -> None:
        """Verify setup_server_logging creates both stdout and file handlers."""
        with tempfile.TemporaryDirectory() as temp_dir:
            setup_server_logging(str(Path(temp_dir) / "server.log"))

            assert len(self.root_logger.handlers) == 2

    def test_setup_server_logging_uses_env_level(self) -> None:
        """Verify root and handler levels follow LOG_LEVEL."""
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch.dict("os.environ", {"LOG_LEVEL": "WARNING"}, clear=False):
                setup_server_logging(str(Path(temp_dir) / "server.log"))

                assert self.root_logger.level == logging.WARNING
                for handler in self.root_logger.handlers:
                    assert handler.level == logging.WARNING

    def test_setup_server_logging_writes_to_file(self) -> None:
        """Verify log messages reach the file with name and level."""
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "server.log"

            with patch.dict("os.environ", {"LOG_LEVEL": "INFO"}, clear=False):
                setup_server_logging(str(log_file))

            logging.getLogger("lotdues.test").info("Quota report generated")

            log_contents = log_file.read_text()
            assert "Quota report generated" in log_contents
            assert "lotdues.test" in log_contents
            assert "INFO" in log_contents
            assert "[20" in log_contents

    def test_setup_server_logging_removes_existing_handlers(self) -> None:
        """Verify repeated setup does not duplicate handlers."""
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "server.log"
            dummy_handler = logging.StreamHandler()
            self.root_logger.addHandler(dummy_handler)

            setup_server_logging(str(log_file))
            setup_server_logging(str(log_file))

            assert len(self.root_logger.handlers) == 2
            assert dummy_handler not in self.root_logger.handlers

    def test_get_log_level_fallback(self) -> None:
        """Unknown level names fall back to INFO."""
        with patch.dict("os.environ", {"LOG_LEVEL": "chatty"}, clear=False):
            assert get_log_level() == logging.INFO
        with patch.dict("os.environ", {"LOG_LEVEL": "debug"}, clear=False):
            assert get_log_level() == logging.DEBUG

    def test_explicit_level_wins_over_env(self) -> None:
        """The configured level is used even when LOG_LEVEL says otherwise."""
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch.dict("os.environ", {"LOG_LEVEL": "DEBUG"}, clear=False):
                setup_server_logging(str(Path(temp_dir) / "server.log"), "ERROR")

            assert self.root_logger.level == logging.ERROR

    def test_database_loggers_quiet_unless_debug(self) -> None:
        """SQL logging only follows the root level in DEBUG."""
        sql_logger = logging.getLogger("sqlalchemy.engine")
        original = sql_logger.level
        try:
            with tempfile.TemporaryDirectory() as temp_dir:
                setup_server_logging(str(Path(temp_dir) / "server.log"), "INFO")
                assert sql_logger.level == logging.WARNING

                setup_server_logging(str(Path(temp_dir) / "server.log"), "DEBUG")
                assert sql_logger.level == logging.DEBUG
        finally:
            sql_logger.setLevel(original)

    def test_get_log_level_explicit_name(self) -> None:
        assert get_log_level(" warning ") == logging.WARNING
