"""
Unit tests for the main entry point.

Run with: pytest tests/test_main.py -v
"""

import sys
import logging
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import main
from config.settings import Settings
from src.pipeline import PipelineResult, PipelineValidationError


# Captured before keep_caplog replaces it on the module
REAL_CONFIGURE_LOGGING = main.configure_logging


@pytest.fixture(autouse=True)
def keep_caplog(monkeypatch):
    """Skip logging setup; basicConfig(force=True) would remove caplog's handler."""
    monkeypatch.setattr(main, 'configure_logging', lambda: None)


class TestValidateEnvironment:
    """Tests for validate_environment."""

    def test_missing_token_warns(self, caplog):
        """Test that a missing token is reported but not fatal."""
        with caplog.at_level(logging.WARNING):
            assert main.validate_environment(Settings(api_token='')) is False

        assert "WISE_API_TOKEN is not set" in caplog.text

    def test_token_present(self):
        """Test that a set token passes."""
        assert main.validate_environment(Settings(api_token='abc')) is True


class TestMain:
    """Tests for main()."""

    def test_failed_run_is_logged_without_exit(self, monkeypatch, caplog):
        """Test that a failed pipeline is logged and main returns normally."""
        failed = PipelineResult(
            success=False,
            failed_step="profile",
            failure="validation",
            error=PipelineValidationError("No personal profile found."),
        )
        monkeypatch.setenv('WISE_API_TOKEN', 'abc')
        monkeypatch.delenv('WISE_TIMEOUT', raising=False)
        monkeypatch.setattr(main, 'run_transfer', lambda settings: failed)

        with caplog.at_level(logging.INFO):
            main.main()

        assert "An error occurred during the transfer process:" in caplog.text
        assert "No personal profile found." in caplog.text

    def test_successful_run(self, monkeypatch, caplog):
        """Test the completion banner on success."""
        monkeypatch.setenv('WISE_API_TOKEN', 'abc')
        monkeypatch.delenv('WISE_TIMEOUT', raising=False)
        monkeypatch.setattr(main, 'run_transfer', lambda settings: PipelineResult(success=True))

        with caplog.at_level(logging.INFO):
            main.main()

        assert "Transfer complete" in caplog.text

    def test_configuration_error_is_logged(self, monkeypatch, caplog):
        """Test that invalid settings stop the run before any call."""
        calls = []
        monkeypatch.setenv('WISE_TIMEOUT', 'never')
        monkeypatch.setattr(main, 'run_transfer', lambda settings: calls.append(settings))

        with caplog.at_level(logging.ERROR):
            main.main()

        assert calls == []
        assert "Configuration error" in caplog.text

    def test_unexpected_error_is_caught(self, monkeypatch, caplog):
        """Test that an unexpected exception is logged at the top level."""
        def explode(settings):
            raise RuntimeError("bug")

        monkeypatch.delenv('WISE_TIMEOUT', raising=False)
        monkeypatch.setattr(main, 'run_transfer', explode)

        with caplog.at_level(logging.ERROR):
            main.main()

        assert "Fatal error: bug" in caplog.text


class TestConfigureLogging:
    """Tests for the stdout/stderr logging split."""

    @pytest.fixture
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers = root.handlers[:]
        level = root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_info_to_stdout_warning_to_stderr(self, capsys, restore_root_logger):
        """Test that INFO reaches only stdout and WARNING only stderr."""
        REAL_CONFIGURE_LOGGING()
        log = logging.getLogger("wise.transfer.test")

        log.info("Quote created")
        log.warning("No BANK_TRANSFER option")

        captured = capsys.readouterr()
        assert "INFO - Quote created" in captured.out
        assert "Quote created" not in captured.err
        assert "WARNING - No BANK_TRANSFER option" in captured.err
        assert "No BANK_TRANSFER option" not in captured.out

    def test_error_to_stderr(self, capsys, restore_root_logger):
        """Test that ERROR records also go to stderr."""
        REAL_CONFIGURE_LOGGING()

        logging.getLogger("wise.transfer.test").error("Status 401")

        captured = capsys.readouterr()
        assert "Status 401" in captured.err
        assert captured.out == ""
