# tests/test_settings.py
import logging

import pytest
from pydantic import ValidationError

from rental.config.settings import LoggingSettings, RentalPolicySettings, Settings
from rental.utils.logging_utils import get_session_id, setup_logger


def test_defaults(monkeypatch):
    for name in ("RENTAL_TERM_DAYS", "LOG_LEVEL", "LOG_FILE_ENABLED", "DEBUG_MODE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.policy.rental_term_days == 14
    assert settings.logging.level == "INFO"
    assert settings.logging.file_enabled is False
    assert settings.effective_log_level() == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RENTAL_TERM_DAYS", "21")
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("DEBUG_MODE", "yes")

    settings = Settings()

    assert settings.policy.rental_term_days == 21
    assert settings.logging.level == "WARNING"
    assert settings.debug_mode is True
    assert settings.effective_log_level() == "DEBUG"


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        RentalPolicySettings(rental_term_days=0)
    with pytest.raises(ValidationError):
        LoggingSettings(level="LOUD")


def test_setup_logger_writes_session_files(tmp_path):
    logger = setup_logger(
        "rental.tests.file_logger",
        level="DEBUG",
        session_id="session-1",
        console_enabled=False,
        file_enabled=True,
        log_dir=tmp_path
    )
    logger.debug("card issued")
    for handler in logger.handlers:
        handler.flush()

    assert get_session_id(logger) == "session-1"
    assert logger.level == logging.DEBUG
    assert "card issued" in (tmp_path / "session-1" / "session.log").read_text()
    assert (tmp_path / "session-1" / "rental.tests.file_logger.log").exists()

    # Already configured loggers are returned unchanged
    assert setup_logger("rental.tests.file_logger") is logger
    assert len(logger.handlers) == 2
