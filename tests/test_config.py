import logging

import pytest

from sn2simulation.config import LOG_FILE_ENV, LOG_LEVEL_ENV, PlaybackConfig, get_log_file, get_log_level
from sn2simulation.logging_config import setup_logging


def test_defaults():
    config = PlaybackConfig()
    assert config.tick_step == 0.125
    assert config.countdown_seconds == 3
    assert config.pause_progress == 50.0
    assert config.rearm_below == 49.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tick_step": 0.0},
        {"frame_interval_ms": 0},
        {"countdown_interval_ms": -5},
        {"countdown_seconds": 0},
        {"pause_progress": 100.0},
        {"pause_progress": 0.0},
        {"rearm_below": 60.0},
    ],
)
def test_invalid_settings_are_rejected(kwargs):
    with pytest.raises(ValueError):
        PlaybackConfig(**kwargs)


def test_log_level_from_environment(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert get_log_level() == logging.INFO

    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert get_log_level() == logging.DEBUG

    monkeypatch.setenv(LOG_LEVEL_ENV, "not-a-level")
    assert get_log_level(logging.WARNING) == logging.WARNING


def test_log_file_from_environment(monkeypatch, tmp_path):
    monkeypatch.delenv(LOG_FILE_ENV, raising=False)
    assert get_log_file() is None
    monkeypatch.setenv(LOG_FILE_ENV, str(tmp_path / "sn2.log"))
    assert get_log_file() == str(tmp_path / "sn2.log")


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "app.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    setup_logging(level=logging.DEBUG, log_file=str(log_file))

    logger = logging.getLogger("sn2simulation")
    assert len(logger.handlers) == 2  # no duplicates after re-initialisation
    logging.getLogger("sn2simulation.test").debug("hello")
    for handler in logger.handlers:
        handler.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
