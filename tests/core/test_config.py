"""Unit tests for src/core/config.py"""

from typing import Generator
from unittest.mock import patch

import pytest

from src.core.config import DEFAULT_LOG_FORMAT, Config, configure_logging, get_config


@pytest.fixture
def fresh_config() -> Generator[None, None, None]:
    """get_config is cached: clear it around every test that changes the environment"""
    get_config.cache_clear()
    try:
        yield
    finally:
        get_config.cache_clear()


def test_defaults(fresh_config: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OTHELLO_LOG_LEVEL", raising=False)
    monkeypatch.delenv("OTHELLO_LOG_FORMAT", raising=False)
    config = get_config()
    assert config.log_level == "INFO"
    assert config.log_format == DEFAULT_LOG_FORMAT


def test_read_from_environment(fresh_config: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OTHELLO_LOG_LEVEL", "debug")
    assert get_config().log_level == "DEBUG"


def test_configure_logging_uses_config() -> None:
    config = Config(log_level="WARNING", log_format="%(message)s", date_format="%H:%M")
    with patch("src.core.config.logging.basicConfig") as basic_config:
        configure_logging(config)
    basic_config.assert_called_once_with(level="WARNING", format="%(message)s", datefmt="%H:%M")
