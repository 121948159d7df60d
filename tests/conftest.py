# tests/conftest.py
import pytest
from loguru import logger

from date_tasks.config.app_config import TZ_ENV
from date_tasks.core.instant import UTC, set_local_timezone


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture(autouse=True)
def utc_local_timezone(monkeypatch):
    """
    Every test starts with local time == UTC and no env override.
    """
    monkeypatch.delenv(TZ_ENV, raising=False)
    set_local_timezone(UTC)
    yield
    set_local_timezone(UTC)


@pytest.fixture
def log_messages():
    messages = []
    logger.add(messages.append, level="DEBUG", format="{level} | {message}")
    return messages
