from __future__ import annotations

import logging

import pytest

from core.logging_config import LOGGER_NAME

_ENV_VARS = (
    "REPLICATED_API_TOKEN",
    "REPLICATED_ENDPOINT",
    "REPLICATED_TIMEOUT_SECONDS",
    "REPLICATED_LOG_LEVEL",
    "REPLICATED_USER_AGENT",
    "REPLICATED_STRICT_VALIDATION",
    "REPLICATED_MAX_RETRIES",
    "REPLICATED_BACKOFF_BASE_SECONDS",
    "REPLICATED_SEARCH_PAGE_SIZE",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Sin variables REPLICATED_* heredadas ni `.env` del proyecto."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
