"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import pytest

from tests.helpers.fake_logger import FakeLogger

_RUNNER_ENV = (
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "GITHUB_OUTPUT",
    "COMMIT_METADATA_LOG_LEVEL",
    "INPUT_LOG_LEVEL",
    "RUNNER_DEBUG",
)


@pytest.fixture(autouse=True)
def isolated_runner_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Hide the surrounding runner's environment from every test."""
    for name in _RUNNER_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def extractor_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    """Replace the extractor's module logger with a recording fake."""
    logger = FakeLogger()
    monkeypatch.setattr("commit_metadata.extractor.logger", logger)
    return logger


@pytest.fixture
def action_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    """Replace the action's module logger with a recording fake."""
    logger = FakeLogger()
    monkeypatch.setattr("commit_metadata.action.logger", logger)
    return logger
