"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest

from tests.helpers.objects import Person


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch):
    """Provide default settings for all tests."""
    for key in list(os.environ):
        if key.startswith("DATA_EXTRACTOR_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DATA_EXTRACTOR_LOG_JSON", "false")
    monkeypatch.setenv("DATA_EXTRACTOR_LOG_LEVEL", "debug")

    # Reset cached settings and package log handlers
    import data_extractor.config.loader as loader
    from data_extractor.logging_config import reset_logging
    loader._settings = None
    reset_logging()
    yield
    loader._settings = None
    reset_logging()


@pytest.fixture
def person():
    return Person()
