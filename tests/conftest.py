"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from loxexpr.core.config import LOG_LEVEL_ENV


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run each test from an empty directory with no config overrides."""
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
