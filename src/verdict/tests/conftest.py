"""Pytest configuration: settings and logging isolation for every test."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from verdict.foundation.config import clear_settings_cache
from verdict.runtime.observability import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop VERDICT_* env vars, reload settings, and silence log output."""
    for key in [k for k in os.environ if k.startswith("VERDICT_")]:
        monkeypatch.delenv(key)
    clear_settings_cache()
    configure_logging(format="none")
    yield
    reset_logging()
    clear_settings_cache()
