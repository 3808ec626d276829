"""Pytest configuration and shared fixtures for all tests."""

from datetime import datetime, timezone

import pytest

from eol_check._evaluation import LifecycleCycle


@pytest.fixture(autouse=True)
def disable_sentry_for_tests(monkeypatch):
    """Disable Sentry telemetry for all tests.

    Tests that specifically exercise Sentry initialisation override this by
    setting TELEMETRY themselves.
    """
    monkeypatch.setenv("TELEMETRY", "false")
    monkeypatch.delenv("SENTRY_DSN", raising=False)


@pytest.fixture(autouse=True)
def isolated_cache_dir(monkeypatch, tmp_path):
    """Keep the on-disk lifecycle cache out of the user's cache directory."""
    cache_dir = tmp_path / "eol-cache"
    monkeypatch.setenv("EOL_CHECK_CACHE_DIR", str(cache_dir))
    return cache_dir


@pytest.fixture
def now():
    """Fixed reference time: mid December 2025."""
    return datetime(2025, 12, 15, tzinfo=timezone.utc)


@pytest.fixture
def node_cycles():
    return (
        LifecycleCycle(cycle="18", eol="2026-10-30"),
        LifecycleCycle(cycle="16", eol="2023-09-11"),
        LifecycleCycle(cycle="20", eol="2026-02-01"),
    )
