"""Shared test fixtures.

Environment defaults are set before any application import so that
config.settings.Settings() can be instantiated without a .env file.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("OWNER_ID", "owner")

import pytest  # noqa: E402

from tests.harness import LedgerHarness  # noqa: E402


@pytest.fixture
def harness() -> LedgerHarness:
    return LedgerHarness()
