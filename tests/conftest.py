"""Shared fixtures for the expense ledger tests."""

from __future__ import annotations

import logging
from datetime import date

import pytest

from smart_expenses import logging_utils
from smart_expenses.ledger import Ledger
from smart_expenses.storage import MemoryBlobStore

FIXED_TODAY = date(2024, 3, 15)


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def ledger(store: MemoryBlobStore) -> Ledger:
    return Ledger(store, today=lambda: FIXED_TODAY)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment settings out of the tests."""
    for name in (
        "SMART_EXPENSES_ENV",
        "SMART_EXPENSES_ALLOWED_ORIGINS",
        "SMART_EXPENSES_DATA_DIR",
        "SMART_EXPENSES_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch: pytest.MonkeyPatch):
    """Drop handlers installed by entry points so each test starts unconfigured."""
    root = logging.getLogger("smart_expenses")
    handlers = list(root.handlers)
    level = root.level
    monkeypatch.setattr(logging_utils, "_CONFIGURED", False)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
