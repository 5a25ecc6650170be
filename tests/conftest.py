"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from verledger.config import LedgerSettings
from verledger.ledger import ReleaseLedger
from verledger.storage import MemoryDocumentStore


class StepClock:
    """Deterministic clock: each call is one minute after the previous."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2025, 8, 17, 1, 4, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def ledger(store: MemoryDocumentStore, clock: StepClock) -> ReleaseLedger:
    """A ledger over an empty in-memory store."""
    return ReleaseLedger(store, clock=clock)


@pytest.fixture
def settings(tmp_path: Path) -> LedgerSettings:
    """Settings pointing at a version file inside tmp_path."""
    return LedgerSettings(version_file=tmp_path / "version.json")
