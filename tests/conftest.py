"""Shared fixtures for FinHealth tests."""

from itertools import count

import pytest

from finhealth.engine.store import FinancialStore
from finhealth.storage.snapshot import InMemorySnapshotStore


@pytest.fixture
def id_sequence():
    """Deterministic id generator: '1', '2', '3', ..."""
    counter = count(1)
    return lambda: str(next(counter))


@pytest.fixture
def snapshots() -> InMemorySnapshotStore:
    return InMemorySnapshotStore()


@pytest.fixture
def store(snapshots, id_sequence) -> FinancialStore:
    return FinancialStore.open("test", snapshots, id_generator=id_sequence)
