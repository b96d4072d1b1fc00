"""Shared fixtures for inventory ledger tests."""
import pytest

from inventory_ledger.persistence import MemoryPersistence
from inventory_ledger.store import ItemStore


@pytest.fixture
def memory():
    return MemoryPersistence()


@pytest.fixture
def store(memory):
    """An empty store backed by in-memory persistence."""
    return ItemStore.open(memory)


@pytest.fixture
def sample_store(store):
    """Store with three items: 5 x 2, 3 x 4 and 2.5 x 4."""
    store.add("5", "2.00")
    store.add("3", "4.00")
    store.add("2.5", "4")
    return store


@pytest.fixture
def many_items(store):
    """23 items; Item n has stock n and price 1."""
    for n in range(1, 24):
        store.add(str(n), "1")
    return store.list_items()
