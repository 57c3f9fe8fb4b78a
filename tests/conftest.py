from decimal import Decimal

import pytest

from iexpense.models import Category, ExpenseRecord
from iexpense.services import ExpenseStore
from iexpense.storage import KeyValueStore, MemoryKeyValueStore
from iexpense.exceptions import PersistenceError


class FailingKeyValueStore(KeyValueStore):
    """Reads normally but refuses every write."""

    def __init__(self) -> None:
        self.inner = MemoryKeyValueStore()

    def get(self, key):
        return self.inner.get(key)

    def set(self, key, data):
        raise PersistenceError("disk full")


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
def store(kv_store):
    return ExpenseStore(kv_store)


@pytest.fixture
def failing_kv_store():
    return FailingKeyValueStore()


@pytest.fixture
def make_record():
    def _make(name="Lunch", category=Category.PERSONAL, amount="12.50"):
        return ExpenseRecord(name=name, category=category, amount=Decimal(amount))

    return _make
