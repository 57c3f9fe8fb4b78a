"""The observable, persisted collection of expense records."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Iterable, Iterator, List, Tuple

from .exceptions import DecodeError, OutOfRangeError, PersistenceError
from .models import ExpenseRecord, decode_records, encode_records
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

STORE_KEY = "Items"

Observer = Callable[["ExpenseStore"], None]
ErrorObserver = Callable[[Exception], None]


class ExpenseStore:
    """Owns the ordered expense sequence and mediates persistence.

    Every structural mutation commits in memory, writes the whole sequence
    back under :data:`STORE_KEY`, then notifies observers synchronously.
    Persistence failures never propagate; they are logged and published to
    error observers registered with :meth:`subscribe_errors`.
    """

    def __init__(self, kv_store: KeyValueStore, *, key: str = STORE_KEY, strict: bool = True) -> None:
        self._kv_store = kv_store
        self._key = key
        self._strict = strict
        self._records: List[ExpenseRecord] = []
        self._observers: List[Observer] = []
        self._error_observers: List[ErrorObserver] = []
        self.load()  # Hydrate in-memory sequence from persistence on construction.

    # Public API -----------------------------------------------------------
    @property
    def items(self) -> Tuple[ExpenseRecord, ...]:
        return tuple(self._records)

    @property
    def strict(self) -> bool:
        return self._strict

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ExpenseRecord]:
        return iter(tuple(self._records))

    def total(self) -> Decimal:
        return sum((record.amount for record in self._records), start=Decimal("0"))

    def load(self) -> None:
        """Replace the in-memory sequence with the persisted one, or empty it."""
        try:
            raw = self._kv_store.get(self._key)
            records = decode_records(raw) if raw is not None else None
        except (DecodeError, PersistenceError):
            # Corrupt and unreadable data are treated exactly like a first run.
            records = None

        if records is None:
            logger.info("No stored expenses under %r; starting empty", self._key)
            records = []
        self._records = records
        self._notify()

    def add(self, record: ExpenseRecord) -> ExpenseRecord:
        self._records.append(record)
        self.persist()
        self._notify()
        return record

    def remove_at(self, offsets: Iterable[int]) -> List[ExpenseRecord]:
        """Remove records at zero-based offsets computed against the current sequence."""
        requested = set(offsets)
        size = len(self._records)
        invalid = {
            offset for offset in requested
            if not isinstance(offset, int) or isinstance(offset, bool) or not 0 <= offset < size
        }
        if invalid:
            if self._strict:
                raise OutOfRangeError(invalid, size)
            logger.warning("Ignoring out-of-range offsets %s (size %d)", invalid, size)
            requested -= invalid
        if not requested:
            return []

        removed = [self._records[offset] for offset in sorted(requested)]
        self._records = [
            record for offset, record in enumerate(self._records) if offset not in requested
        ]
        self.persist()
        self._notify()
        return removed

    def persist(self) -> bool:
        """Write the current sequence back; return False when the write failed."""
        try:
            self._kv_store.set(self._key, encode_records(self._records))
        except (PersistenceError, ValueError, TypeError) as exc:
            logger.warning("Could not persist %d expense(s): %s", len(self._records), exc)
            self._publish_error(exc)
            return False
        return True

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """Register ``callback(store)`` for every mutation; returns an unsubscribe function."""
        self._observers.append(callback)
        return lambda: self._discard(self._observers, callback)

    def subscribe_errors(self, callback: ErrorObserver) -> Callable[[], None]:
        self._error_observers.append(callback)
        return lambda: self._discard(self._error_observers, callback)

    # Internal helpers -----------------------------------------------------
    def _notify(self) -> None:
        for callback in list(self._observers):
            callback(self)

    def _publish_error(self, exc: Exception) -> None:
        for callback in list(self._error_observers):
            callback(exc)

    @staticmethod
    def _discard(callbacks: list, callback: Callable) -> None:
        if callback in callbacks:
            callbacks.remove(callback)
